"""
Calculators Package

Provides the allocation and aggregation steps of the report pipeline.
"""

from .aggregator import MonthlyAggregator
from .allocator import CommissionAllocator

__all__ = [
    "CommissionAllocator",
    "MonthlyAggregator",
]
