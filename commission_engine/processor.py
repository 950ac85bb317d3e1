"""
Report Assembler - Main Orchestrator

Coordinates the commission report pipeline through discrete, testable steps.
"""

import logging
from typing import Any, Dict, Iterable, List, Tuple

from .calculators import CommissionAllocator, MonthlyAggregator
from .errors import AllocationError, IntervalParseError
from .interval import IntervalParser
from .models import CommissionedInstallment, Invoice, MonthBucket, MonthKey
from .output import OutputBuilder

logger = logging.getLogger(__name__)


class ReportAssembler:
    """
    Main orchestrator for the commission report.

    For each invoice, in input order:
    1. Parse the payment interval
    2. Allocate installments and commissions
    3. Merge installments into month buckets

    Then, once:
    4. Order the months chronologically
    5. Freeze the buckets
    """

    def __init__(self):
        self.parser = IntervalParser()
        self.allocator = CommissionAllocator()
        self.aggregator = MonthlyAggregator()
        self.output_builder = OutputBuilder()

    def build(self, invoices: Iterable[Invoice]) -> Tuple[MonthBucket, ...]:
        """
        Build the ordered month buckets for a collection of invoices.

        Args:
            invoices: Invoices in ledger order

        Returns:
            Month buckets in chronological order

        Raises:
            AllocationError: if an invoice's payment interval cannot be parsed
        """
        buckets: Dict[MonthKey, List[CommissionedInstallment]] = {}
        count = 0

        for invoice in invoices:
            self.aggregator.merge(buckets, self.allocate(invoice))
            count += 1

        ordered = tuple(
            MonthBucket(key=key, installments=tuple(buckets[key]))
            for key in self.aggregator.order(buckets)
        )
        logger.debug(f"Allocated {count} invoices into {len(ordered)} months")
        return ordered

    def allocate(self, invoice: Invoice) -> Tuple[CommissionedInstallment, ...]:
        """Parse one invoice's interval and split it into installments."""
        try:
            spec = self.parser.parse(invoice.payment_interval)
        except IntervalParseError as e:
            raise AllocationError(invoice, str(e)) from e
        return self.allocator.allocate(invoice, spec)

    def build_from_dicts(self, records: Iterable[Dict[str, Any]]) -> Tuple[MonthBucket, ...]:
        """Build the report from JSON-style invoice records."""
        return self.build([Invoice.from_dict(record) for record in records])

    def process_from_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Process an ``{"invoices": [...]}`` payload into a report dictionary.

        Convenience method for API usage.
        """
        if not isinstance(data, dict) or not isinstance(data.get("invoices"), list):
            raise ValueError("'invoices' must be a list of invoice records")
        return self.output_builder.build(self.build_from_dicts(data["invoices"]))


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def build_report(invoices: Iterable[Invoice]) -> Tuple[MonthBucket, ...]:
    """Build ordered month buckets with a fresh assembler."""
    return ReportAssembler().build(invoices)


def process_invoices_from_json(json_input: str) -> str:
    """
    Process an invoices payload given as a JSON string and return JSON.
    Errors are reported in the returned document instead of raised.
    """
    import json

    try:
        input_data = json.loads(json_input)
        result = ReportAssembler().process_from_dict(input_data)
        return json.dumps(result, indent=2)

    except (ValueError, KeyError, TypeError) as e:
        error_response = {"error": str(e), "status": "validation_failed"}
        return json.dumps(error_response, indent=2)

    except Exception as e:
        error_response = {"error": str(e), "status": "failed"}
        return json.dumps(error_response, indent=2)
