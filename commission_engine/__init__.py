"""
SALES COMMISSION REPORT ENGINE
Splits invoices into monthly installments and computes commissions.
"""

from .models import CommissionedInstallment, Invoice, MonthBucket, MonthKey
from .processor import ReportAssembler

__all__ = ['ReportAssembler', 'Invoice', 'CommissionedInstallment', 'MonthBucket', 'MonthKey']
