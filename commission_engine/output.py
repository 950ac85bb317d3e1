"""
Output Builder

Renders ordered month buckets as spreadsheet text rows and as the API
response document.
"""

from decimal import Decimal
from typing import List, Sequence

from .calculators.allocator import quantize_money
from .models import SOURCE_DATE_FORMAT, CommissionedInstallment, MonthBucket

HEADERS = ["Emission", "Invoice No.", "Client", "Installment Value", "Commission Value"]


def to_money(value: Decimal) -> float:
    """Convert Decimal to float with 2 decimal places."""
    return round(float(value), 2)


def format_money(value: Decimal) -> str:
    return str(quantize_money(value))


def format_number(value: Decimal) -> str:
    """Invoice numbers print without a trailing ".0" when whole."""
    if value == value.to_integral_value():
        return str(int(value))
    return format(value.normalize(), "f")


class OutputBuilder:
    """Builds report rows and the final API response."""

    def rows(self, bucket: MonthBucket) -> List[List[str]]:
        """Text rows for one month worksheet, header excluded."""
        return [self._row(installment) for installment in bucket.installments]

    def build(self, buckets: Sequence[MonthBucket]) -> dict:
        """Construct the report document for ordered month buckets."""
        return {
            "months": [self._build_month(bucket) for bucket in buckets],
            "totals": {
                "installments": to_money(sum((b.total_installments for b in buckets), Decimal("0"))),
                "commissions": to_money(sum((b.total_commissions for b in buckets), Decimal("0"))),
            },
        }

    def _row(self, installment: CommissionedInstallment) -> List[str]:
        return [
            installment.emission_date.strftime(SOURCE_DATE_FORMAT),
            format_number(installment.number),
            installment.client,
            format_money(installment.installment_value),
            format_money(installment.commission_value),
        ]

    def _build_month(self, bucket: MonthBucket) -> dict:
        return {
            "label": bucket.label,
            "year": bucket.key.year,
            "month": bucket.key.month,
            "installments": [
                {
                    "emission_date": i.emission_date.isoformat(),
                    "number": format_number(i.number),
                    "client": i.client,
                    "due_date": i.due_date.isoformat(),
                    "installment_value": to_money(i.installment_value),
                    "commission_value": to_money(i.commission_value),
                }
                for i in bucket.installments
            ],
            "total_installments": to_money(bucket.total_installments),
            "total_commissions": to_money(bucket.total_commissions),
        }
