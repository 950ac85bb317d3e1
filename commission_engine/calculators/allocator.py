"""
Commission Allocator

Splits an invoice into dated installments and computes the commission
owed on each one.
"""

from datetime import timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Tuple

from ..models import (
    CommissionedInstallment, Immediate, IntervalSpec, Invoice, Scheduled
)


def quantize_money(value: Decimal) -> Decimal:
    """Round to 2 decimal places, half up."""
    return value.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)


def commission_for(value: Decimal, rate: Decimal) -> Decimal:
    """rate x value / 100, rounded to cents."""
    return quantize_money(rate * value / Decimal('100'))


class CommissionAllocator:
    """Allocates invoice value and commission across installment months."""

    def allocate(self, invoice: Invoice, spec: IntervalSpec) -> Tuple[CommissionedInstallment, ...]:
        """
        Produce one CommissionedInstallment per installment of ``spec``.

        Immediate:
        - One installment for the full value, due 30 days after emission

        Scheduled:
        - One installment per offset, in listed order
        - Equal split of the value; the last installment absorbs the
          rounding remainder so the installments add up to the invoice value
        """
        if isinstance(spec, Immediate):
            return (self._installment(invoice, invoice.value, spec.rate, spec.offset_days),)

        if isinstance(spec, Scheduled):
            shares = self.split_value(invoice.value, len(spec.offsets))
            return tuple(
                self._installment(invoice, share, spec.rate, days)
                for share, days in zip(shares, spec.offsets)
            )

        raise TypeError(f"Unsupported interval spec: {spec!r}")

    @staticmethod
    def split_value(value: Decimal, count: int) -> List[Decimal]:
        """Split ``value`` into ``count`` shares that sum exactly to ``value``."""
        if count == 1:
            return [value]

        share = quantize_money(value / count)
        shares = [share] * (count - 1)
        shares.append(value - share * (count - 1))
        return shares

    def _installment(
        self,
        invoice: Invoice,
        value: Decimal,
        rate: Decimal,
        offset_days: int
    ) -> CommissionedInstallment:
        return CommissionedInstallment(
            emission_date=invoice.emission_date,
            number=invoice.number,
            client=invoice.client,
            installment_value=value,
            commission_value=commission_for(value, rate),
            due_date=invoice.emission_date + timedelta(days=offset_days),
        )
