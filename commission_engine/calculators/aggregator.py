"""
Monthly Aggregator

Groups installments by the calendar month they fall due in and orders the
months chronologically.
"""

from typing import Dict, Iterable, List

from ..models import CommissionedInstallment, MonthKey


class MonthlyAggregator:
    """Buckets installments by due month."""

    def aggregate(
        self,
        installments: Iterable[CommissionedInstallment]
    ) -> Dict[MonthKey, List[CommissionedInstallment]]:
        """Group installments by due month, keeping production order inside each bucket."""
        buckets: Dict[MonthKey, List[CommissionedInstallment]] = {}
        self.merge(buckets, installments)
        return buckets

    @staticmethod
    def merge(
        buckets: Dict[MonthKey, List[CommissionedInstallment]],
        installments: Iterable[CommissionedInstallment]
    ) -> None:
        """Append installments to an existing bucket mapping, creating buckets on first use."""
        for installment in installments:
            buckets.setdefault(MonthKey.of(installment.due_date), []).append(installment)

    @staticmethod
    def order(buckets: Dict[MonthKey, List[CommissionedInstallment]]) -> List[MonthKey]:
        """Month keys in chronological order."""
        return sorted(buckets)

    @staticmethod
    def order_labels(labels: Iterable[str]) -> List[str]:
        """
        Order rendered month labels chronologically.

        Each label is parsed back into a MonthKey; a label that does not
        parse raises MonthOrderingError.
        """
        keyed = [(MonthKey.parse(label), label) for label in labels]
        return [label for _, label in sorted(keyed)]
