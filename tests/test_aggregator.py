"""
Unit Tests for the Monthly Aggregator

Tests verify month bucketing and chronological ordering of months.
"""

import pytest
from datetime import date
from decimal import Decimal
from commission_engine.calculators.aggregator import MonthlyAggregator
from commission_engine.errors import MonthOrderingError
from commission_engine.models import CommissionedInstallment, MonthKey


def make_installment(due_date, client="ACME LTDA"):
    return CommissionedInstallment(
        emission_date=date(2024, 1, 10),
        number=Decimal('1'),
        client=client,
        installment_value=Decimal('100'),
        commission_value=Decimal('7.00'),
        due_date=due_date,
    )


class TestAggregate:
    """Test grouping of installments by due month."""

    @pytest.fixture
    def aggregator(self):
        return MonthlyAggregator()

    def test_same_month_shares_a_bucket(self, aggregator):
        """Days do not matter, only month and year."""
        first = make_installment(date(2024, 3, 1), "A")
        last = make_installment(date(2024, 3, 31), "B")

        buckets = aggregator.aggregate([first, last])

        assert list(buckets) == [MonthKey(2024, 3)]
        assert buckets[MonthKey(2024, 3)] == [first, last]

    def test_same_month_different_year(self, aggregator):
        buckets = aggregator.aggregate([
            make_installment(date(2024, 3, 1)), make_installment(date(2025, 3, 1))
        ])

        assert set(buckets) == {MonthKey(2024, 3), MonthKey(2025, 3)}

    def test_every_installment_in_exactly_one_bucket(self, aggregator):
        installments = [
            make_installment(date(2024, 2, 9)),
            make_installment(date(2024, 3, 10)),
            make_installment(date(2024, 3, 20)),
            make_installment(date(2024, 4, 9)),
        ]
        buckets = aggregator.aggregate(installments)

        assert sum(len(v) for v in buckets.values()) == len(installments)
        for key, members in buckets.items():
            assert all(MonthKey.of(i.due_date) == key for i in members)

    def test_merge_keeps_insertion_order(self, aggregator):
        """Later installments append to existing buckets."""
        buckets = aggregator.aggregate([make_installment(date(2024, 3, 20), "first")])
        aggregator.merge(buckets, [make_installment(date(2024, 3, 5), "second")])

        assert [i.client for i in buckets[MonthKey(2024, 3)]] == ["first", "second"]


class TestOrdering:
    """Test chronological ordering of month buckets."""

    def test_order_keys(self):
        buckets = {MonthKey(2024, 3): [], MonthKey(2025, 1): [], MonthKey(2023, 12): []}

        assert MonthlyAggregator.order(buckets) == [
            MonthKey(2023, 12), MonthKey(2024, 3), MonthKey(2025, 1)
        ]

    def test_order_labels_is_chronological_not_alphabetical(self):
        labels = ["March 2024", "January 2025", "December 2023"]

        assert MonthlyAggregator.order_labels(labels) == [
            "December 2023", "March 2024", "January 2025"
        ]

    def test_unparseable_label_is_fatal(self):
        with pytest.raises(MonthOrderingError):
            MonthlyAggregator.order_labels(["March 2024", "Marco 2024"])

    def test_label_without_year_is_fatal(self):
        with pytest.raises(MonthOrderingError):
            MonthlyAggregator.order_labels(["March"])


class TestMonthKey:
    """Test month key rendering and parsing."""

    def test_label(self):
        assert MonthKey(2024, 3).label == "March 2024"

    def test_of_date(self):
        assert MonthKey.of(date(2024, 2, 29)) == MonthKey(2024, 2)

    def test_parse_label(self):
        assert MonthKey.parse("September 2024") == MonthKey(2024, 9)

    def test_parse_rejects_short_year(self):
        with pytest.raises(MonthOrderingError):
            MonthKey.parse("March 24")
