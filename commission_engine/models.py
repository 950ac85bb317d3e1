"""
Domain Models for the Commission Engine

These dataclasses provide type-safe representations of invoices, parsed
payment intervals, installments and month buckets.
All monetary values use Decimal for precision.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Tuple, Union

from .errors import MonthOrderingError

DEFAULT_RATE = Decimal("7")
IMMEDIATE_OFFSET_DAYS = 30

# Fixed English names, independent of the process locale.
MONTH_NAMES = (
    "",
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

SOURCE_DATE_FORMAT = "%m/%d/%Y"


def to_decimal(value) -> Decimal:
    """Convert a number or numeric string into a Decimal.

    Raises ValueError (not InvalidOperation) so callers can treat it as
    ordinary bad input.
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid numeric value: {value!r}")
    try:
        result = Decimal(str(value).strip())
    except InvalidOperation as exc:
        raise ValueError(f"Invalid numeric value: {value!r}") from exc
    if not result.is_finite():
        raise ValueError(f"Invalid numeric value: {value!r}. Must be a finite number")
    return result


def parse_emission_date(value) -> date:
    """Parse an emission date given as a date, ISO text or MM/DD/YYYY text."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    for fmt in ("%Y-%m-%d", SOURCE_DATE_FORMAT):
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise ValueError(f"Invalid emission date: {value!r}. Expected YYYY-MM-DD or MM/DD/YYYY")


# =============================================================================
# INPUT MODELS
# =============================================================================


@dataclass(frozen=True)
class Invoice:
    """A sales invoice as read from the ledger."""

    emission_date: date
    number: Decimal
    client: str
    payment_interval: str
    value: Decimal

    @classmethod
    def from_dict(cls, data: dict) -> "Invoice":
        return cls(
            emission_date=parse_emission_date(data["emission_date"]),
            number=to_decimal(data["number"]),
            client=str(data.get("client") or ""),
            payment_interval=str(data.get("payment_interval") or ""),
            value=to_decimal(data["value"]),
        )


# =============================================================================
# PARSED PAYMENT INTERVALS
# =============================================================================


@dataclass(frozen=True)
class Immediate:
    """Paid up front: one installment 30 days after emission at the default rate."""

    offset_days: int = IMMEDIATE_OFFSET_DAYS
    rate: Decimal = DEFAULT_RATE


@dataclass(frozen=True)
class Scheduled:
    """One installment per day offset, all at the same commission rate."""

    offsets: Tuple[int, ...]
    rate: Decimal = DEFAULT_RATE

    def __post_init__(self):
        if not self.offsets:
            raise ValueError("Scheduled interval needs at least one offset")
        if any(days <= 0 for days in self.offsets):
            raise ValueError(f"Scheduled offsets must be positive days, got: {self.offsets}")


IntervalSpec = Union[Immediate, Scheduled]


# =============================================================================
# OUTPUT / RESULT MODELS
# =============================================================================


@dataclass(frozen=True)
class CommissionedInstallment:
    """One installment of an invoice together with the commission it earns."""

    emission_date: date
    number: Decimal
    client: str
    installment_value: Decimal
    commission_value: Decimal
    due_date: date


@dataclass(frozen=True, order=True)
class MonthKey:
    """A calendar month. Ordering follows (year, month)."""

    year: int
    month: int

    @property
    def label(self) -> str:
        return f"{MONTH_NAMES[self.month]} {self.year:04d}"

    @classmethod
    def of(cls, day: date) -> "MonthKey":
        return cls(year=day.year, month=day.month)

    @classmethod
    def parse(cls, label: str) -> "MonthKey":
        """Rebuild a MonthKey from a label such as "March 2024"."""
        parts = label.split()
        if len(parts) != 2 or parts[0] not in MONTH_NAMES[1:]:
            raise MonthOrderingError(f"Cannot parse month label: {label!r}")
        name, year = parts
        if len(year) != 4 or not year.isdigit():
            raise MonthOrderingError(f"Cannot parse month label: {label!r}")
        return cls(year=int(year), month=MONTH_NAMES.index(name))

    def __str__(self) -> str:
        return self.label


@dataclass(frozen=True)
class MonthBucket:
    """All installments falling due in one calendar month."""

    key: MonthKey
    installments: Tuple[CommissionedInstallment, ...] = field(default_factory=tuple)

    @property
    def label(self) -> str:
        return self.key.label

    @property
    def total_installments(self) -> Decimal:
        return sum((i.installment_value for i in self.installments), Decimal("0"))

    @property
    def total_commissions(self) -> Decimal:
        return sum((i.commission_value for i in self.installments), Decimal("0"))
