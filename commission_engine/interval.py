"""
Payment Interval Parser

Turns the free-form payment-interval field of an invoice into an
IntervalSpec. Offsets and the commission-rate override are extracted by
separate pure functions.
"""

import re
from decimal import Decimal
from typing import List, Optional

from .errors import IntervalParseError
from .models import DEFAULT_RATE, Immediate, IntervalSpec, Scheduled, to_decimal

UPFRONT_MARKER = "ANTECIPADO / A VISTA [2]"

# Policy for intervals without a leading day-offset run.
UNPARSEABLE_INTERVAL_POLICY = Immediate()

_OFFSETS_RUN = re.compile(r"^(?:\d{1,3}/?)+")
_RATE_OVERRIDE = re.compile(r"(\d+(?:\.\d+)?)\s*%")

MAX_RATE = Decimal("100")


def extract_offsets(text: str) -> Optional[List[int]]:
    """
    Return the day offsets at the start of ``text``, or None if there are none.

    "30/60/90 DDL" -> [30, 60, 90]. A run that splits into an empty or
    zero offset ("30/60/", "30//60", "00") raises IntervalParseError.
    """
    match = _OFFSETS_RUN.match(text)
    if not match:
        return None

    offsets = []
    for piece in match.group(0).split("/"):
        if not piece.isdigit():
            raise IntervalParseError(text, f"offset {piece!r} is not a number of days")
        days = int(piece)
        if days <= 0:
            raise IntervalParseError(text, f"offset {piece!r} must be a positive number of days")
        offsets.append(days)
    return offsets


def extract_rate_override(text: str) -> Optional[Decimal]:
    """Return the first "<n>%" rate found anywhere in ``text``, or None."""
    match = _RATE_OVERRIDE.search(text)
    if not match:
        return None

    rate = to_decimal(match.group(1))
    if not (0 < rate <= MAX_RATE):
        raise IntervalParseError(text, f"commission rate {match.group(0)!r} must be between 0 and 100")
    return rate


class IntervalParser:
    """Parses payment-interval text into Immediate or Scheduled specs."""

    def parse(self, raw_text: str) -> IntervalSpec:
        text = (raw_text or "").strip()

        if text == UPFRONT_MARKER:
            return Immediate()

        offsets = extract_offsets(text)
        if offsets is None:
            return UNPARSEABLE_INTERVAL_POLICY

        rate = extract_rate_override(text)
        return Scheduled(
            offsets=tuple(offsets),
            rate=rate if rate is not None else DEFAULT_RATE,
        )


def parse_interval(raw_text: str) -> IntervalSpec:
    """Parse a payment-interval field with the default parser."""
    return IntervalParser().parse(raw_text)
