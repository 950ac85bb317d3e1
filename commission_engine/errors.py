"""
Error types for the commission engine.

Every fatal condition of a report run derives from CommissionEngineError.
Input-shaped problems also derive from ValueError so callers that treat
ValueError as a validation failure keep working.
"""


class CommissionEngineError(Exception):
    """Base class for all fatal report errors."""


class IntervalParseError(CommissionEngineError, ValueError):
    """A payment-interval field holds offsets or a rate that cannot be parsed."""

    def __init__(self, raw_text: str, reason: str):
        self.raw_text = raw_text
        self.reason = reason
        super().__init__(f"Invalid payment interval {raw_text!r}: {reason}")


class AllocationError(CommissionEngineError, ValueError):
    """An invoice could not be split into installments."""

    def __init__(self, invoice, reason: str):
        self.invoice = invoice
        super().__init__(f"Cannot allocate invoice {invoice.number} ({invoice.client}): {reason}")


class MonthOrderingError(CommissionEngineError, ValueError):
    """A month label could not be turned back into a calendar month."""


class WorkbookError(CommissionEngineError):
    """The source workbook or worksheet could not be opened."""


class OutputPathError(CommissionEngineError):
    """The report destination could not be created or written."""

    def __init__(self, path, cause):
        self.path = path
        self.cause = cause
        super().__init__(f"could not create {path}: {cause}")
