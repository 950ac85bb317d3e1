"""
Spreadsheet I/O

Reads invoices from the sales ledger workbook and writes the commission
report, one worksheet per month.
"""

import logging
from datetime import date, datetime
from decimal import Decimal
from pathlib import Path
from typing import Any, List, Optional, Sequence, Union
from zipfile import BadZipFile

import pandas as pd
import xlsxwriter
from openpyxl.utils.exceptions import InvalidFileException
from xlsxwriter.exceptions import XlsxWriterException

from .errors import OutputPathError, WorkbookError
from .models import SOURCE_DATE_FORMAT, Invoice, MonthBucket, to_decimal
from .output import HEADERS, OutputBuilder

logger = logging.getLogger(__name__)

DEFAULT_SHEET = "VENDAS"

# Source column layout
EMISSION_DATE_COLUMN = 0
INVOICE_NUMBER_COLUMN = 1
CLIENT_NAME_COLUMN = 4
PAYMENT_INTERVAL_COLUMN = 8
INVOICE_VALUE_COLUMN = 10


# =============================================================================
# READING
# =============================================================================

def read_invoices(source, sheet: str = DEFAULT_SHEET) -> List[Invoice]:
    """
    Read invoices from ``sheet`` of an xlsx workbook.

    ``source`` is a path or a binary file object. The first row is a header.
    Rows whose emission date is neither a date cell nor MM/DD/YYYY text are
    skipped.
    """
    name = getattr(source, "name", source)
    try:
        frame = pd.read_excel(source, sheet_name=sheet, header=None, dtype=object, engine="openpyxl")
    except (OSError, ValueError, BadZipFile, InvalidFileException) as e:
        raise WorkbookError(f"could not read worksheet {sheet!r} from {name}: {e}") from e

    invoices = []
    for row_number, values in enumerate(frame.itertuples(index=False, name=None), start=1):
        if row_number == 1:
            continue

        emission_date = _emission_date(_cell(values, EMISSION_DATE_COLUMN))
        if emission_date is None:
            logger.debug(f"Skipping row {row_number}: no usable emission date")
            continue

        invoices.append(Invoice(
            emission_date=emission_date,
            number=_number(_cell(values, INVOICE_NUMBER_COLUMN)),
            client=_text(_cell(values, CLIENT_NAME_COLUMN)),
            payment_interval=_text(_cell(values, PAYMENT_INTERVAL_COLUMN)),
            value=_number(_cell(values, INVOICE_VALUE_COLUMN)),
        ))

    logger.info(f"Read {len(invoices)} invoices from {name} [{sheet}]")
    return invoices


def _cell(values: tuple, index: int) -> Any:
    if index >= len(values):
        return None
    value = values[index]
    if not isinstance(value, str) and pd.isna(value):
        return None
    return value


def _emission_date(value: Any) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return datetime.strptime(value.strip(), SOURCE_DATE_FORMAT).date()
        except ValueError:
            return None
    return None


def _number(value: Any) -> Decimal:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return to_decimal(value)
    return Decimal("0")


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


# =============================================================================
# WRITING
# =============================================================================

def ensure_output_path(path: Union[str, Path]) -> Path:
    """Create the output file if it does not exist yet."""
    output_path = Path(path)
    if not output_path.exists():
        try:
            output_path.touch()
        except OSError as e:
            raise OutputPathError(output_path, e) from e
        logger.info(f"successfully created {output_path}")
    return output_path


def write_report(target, buckets: Sequence[MonthBucket], builder: Optional[OutputBuilder] = None) -> None:
    """
    Write one worksheet per month bucket, in the given order.

    ``target`` is a path or a binary file object. Every cell is written as text.
    """
    builder = builder or OutputBuilder()
    in_memory = hasattr(target, "write")
    workbook = xlsxwriter.Workbook(target if in_memory else str(target), {"in_memory": in_memory})

    for bucket in buckets:
        worksheet = workbook.add_worksheet(bucket.label)

        for column, header in enumerate(HEADERS):
            worksheet.write_string(0, column, header)

        for row, values in enumerate(builder.rows(bucket), start=1):
            for column, value in enumerate(values):
                worksheet.write_string(row, column, value)

    try:
        workbook.close()
    except (OSError, XlsxWriterException) as e:
        raise OutputPathError(getattr(target, "name", target), e) from e

    logger.info(f"Wrote {len(buckets)} month worksheets")
