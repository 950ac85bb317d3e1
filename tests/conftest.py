"""Shared fixtures: builds sales ledger workbooks in the source layout."""

import io
from datetime import datetime

import pytest
import xlsxwriter

LEDGER_HEADER = [
    "Emissao", "NF", "Serie", "Cod", "Cliente", "Cidade", "UF",
    "Vendedor", "Cond. Pagto", "Qtd", "Valor",
]


def _write_rows(target, rows, sheet="VENDAS"):
    workbook = xlsxwriter.Workbook(target, {"in_memory": not isinstance(target, str)})
    worksheet = workbook.add_worksheet(sheet)
    date_format = workbook.add_format({"num_format": "mm/dd/yyyy"})

    for column, header in enumerate(LEDGER_HEADER):
        worksheet.write_string(0, column, header)

    for row, (emission, number, client, interval, value) in enumerate(rows, start=1):
        if isinstance(emission, datetime):
            worksheet.write_datetime(row, 0, emission, date_format)
        elif emission is not None:
            worksheet.write_string(row, 0, emission)
        worksheet.write_number(row, 1, number)
        worksheet.write_string(row, 4, client)
        worksheet.write_string(row, 8, interval)
        worksheet.write_number(row, 10, value)

    workbook.close()


@pytest.fixture
def sample_rows():
    """A small ledger: a date cell, a text date, and two rows without dates."""
    return [
        (datetime(2024, 1, 10), 1001, "ACME LTDA", "30/60/90", 1000),
        ("01/15/2024", 1002, "BETA SA", "ANTECIPADO / A VISTA [2]", 500),
        ("not a date", 1003, "GAMMA ME", "30", 200),
        (None, 1004, "DELTA EIRELI", "30", 300),
    ]


@pytest.fixture
def write_ledger(tmp_path):
    """Factory writing ledger rows to an xlsx file and returning its path."""

    def _write(rows, sheet="VENDAS", name="ledger.xlsx"):
        path = tmp_path / name
        _write_rows(str(path), rows, sheet)
        return path

    return _write


@pytest.fixture
def ledger_bytes():
    """Factory writing ledger rows to an in-memory xlsx and returning the bytes."""
    def _write(rows, sheet="VENDAS"):
        buffer = io.BytesIO()
        _write_rows(buffer, rows, sheet)
        return buffer.getvalue()

    return _write
