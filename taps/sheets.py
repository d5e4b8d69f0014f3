from __future__ import annotations

import io
import logging
from contextlib import contextmanager
from typing import Iterator, List

from openpyxl import load_workbook
from openpyxl.workbook.workbook import Workbook

from taps.cells import RawCell, RawRow, from_value
from taps.errors import SheetNotFoundError, WorkbookError

logger = logging.getLogger(__name__)


@contextmanager
def open_workbook(payload: bytes) -> Iterator[Workbook]:
    """Open XLSX bytes read-only with cached formula values."""
    if not payload:
        raise WorkbookError("Workbook payload is empty")
    try:
        wb = load_workbook(io.BytesIO(payload), read_only=True, data_only=True)
    except Exception as exc:
        raise WorkbookError(f"Could not read workbook: {exc}") from exc
    try:
        yield wb
    finally:
        wb.close()


def list_sheets(payload: bytes) -> List[str]:
    with open_workbook(payload) as wb:
        return list(wb.sheetnames)


def read_sheet(payload: bytes, sheet_name: str) -> List[RawRow]:
    """Return every row of ``sheet_name`` as a list of typed cells.

    Rows are padded with empty cells to the sheet's stored dimension, so
    every row has the same length.
    """
    with open_workbook(payload) as wb:
        if sheet_name not in wb.sheetnames:
            raise SheetNotFoundError(sheet_name, list(wb.sheetnames))
        try:
            ws = wb[sheet_name]
            rows: List[RawRow] = []
            for row in ws.iter_rows():
                cells: List[RawCell] = [
                    from_value(cell.value, getattr(cell, "data_type", None), epoch=wb.epoch) for cell in row
                ]
                rows.append(cells)
        except Exception as exc:
            raise WorkbookError(f"Could not read sheet {sheet_name!r}: {exc}") from exc
    logger.debug("Read %d rows from sheet %r", len(rows), sheet_name)
    return rows
