from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Any, Optional, Sequence

from openpyxl.utils.datetime import WINDOWS_EPOCH, to_excel


class CellKind(str, Enum):
    INTEGER = "integer"
    FLOAT = "float"
    TEXT = "text"
    BOOLEAN = "boolean"
    DATETIME = "datetime"
    DATETIME_TEXT = "datetime_text"
    DURATION_TEXT = "duration_text"
    ERROR = "error"
    EMPTY = "empty"


NUMERIC_KINDS = frozenset({CellKind.INTEGER, CellKind.FLOAT, CellKind.DATETIME})

ERROR_CODES = frozenset(
    {"#NULL!", "#DIV/0!", "#VALUE!", "#REF!", "#NAME?", "#NUM!", "#N/A", "#GETTING_DATA"}
)

_ISO_DATETIME = re.compile(r"^\d{4}-\d{2}-\d{2}(?:[T ]\d{2}:\d{2}(?::\d{2}(?:\.\d+)?)?)?(?:Z|[+-]\d{2}:?\d{2})?$")
_ISO_DURATION = re.compile(r"^-?P(?=\d|T\d)(?:\d+Y)?(?:\d+M)?(?:\d+W)?(?:\d+D)?(?:T(?:\d+H)?(?:\d+M)?(?:\d+(?:\.\d+)?S)?)?$")


@dataclass(frozen=True)
class RawCell:
    """A single spreadsheet value tagged with its cell kind.

    ``DATETIME`` cells hold the spreadsheet serial number (days since the
    workbook epoch, fraction = time of day), never a decoded calendar value.
    """

    kind: CellKind
    value: Any = None

    def numeric_value(self) -> Optional[float]:
        """Return the cell as a float, or None for kinds without numeric meaning."""
        if self.kind not in NUMERIC_KINDS:
            return None
        try:
            out = float(self.value)
        except (TypeError, ValueError):
            return None
        if math.isnan(out):
            return None
        return out

    @classmethod
    def empty(cls) -> "RawCell":
        return cls(CellKind.EMPTY)


EMPTY_CELL = RawCell.empty()

RawRow = Sequence[RawCell]


def classify_text(text: str) -> RawCell:
    stripped = text.strip()
    if stripped in ERROR_CODES:
        return RawCell(CellKind.ERROR, stripped)
    if _ISO_DATETIME.match(stripped):
        return RawCell(CellKind.DATETIME_TEXT, text)
    if _ISO_DURATION.match(stripped):
        return RawCell(CellKind.DURATION_TEXT, text)
    return RawCell(CellKind.TEXT, text)


def from_value(value: Any, data_type: Optional[str] = None, epoch: datetime = WINDOWS_EPOCH) -> RawCell:
    """Tag a value as read by openpyxl (``data_only=True``) with its cell kind.

    ``data_type`` is openpyxl's one-letter cell type; only ``"e"`` (error) is
    needed to tell error cells apart from ordinary text.
    """
    if value is None:
        return EMPTY_CELL
    if data_type == "e":
        return RawCell(CellKind.ERROR, str(value))
    # bool is a subclass of int
    if isinstance(value, bool):
        return RawCell(CellKind.BOOLEAN, value)
    if isinstance(value, int):
        return RawCell(CellKind.INTEGER, value)
    if isinstance(value, float):
        return RawCell(CellKind.FLOAT, value)
    if isinstance(value, (datetime, date, time, timedelta)):
        return RawCell(CellKind.DATETIME, float(to_excel(value, epoch=epoch)))
    if isinstance(value, str):
        if not value.strip():
            return EMPTY_CELL
        return classify_text(value)
    return RawCell(CellKind.TEXT, str(value))


def cell_at(row: RawRow, index: int) -> RawCell:
    if index < len(row):
        return row[index]
    return EMPTY_CELL
