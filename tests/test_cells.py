from datetime import datetime, time, timedelta

import pytest

from taps.cells import EMPTY_CELL, CellKind, RawCell, cell_at, from_value


@pytest.mark.parametrize(
    "cell, expected",
    [
        (RawCell(CellKind.INTEGER, 7), 7.0),
        (RawCell(CellKind.FLOAT, 2.25), 2.25),
        (RawCell(CellKind.DATETIME, 45000.5), 45000.5),
        (RawCell(CellKind.TEXT, "12"), None),
        (RawCell(CellKind.BOOLEAN, True), None),
        (RawCell(CellKind.DATETIME_TEXT, "2024-01-01T00:00:00"), None),
        (RawCell(CellKind.DURATION_TEXT, "PT1H"), None),
        (RawCell(CellKind.ERROR, "#DIV/0!"), None),
        (EMPTY_CELL, None),
    ],
)
def test_numeric_value_only_for_numeric_kinds(cell, expected):
    assert cell.numeric_value() == expected


def test_nan_float_has_no_numeric_value():
    assert RawCell(CellKind.FLOAT, float("nan")).numeric_value() is None


def test_from_value_tags_python_types():
    assert from_value(None).kind is CellKind.EMPTY
    assert from_value(True).kind is CellKind.BOOLEAN
    assert from_value(3).kind is CellKind.INTEGER
    assert from_value(3.5).kind is CellKind.FLOAT
    assert from_value("soil").kind is CellKind.TEXT
    assert from_value("   ").kind is CellKind.EMPTY
    assert from_value("#N/A").kind is CellKind.ERROR
    assert from_value("oops", data_type="e").kind is CellKind.ERROR
    assert from_value("2024-05-01T10:30:00").kind is CellKind.DATETIME_TEXT
    assert from_value("P1DT2H").kind is CellKind.DURATION_TEXT


def test_from_value_datetime_uses_serial_number():
    cell = from_value(datetime(2023, 3, 15, 12, 0))
    assert cell.kind is CellKind.DATETIME
    assert cell.value == pytest.approx(45000.5)

    assert from_value(time(6, 0)).value == pytest.approx(0.25)
    assert from_value(timedelta(days=1, hours=12)).value == pytest.approx(1.5)


def test_cell_at_pads_short_rows_with_empty():
    row = [RawCell(CellKind.INTEGER, 1)]
    assert cell_at(row, 0).numeric_value() == 1.0
    assert cell_at(row, 4) is EMPTY_CELL
