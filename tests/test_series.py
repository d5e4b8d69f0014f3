import pytest

from taps.cells import EMPTY_CELL, CellKind, RawCell
from taps.series import Series, SeriesPoint, extract_series


def I(v):
    return RawCell(CellKind.INTEGER, v)


def F(v):
    return RawCell(CellKind.FLOAT, v)


def T(v):
    return RawCell(CellKind.TEXT, v)


def D(v):
    return RawCell(CellKind.DATETIME, v)


def test_short_rows_are_skipped():
    rows = [[T("A")], [I(1), F(2.0)]]
    series = extract_series(rows, 0, 1)
    assert series.xy() == [(1.0, 2.0)]


def test_rows_where_both_axes_are_zero_are_dropped():
    rows = [
        [EMPTY_CELL, EMPTY_CELL],
        [I(0), F(0.0)],
        [T("Day"), T("Moisture")],
        [I(5), F(1.5)],
    ]
    assert extract_series(rows, 0, 1).xy() == [(5.0, 1.5)]


def test_uncoercible_x_defaults_to_zero_and_is_kept():
    series = extract_series([[T("foo"), F(3.5)]], 0, 1)
    assert series.xy() == [(0.0, 3.5)]
    point = series.points[0]
    assert point.x_coerced is False
    assert point.y_coerced is True


def test_uncoercible_y_defaults_to_zero_and_is_kept():
    series = extract_series([[I(4), RawCell(CellKind.ERROR, "#REF!")]], 0, 1)
    assert series.xy() == [(4.0, 0.0)]
    assert series.points[0].y_coerced is False


def test_datetime_serial_used_as_x():
    series = extract_series([[D(45000.5), F(12.0)]], 0, 1)
    assert series.xy() == [(45000.5, 12.0)]


def test_order_is_preserved_without_dedup():
    rows = [[I(3), F(1.0)], [I(1), F(2.0)], [I(3), F(1.0)], [I(2), F(5.0)]]
    assert extract_series(rows, 0, 1).xy() == [(3.0, 1.0), (1.0, 2.0), (3.0, 1.0), (2.0, 5.0)]


def test_columns_can_be_any_index():
    rows = [[T("plot-a"), F(8.0), I(10)], [T("plot-b"), F(9.0), I(11)]]
    assert extract_series(rows, 2, 1).xy() == [(10.0, 8.0), (11.0, 9.0)]


def test_name_column_beyond_row_counts_as_empty():
    rows = [[F(2.0), F(3.0)]]
    assert extract_series(rows, 5, 1).xy() == [(0.0, 3.0)]


def test_values_are_narrowed_to_float32():
    series = extract_series([[F(0.1), F(1.0)]], 0, 1)
    x = series.points[0].x
    assert x != 0.1
    assert x == pytest.approx(0.1, rel=1e-7)


def test_strict_mode_drops_fallback_points():
    rows = [[T("foo"), F(3.5)], [I(1), F(2.0)]]
    assert extract_series(rows, 0, 1, strict=True).xy() == [(1.0, 2.0)]


def test_extract_is_idempotent():
    rows = [[I(1), F(2.0)], [T("x"), F(1.0)], [EMPTY_CELL, EMPTY_CELL]]
    assert extract_series(rows, 0, 1) == extract_series(rows, 0, 1)


def test_empty_input_gives_empty_series():
    series = extract_series([], 0, 1, caption="nothing")
    assert len(series) == 0
    assert not series
    assert series.caption == "nothing"


def test_negative_column_rejected():
    with pytest.raises(ValueError):
        extract_series([[I(1), I(2)]], -1, 1)


def test_to_frame_uses_float32_columns():
    series = Series(points=(SeriesPoint(1.0, 2.0), SeriesPoint(3.0, 4.0, False, True)))
    df = series.to_frame()
    assert list(df.columns) == ["x", "y", "x_coerced", "y_coerced"]
    assert str(df["x"].dtype) == "float32"
    assert df["x_coerced"].tolist() == [True, False]
