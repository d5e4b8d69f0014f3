"""Turn worksheet rows into a plottable (x, y) series.

Cells without a numeric value (text, booleans, errors, blanks, ISO text
dates) fall back to 0.0 instead of failing the plot. A row whose x and y
both end up exactly 0.0 is treated as an empty row and dropped, which also
drops genuine (0, 0) readings.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, NamedTuple, Optional, Tuple

import numpy as np
import pandas as pd

from taps.cells import RawRow, cell_at


class SeriesPoint(NamedTuple):
    x: float
    y: float
    # False when the cell had no numeric value and 0.0 was substituted.
    x_coerced: bool = True
    y_coerced: bool = True


@dataclass(frozen=True)
class Series:
    points: Tuple[SeriesPoint, ...] = ()
    caption: str = ""

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[SeriesPoint]:
        return iter(self.points)

    def __bool__(self) -> bool:
        return bool(self.points)

    def xy(self) -> List[Tuple[float, float]]:
        return [(p.x, p.y) for p in self.points]

    def to_frame(self) -> pd.DataFrame:
        """Return the points as a DataFrame with float32 ``x``/``y`` columns."""
        return pd.DataFrame(
            {
                "x": np.array([p.x for p in self.points], dtype=np.float32),
                "y": np.array([p.y for p in self.points], dtype=np.float32),
                "x_coerced": [p.x_coerced for p in self.points],
                "y_coerced": [p.y_coerced for p in self.points],
            }
        )


def _as_f32(value: Optional[float]) -> Tuple[float, bool]:
    if value is None:
        return 0.0, False
    return float(np.float32(value)), True


def extract_series(
    rows: Iterable[RawRow],
    name_column: int,
    value_column: int,
    *,
    caption: str = "",
    strict: bool = False,
) -> Series:
    """Extract (x, y) points from ``rows``.

    ``name_column`` supplies x and ``value_column`` supplies y. Rows too
    short to hold the value column are skipped. With ``strict=True`` points
    that needed the 0.0 fallback on either axis are dropped as well.
    """
    if name_column < 0 or value_column < 0:
        raise ValueError("Column indices must be non-negative")

    points: List[SeriesPoint] = []
    for row in rows:
        if len(row) <= value_column:
            continue
        x, x_ok = _as_f32(cell_at(row, name_column).numeric_value())
        y, y_ok = _as_f32(cell_at(row, value_column).numeric_value())
        if x == 0.0 and y == 0.0:
            continue
        if strict and not (x_ok and y_ok):
            continue
        points.append(SeriesPoint(x, y, x_ok, y_ok))
    return Series(points=tuple(points), caption=caption)
