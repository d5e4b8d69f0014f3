from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Tuple

from taps.errors import EmptySeriesError


@dataclass(frozen=True)
class AxisBounds:
    min_x: float
    max_x: float
    min_y: float
    max_y: float

    @property
    def x_domain(self) -> List[float]:
        return [self.min_x, self.max_x]

    @property
    def y_domain(self) -> List[float]:
        return [self.min_y, self.max_y]


def compute_bounds(series: Iterable[Tuple[float, float]]) -> AxisBounds:
    """Single-pass min/max over the x and y components of ``series``.

    Accepts a ``Series`` or any iterable of (x, y) pairs.
    """
    it = iter(series)
    try:
        first = next(it)
    except StopIteration:
        raise EmptySeriesError("Cannot derive axis bounds from an empty series") from None

    min_x = max_x = float(first[0])
    min_y = max_y = float(first[1])
    for point in it:
        x, y = float(point[0]), float(point[1])
        if x < min_x:
            min_x = x
        elif x > max_x:
            max_x = x
        if y < min_y:
            min_y = y
        elif y > max_y:
            max_y = y
    return AxisBounds(min_x=min_x, max_x=max_x, min_y=min_y, max_y=max_y)
