from __future__ import annotations

from typing import Any, Dict, Optional

import altair as alt

from taps.bounds import AxisBounds
from taps.config import DashboardSettings
from taps.series import Series, SeriesPoint

alt.data_transformers.disable_max_rows()

PLACEHOLDER_CAPTION = "y=x^2"


def to_vega_spec(chart: alt.Chart) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()


def placeholder_series() -> Series:
    """Parabola shown on the canvas before any sensor data is requested."""
    points = []
    for i in range(-50, 51):
        x = i / 50.0
        points.append(SeriesPoint(x, x * x))
    return Series(points=tuple(points), caption=PLACEHOLDER_CAPTION)


def series_chart(
    series: Series,
    bounds: Optional[AxisBounds],
    *,
    caption: Optional[str] = None,
    mark: str = "line",
    settings: Optional[DashboardSettings] = None,
) -> alt.Chart:
    settings = settings or DashboardSettings()
    if bounds is not None:
        x_domain, y_domain = bounds.x_domain, bounds.y_domain
    else:
        x_domain, y_domain = list(settings.fallback_x_range), list(settings.fallback_y_range)

    base = alt.Chart(series.to_frame(), title=caption if caption is not None else series.caption)
    if mark == "area":
        base = base.mark_area(opacity=0.6, line=True)
    else:
        base = base.mark_line(color="red")
    return base.encode(
        x=alt.X("x:Q", title=None, scale=alt.Scale(domain=x_domain, nice=False)),
        y=alt.Y("y:Q", title=None, scale=alt.Scale(domain=y_domain, nice=False)),
        tooltip=[alt.Tooltip("x:Q", format=",.3f"), alt.Tooltip("y:Q", format=",.3f")],
    )


def placeholder_chart(settings: Optional[DashboardSettings] = None) -> alt.Chart:
    settings = settings or DashboardSettings()
    return series_chart(placeholder_series(), None, settings=settings)
