import logging
from contextlib import contextmanager
from typing import Optional

import altair as alt
import streamlit as st

from taps.charts import placeholder_chart, series_chart
from taps.config import DashboardSettings, normalize_settings
from taps.pipeline import PlotResult, PlotState, run_preset

alt.data_transformers.disable_max_rows()
logger = logging.getLogger(__name__)


# ---------- UI / layout helpers ----------
def inject_base_styles():
    if st.session_state.get("_base_css_injected"):
        return
    st.markdown(
        """
        <style>
        .app-top-bar {padding: 6px 0 4px;border-bottom: 1px solid #e5e7eb;margin-bottom: 10px;}
        .app-top-bar .page-title {font-size: 1.6rem;font-weight: 700;color: #111827;}
        .card {border: 1px solid #e5e7eb;border-radius: 12px;padding: 16px;background: #ffffff;
               box-shadow: 0 1px 2px rgba(0,0,0,0.04); margin-bottom: 12px;}
        .card-title {font-weight: 600;font-size: 1.0rem;color: #111827;margin-bottom: 8px;}
        .app-footer {color: #6b7280;font-size: 0.85rem;border-top: 1px solid #e5e7eb;padding-top: 6px;margin-top: 16px;}
        </style>
        """,
        unsafe_allow_html=True,
    )
    st.session_state["_base_css_injected"] = True


@contextmanager
def card(title: str):
    container = st.container()
    container.markdown(f"<div class='card'><div class='card-title'>{title}</div>", unsafe_allow_html=True)
    body = container.container()
    with body:
        yield body
    container.markdown("</div>", unsafe_allow_html=True)


@st.cache_resource
def get_settings() -> DashboardSettings:
    return normalize_settings()


def plot_preset(settings: DashboardSettings, key: str) -> Optional[PlotResult]:
    preset = settings.preset(key)
    if preset is None:
        return None
    logger.info("Plot requested for preset %r", key)
    with st.spinner(f"Loading {preset.label}…"):
        return run_preset(settings, key)


def render_result(result: Optional[PlotResult], settings: DashboardSettings):
    if result is None:
        st.altair_chart(placeholder_chart(settings), use_container_width=True)
        return
    if result.state is PlotState.FAILED:
        st.error(f"{type(result.error).__name__}: {result.error}")
        return
    if result.bounds is None:
        st.info("The sheet contained no plottable rows.")
    chart = series_chart(result.series, result.bounds, mark=result.request.mark, settings=settings)
    st.altair_chart(chart, use_container_width=True)
    st.caption(f"{len(result.series)} points from sheet '{result.request.sheet_name}'")


# ---------- UI setup ----------
st.set_page_config(page_title="TAPS", layout="wide")
inject_base_styles()
st.markdown("<div class='app-top-bar'><div class='page-title'>TAPS</div></div>", unsafe_allow_html=True)

settings = get_settings()

with st.sidebar:
    st.markdown("### Sensors")
    for preset in settings.presets:
        if st.button(preset.label, key=f"preset_{preset.key}", use_container_width=True):
            st.session_state["plot_result"] = plot_preset(settings, preset.key)
    st.markdown("---")
    st.caption(f"Source: {settings.workbook_url}")

with card("Chart"):
    render_result(st.session_state.get("plot_result"), settings)

st.markdown("<div class='app-footer'>Sensor data is fetched on demand from the static data host.</div>", unsafe_allow_html=True)
