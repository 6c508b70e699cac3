from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from crm_dashboard.config import THEME
from crm_dashboard.controllers.statistics import ChartSlice


@dataclass(frozen=True)
class Kpi:
    label: str
    value: str
    help: Optional[str] = None


def render_kpi_row(kpis: list[Kpi], per_row: int = 4) -> None:
    for start in range(0, len(kpis), per_row):
        row = kpis[start:start + per_row]
        cols = st.columns(per_row)
        for c, k in zip(cols, row):
            with c:
                st.markdown(
                    f"""
<div class="metric-card" title="{k.help or ''}">
  <div class="metric-label">{k.label}</div>
  <div class="metric-value">{k.value}</div>
</div>
                    """,
                    unsafe_allow_html=True,
                )


def slices_frame(slices: list[ChartSlice]) -> pd.DataFrame:
    return pd.DataFrame(
        {"name": [s.name for s in slices], "value": [s.value for s in slices], "color": [s.color for s in slices]}
    )


def apply_plotly_theme(fig: go.Figure) -> go.Figure:
    fig.update_layout(
        margin=dict(l=10, r=10, t=30, b=10),
        font=dict(family="Inter, system-ui, -apple-system, Segoe UI, Roboto, Arial, sans-serif", color=THEME["text_primary"]),
        paper_bgcolor=THEME["bg_card"],
        plot_bgcolor=THEME["bg_card"],
        legend=dict(orientation="h", yanchor="bottom", y=-0.15, xanchor="center", x=0.5),
    )
    return fig


def pie_chart(slices: Optional[list[ChartSlice]], empty_message: str, key: str) -> None:
    """Donut chart of `slices`, or `empty_message` when the series is absent."""
    if not slices:
        st.info(empty_message)
        return
    df = slices_frame(slices)
    fig = px.pie(
        df,
        names="name",
        values="value",
        color="name",
        color_discrete_map=dict(zip(df["name"], df["color"])),
        hole=0.45,
    )
    fig.update_traces(textinfo="label+percent")
    st.plotly_chart(apply_plotly_theme(fig), width="stretch", key=key)
