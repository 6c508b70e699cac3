from __future__ import annotations

import streamlit as st

from crm_dashboard.components.feedback import render_error_panel
from crm_dashboard.components.metrics import Kpi, pie_chart, render_kpi_row
from crm_dashboard.controllers.statistics import StatisticsController
from crm_dashboard.runtime import Runtime


def _controller(rt: Runtime) -> StatisticsController:
    ctl = st.session_state.get("statistics_controller")
    if ctl is None:
        ctl = StatisticsController(rt.client, rt.notifier)
        st.session_state["statistics_controller"] = ctl
    return ctl


def render(rt: Runtime) -> None:
    st.subheader("Bureau Overview")
    ctl = _controller(rt)

    if not ctl.mounted:
        with st.spinner("Loading bureau dashboard..."):
            ctl.mount()

    if ctl.error:
        if render_error_panel(f"Error: {ctl.error}", retry_key="statistics_retry"):
            with st.spinner("Loading bureau dashboard..."):
                ctl.load()
            st.rerun()
        return

    render_kpi_row([Kpi(c.title, c.value) for c in ctl.cards()])

    c1, c2, c3 = st.columns(3)
    with c1:
        st.markdown("**Gender Distribution**")
        st.caption("Total male vs. female customers")
        pie_chart(ctl.gender_distribution(), "No gender distribution data available.", key="gender_pie")
    with c2:
        st.markdown("**Male Customer Status**")
        st.caption("Live vs. offline male customers")
        pie_chart(ctl.male_status(), "No male customer status data available.", key="male_pie")
    with c3:
        st.markdown("**Female Customer Status**")
        st.caption("Live vs. offline female customers")
        pie_chart(ctl.female_status(), "No female customer status data available.", key="female_pie")
