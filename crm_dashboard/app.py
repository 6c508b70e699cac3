"""
Routing only.

All view logic lives in crm_dashboard/views/.
All env reads happen ONLY in config.py.
"""

from __future__ import annotations

import os
import sys

# Make the repo root importable when running:
#   streamlit run crm_dashboard/app.py
REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

import streamlit as st  # noqa: E402

from crm_dashboard.components.header import render_header  # noqa: E402
from crm_dashboard.components.sidebar import render_sidebar  # noqa: E402
from crm_dashboard.components.styles import apply_theme  # noqa: E402
from crm_dashboard.config import get_config  # noqa: E402
from crm_dashboard.logging_config import setup_logging  # noqa: E402
from crm_dashboard.runtime import enter_view, get_runtime, reset_controllers  # noqa: E402

from crm_dashboard.views import login, statistics, unassigned  # noqa: E402


def main() -> None:
    apply_theme()
    cfg = get_config()
    setup_logging(cfg.log_level, cfg.log_format)
    rt = get_runtime(cfg)

    if not rt.auth.is_authenticated or rt.auth.navigator.at_login:
        if rt.auth.is_authenticated:
            rt.auth.navigator.go("/dashboard")
            st.rerun()
        reset_controllers()
        login.render(rt)
        return

    state = render_sidebar(rt.auth)
    if state.logout_clicked:
        rt.auth.logout(rt.client)
        reset_controllers()
        st.rerun()

    user = rt.auth.user
    render_header(
        app_name="Customer Relationship Dashboard",
        subtitle="Bureau statistics and customer assignment",
        right_pill=f"{(rt.auth.role or '').title()} · {user.display_name if user else ''}",
    )

    # Opening a page (first time or switching back) counts as a mount
    enter_view(state.view)

    # Routing only
    if state.view == "statistics":
        statistics.render(rt)
    elif state.view == "unassigned":
        unassigned.render(rt)
    else:
        st.error("Unknown view")

    # A 401 or a failed guard during this run sent us to login
    if rt.auth.navigator.at_login:
        st.rerun()


if __name__ == "__main__":
    main()
