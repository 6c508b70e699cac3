from __future__ import annotations

from dataclasses import dataclass

import streamlit as st

from crm_dashboard.auth import AuthSession


@dataclass(frozen=True)
class SidebarState:
    view: str
    logout_clicked: bool


NAV_ITEMS = [
    ("📊 Bureau Overview", "statistics"),
    ("🧑‍🤝‍🧑 Unassigned Customers", "unassigned"),
]


def render_sidebar(auth: AuthSession) -> SidebarState:
    with st.sidebar:
        st.markdown("### 🗂️ Customer Dashboard")
        user = auth.user
        if user is not None:
            st.caption(f"Signed in as **{user.display_name}** ({auth.role})")

        labels = [l for l, _ in NAV_ITEMS]
        default_label = st.session_state.get("nav_label", labels[0])
        idx = labels.index(default_label) if default_label in labels else 0

        label = st.radio(
            "Nav",
            labels,
            index=idx,
            label_visibility="collapsed",
        )
        st.session_state["nav_label"] = label
        view = dict(NAV_ITEMS)[label]

        st.divider()
        logout_clicked = st.button("Logout", key="logout", width="stretch")

    return SidebarState(view=view, logout_clicked=logout_clicked)
