from __future__ import annotations

import streamlit as st

from crm_dashboard.components.customer_card import render_customer_card
from crm_dashboard.components.feedback import render_error_panel
from crm_dashboard.controllers.unassigned import ASSIGN_PROMPT, UnassignedCustomersController
from crm_dashboard.runtime import Runtime

COLUMNS = 3


def _controller(rt: Runtime) -> UnassignedCustomersController:
    ctl = st.session_state.get("unassigned_controller")
    if ctl is None:
        ctl = UnassignedCustomersController(rt.client, rt.auth, rt.notifier)
        st.session_state["unassigned_controller"] = ctl
    return ctl


@st.dialog("Assign customer")
def _confirm_assign(ctl: UnassignedCustomersController, customer_user_id: str) -> None:
    st.write(ASSIGN_PROMPT)
    st.caption(f"Customer {customer_user_id}")
    yes, no = st.columns(2)
    if yes.button("Assign to me", type="primary", width="stretch"):
        with st.spinner("Assigning..."):
            ctl.assign(customer_user_id, confirm=lambda _prompt: True)
        st.rerun()
    if no.button("Cancel", width="stretch"):
        ctl.assign(customer_user_id, confirm=lambda _prompt: False)
        st.rerun()


def render(rt: Runtime) -> None:
    ctl = _controller(rt)
    if ctl.status == "idle":
        with st.spinner("Loading unassigned customers..."):
            ctl.mount()

    if ctl.error:
        if render_error_panel(ctl.error, retry_key="unassigned_retry"):
            with st.spinner("Loading unassigned customers..."):
                ctl.fetch()
            st.rerun()
        return

    head, search = st.columns([2, 1])
    head.subheader("Unassigned Customers")
    term = search.text_input(
        "Search",
        placeholder="Search by name, ID, or gender",
        label_visibility="collapsed",
        key="unassigned_search",
    )

    customers = ctl.filtered(term)
    if not customers:
        st.info("No unassigned customers found matching your search.")
        if term:
            st.caption("Try adjusting your search terms or check if all customers are assigned.")
        else:
            st.caption("All customers may already be assigned to employees.")
        return

    for start in range(0, len(customers), COLUMNS):
        cols = st.columns(COLUMNS)
        for col, customer in zip(cols, customers[start:start + COLUMNS]):
            with col:
                render_customer_card(customer, rt.cfg.media_base_url, rt.cfg.default_avatar_url)
                pending = ctl.is_pending(customer.user_id)
                if st.button(
                    "⏳ Assigning..." if pending else "➕ Assign to Me",
                    key=f"assign_{customer.user_id}",
                    disabled=pending,
                    width="stretch",
                ):
                    _confirm_assign(ctl, customer.user_id)
