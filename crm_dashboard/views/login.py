from __future__ import annotations

import streamlit as st

from crm_dashboard.auth import ROLES
from crm_dashboard.exceptions import DashboardError, user_message
from crm_dashboard.logging_config import get_logger
from crm_dashboard.runtime import Runtime

logger = get_logger(__name__)

OTP_KEY = "login_otp_challenge"


def render(rt: Runtime) -> None:
    """Sign-in form; a second step asks for the OTP when the backend requests one."""
    _, center, _ = st.columns([1, 2, 1])
    with center:
        st.title("Sign in")
        challenge = st.session_state.get(OTP_KEY)

        with st.form("login_form"):
            role = st.selectbox("Role", ROLES, format_func=str.title, disabled=challenge is not None)
            identifier = st.text_input("User ID / email", disabled=challenge is not None)
            password = st.text_input("Password", type="password", disabled=challenge is not None)
            otp = None
            if challenge is not None:
                st.caption(f"Enter the one-time code sent to you (expires {challenge['expires_at']}).")
                otp = st.text_input("OTP")
            submitted = st.form_submit_button("Sign in", width="stretch")

        if challenge is not None and st.button("Start over"):
            st.session_state.pop(OTP_KEY, None)
            st.rerun()

        if not submitted:
            return

        if challenge is not None:
            role, identifier, password = challenge["role"], challenge["identifier"], challenge["password"]
        if not identifier or not password:
            st.error("User ID and password are required.")
            return

        try:
            result = rt.auth.login(rt.client, identifier, password, role, otp=otp or None)
        except DashboardError as e:
            logger.warning("Login failed for %s: %s", identifier, e)
            st.error(user_message(e, "Login failed. Please check your credentials."))
            return

        if result.requires_otp:
            st.session_state[OTP_KEY] = {
                "role": role,
                "identifier": identifier,
                "password": password,
                "otp_id": result.otp_id,
                "expires_at": result.expires_at,
            }
            st.rerun()

        st.session_state.pop(OTP_KEY, None)
        rt.auth.navigator.go("/dashboard")
        st.rerun()
