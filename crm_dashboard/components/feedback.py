from __future__ import annotations

import html
from typing import Protocol

import streamlit as st


class Notifier(Protocol):
    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class StreamlitNotifier:
    """Transient notifications (toasts) for the current session."""

    def success(self, message: str) -> None:
        st.toast(message, icon="✅")

    def error(self, message: str) -> None:
        st.toast(message, icon="❌")


def error_panel_html(message: str) -> str:
    # message may carry server-provided text
    return f"""
<div class="callout callout-error">
  <div class="callout-title">Error</div>
  <div class="callout-body">{html.escape(message)}</div>
</div>
        """


def render_error_panel(message: str, retry_key: str) -> bool:
    """Persistent inline error with a manual Retry button. Returns True when clicked."""
    st.markdown(error_panel_html(message), unsafe_allow_html=True)
    return st.button("Retry", key=retry_key)
