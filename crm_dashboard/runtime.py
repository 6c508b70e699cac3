"""
Per-browser-session wiring.

One AuthSession + ApiClient per Streamlit session, built once and kept in
`st.session_state` so reruns reuse the same HTTP connection pool.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, MutableMapping, Optional

import streamlit as st

from crm_dashboard.auth import AuthSession, Navigator, TokenStore
from crm_dashboard.components.feedback import StreamlitNotifier
from crm_dashboard.config import AppConfig
from crm_dashboard.data.client import ApiClient, get_api_client

RUNTIME_KEY = "runtime"
VIEW_CONTROLLERS = {"statistics": "statistics_controller", "unassigned": "unassigned_controller"}
CONTROLLER_KEYS = tuple(VIEW_CONTROLLERS.values())
CURRENT_VIEW_KEY = "current_view"


@dataclass(frozen=True)
class Runtime:
    cfg: AppConfig
    auth: AuthSession
    client: ApiClient
    notifier: StreamlitNotifier


def get_runtime(cfg: AppConfig) -> Runtime:
    rt = st.session_state.get(RUNTIME_KEY)
    if rt is None:
        auth = AuthSession(TokenStore(st.session_state), Navigator(st.session_state, cfg.login_path))
        rt = Runtime(cfg=cfg, auth=auth, client=get_api_client(cfg, auth), notifier=StreamlitNotifier())
        st.session_state[RUNTIME_KEY] = rt
    return rt


def reset_controllers() -> None:
    """Drop view state so the next sign-in mounts every view fresh."""
    st.session_state.pop(CURRENT_VIEW_KEY, None)
    for key in CONTROLLER_KEYS:
        st.session_state.pop(key, None)


def enter_view(view: str, state: Optional[MutableMapping[str, Any]] = None) -> bool:
    """
    Record the selected view. Switching to a different view drops its
    controller so the page mounts again and refetches. Returns True on a switch.
    """
    state = st.session_state if state is None else state
    if state.get(CURRENT_VIEW_KEY) == view:
        return False
    state[CURRENT_VIEW_KEY] = view
    key = VIEW_CONTROLLERS.get(view)
    if key is not None:
        state.pop(key, None)
    return True
