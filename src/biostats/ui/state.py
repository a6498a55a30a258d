"""Session-state helpers for the Streamlit UI.

Only reads/writes ``st.session_state``.
"""
import streamlit as st

from biostats.ui.api_client import get_client
from biostats.ui.dashboard import DashboardController, DashboardState


def init_session() -> None:
    """Initialize session state variables."""
    if "dashboard_state" not in st.session_state:
        st.session_state["dashboard_state"] = DashboardState()
    if "initial_load_done" not in st.session_state:
        st.session_state["initial_load_done"] = False


def get_dashboard_state() -> DashboardState:
    init_session()
    return st.session_state["dashboard_state"]


def get_controller() -> DashboardController:
    """Return a controller bound to this session's client and state."""
    return DashboardController(get_client(), get_dashboard_state())


def needs_initial_load() -> bool:
    init_session()
    return not st.session_state["initial_load_done"]


def mark_initial_load_done() -> None:
    st.session_state["initial_load_done"] = True
