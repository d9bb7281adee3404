"""
Authentication guard utilities for Streamlit pages.
Loads the admin session once per page run and enforces section access.
"""

import streamlit as st
from datetime import datetime, timedelta

from core.models.roles import Section
from core.services.authentication_service import AdminSession, SessionStore


SESSION_TIMEOUT_MINUTES = 30


def get_session_store() -> SessionStore:
    return SessionStore(st.session_state)


def get_current_session():
    """Return the AdminSession or None."""
    return get_session_store().current()


def is_logged_in() -> bool:
    """Check whether an admin session exists."""
    return get_current_session() is not None


def require_admin() -> AdminSession:
    """Stop page execution unless an admin is logged in; returns the session."""
    session = get_current_session()
    if session is None:
        st.warning("Please log in to continue.")
        st.stop()
    _check_session_timeout()
    return session


def require_section(section: Section) -> AdminSession:
    """Stop page execution if the admin's role cannot open this section."""
    session = require_admin()
    if not session.can_open(section):
        st.error("You do not have permission to access this section.")
        st.stop()
    return session


def handle_logout():
    """Logout the current admin and rerun into the public pages."""
    get_session_store().logout()
    st.session_state.pop("last_activity", None)
    st.toast("You have been successfully logged out.")
    st.rerun()


def _check_session_timeout():
    """Auto-logout if session has been idle too long."""
    last_activity = st.session_state.get("last_activity")
    if last_activity and datetime.now() - last_activity > timedelta(minutes=SESSION_TIMEOUT_MINUTES):
        handle_logout()
    else:
        st.session_state["last_activity"] = datetime.now()
