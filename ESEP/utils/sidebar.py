"""
Shared sidebar renderer for all admin pages.
Displays admin info, role badge, and logout button.
"""

import streamlit as st

from core.models.roles import ROLE_DESCRIPTIONS
from utils.auth_guard import handle_logout


def render_sidebar(session):
    """Render the common sidebar on every admin page."""
    with st.sidebar:
        st.markdown("## ESEP Admin Panel")
        st.markdown("---")

        st.markdown(f"**{session.username}**")
        st.caption(f"Role: {session.role.value}")
        st.caption(ROLE_DESCRIPTIONS[session.role])

        if not session.capabilities.can_mutate:
            st.info("Read-only access")

        st.markdown("---")

        if st.button("Logout", use_container_width=True, key="sidebar_logout"):
            handle_logout()
