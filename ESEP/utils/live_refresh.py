"""
Refresh admin pages when the tables they show change.
The page body refetches everything on each run; the fragment only decides
when another run is needed.
"""

import os
import streamlit as st

from db.change_feed import change_feed

REFRESH_SECONDS = int(os.getenv("ESEP_REFRESH_SECONDS", 10))


def watch_tables(*tables: str):
    """Record the table versions this run rendered and poll for newer ones."""
    key = "rendered_versions:" + ",".join(tables)
    st.session_state[key] = change_feed.snapshot(tables)
    _poll_changes(tables, key)


@st.fragment(run_every=REFRESH_SECONDS)
def _poll_changes(tables, key):
    # Unsaved form input on the page is discarded by the rerun
    if change_feed.snapshot(tables) != st.session_state.get(key):
        st.rerun()
