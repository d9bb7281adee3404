"""
Panchayath Page - Add, rename and remove panchayaths.
Roles: Super Admin, Local Admin
"""

import streamlit as st
import pandas as pd

from core.models.roles import Action, Section
from core.services.panchayath_service import PanchayathService
from utils.auth_guard import require_section
from utils.exceptions import PortalException
from utils.live_refresh import watch_tables
from utils.sidebar import render_sidebar

session = require_section(Section.PANCHAYATH)
render_sidebar(session)

st.title("Panchayath Management")
st.markdown("---")

watch_tables("panchayaths")

svc = PanchayathService()

if session.can(Action.CREATE):
    st.subheader("Add New Panchayath")
    with st.form("add_panchayath", clear_on_submit=True):
        c1, c2 = st.columns(2)
        name = c1.text_input("Panchayath Name", placeholder="Enter Panchayath name")
        district = c2.text_input("District", placeholder="Enter District name")
        if st.form_submit_button("Add Panchayath"):
            try:
                svc.create_panchayath(session, name, district)
                st.toast("Panchayath added successfully!")
                st.rerun()
            except PortalException as e:
                st.error(e.message)

st.subheader("Existing Panchayaths")
try:
    panchayaths = svc.list_panchayaths()
except PortalException as e:
    st.error(f"Failed to load panchayaths. {e.message}")
    st.stop()

if not panchayaths:
    st.info("No panchayaths added yet.")
    st.stop()

st.dataframe(
    pd.DataFrame([{"Panchayath Name": p.name, "District": p.district} for p in panchayaths]),
    use_container_width=True, hide_index=True,
)

manageable = [p for p in panchayaths if svc.row_actions(session, p)]
if not manageable:
    st.stop()

st.markdown("---")
selected = st.selectbox("Manage Panchayath", manageable, format_func=lambda p: f"{p.name} ({p.district})")
actions = svc.row_actions(session, selected)

if Action.UPDATE in actions:
    with st.form(f"edit_panchayath_{selected.id}"):
        e1, e2 = st.columns(2)
        new_name = e1.text_input("Panchayath Name", value=selected.name)
        new_district = e2.text_input("District", value=selected.district)
        if st.form_submit_button("Save Changes"):
            try:
                svc.update_panchayath(session, selected.id, {"name": new_name, "district": new_district})
                st.toast("Panchayath updated successfully!")
                st.rerun()
            except PortalException as e:
                st.error(e.message)

if Action.DELETE in actions:
    confirmed = st.checkbox(f"I confirm deleting {selected.name}", key=f"confirm_del_p_{selected.id}")
    if st.button("Delete Panchayath", type="primary", disabled=not confirmed, key=f"delete_p_{selected.id}"):
        try:
            svc.delete_panchayath(session, selected.id, confirmed=confirmed)
            st.toast("Panchayath deleted successfully!")
            st.rerun()
        except PortalException as e:
            st.error(e.message)
