"""
Registrations Page - Search, filter, export and manage registrations.
Roles: all admin roles (User Admin is read-only)
"""

import streamlit as st
import pandas as pd

from core.models.roles import Action, Section
from core.services.category_service import CategoryService
from core.services.export_service import export_registrations, export_filename, XLSX_MIME
from core.services.panchayath_service import PanchayathService
from core.services.registration_service import RegistrationService, RegistrationFilter, filter_registrations
from utils.auth_guard import require_section
from utils.exceptions import PortalException
from utils.formatters import format_currency, format_date, status_badge
from utils.live_refresh import watch_tables
from utils.sidebar import render_sidebar

session = require_section(Section.REGISTRATIONS)
render_sidebar(session)

st.title("Registrations Management")
st.markdown("---")

watch_tables("registrations")

svc = RegistrationService()

try:
    registrations = svc.list_registrations()
    category_names = [c.name for c in CategoryService().list_public_categories()]
    panchayath_names = [p.name for p in PanchayathService().list_panchayaths()]
except PortalException as e:
    st.error(f"Failed to load registrations. {e.message}")
    st.stop()

# Filter options also include names only present on registrations
category_names = sorted(set(category_names) | {r.category for r in registrations})
panchayath_names = sorted(set(panchayath_names) | {r.panchayath for r in registrations})

f1, f2, f3 = st.columns([2, 1, 1])
search = f1.text_input("Search", placeholder="Search by name, mobile, customer ID or panchayath...")
category = f2.selectbox("Category", ["All Categories"] + category_names)
panchayath = f3.selectbox("Panchayath", ["All Panchayaths"] + panchayath_names)

criteria = RegistrationFilter(
    search=search,
    category=None if category == "All Categories" else category,
    panchayath=None if panchayath == "All Panchayaths" else panchayath,
)
filtered = filter_registrations(registrations, criteria)

c1, c2 = st.columns([3, 1])
c1.caption(f"Showing {len(filtered)} of {len(registrations)} registrations")
if session.can(Action.EXPORT) and filtered:
    c2.download_button(
        "Export XLSX",
        data=export_registrations(filtered),
        file_name=export_filename(),
        mime=XLSX_MIME,
        use_container_width=True,
    )

if not filtered:
    st.info("No registrations found matching your criteria.")
    st.stop()

df = pd.DataFrame([{
    "Customer ID": r.customer_id,
    "Name": r.name,
    "Category": r.category,
    "Mobile": r.mobile,
    "Panchayath": r.panchayath,
    "Ward": r.ward,
    "Fee": format_currency(r.fee_amount),
    "Status": status_badge(r.status.value),
    "Date": format_date(r.created_at),
} for r in filtered])
st.dataframe(df, use_container_width=True, hide_index=True)

# ===========================
# Manage - only for roles with row actions
# ===========================
manageable = [r for r in filtered if svc.row_actions(session, r)]
if not manageable:
    st.stop()

st.markdown("---")
st.subheader("Manage Registration")

selected = st.selectbox(
    "Registration", manageable,
    format_func=lambda r: f"{r.customer_id} - {r.name} ({status_badge(r.status.value)})",
)
actions = svc.row_actions(session, selected)

if Action.SET_STATUS in actions:
    status_cols = st.columns(len(svc.status_options(session, selected)))
    for col, target in zip(status_cols, svc.status_options(session, selected)):
        if col.button(f"Mark {status_badge(target.value)}", key=f"status_{selected.id}_{target.value}",
                      use_container_width=True):
            try:
                svc.set_status(session, selected.id, target)
                st.toast(f"Registration {selected.customer_id} {target.value}.")
                st.rerun()
            except PortalException as e:
                st.error(e.message)
else:
    st.caption(f"Status is {status_badge(selected.status.value)} and can no longer be changed.")

if Action.UPDATE in actions:
    with st.expander("Edit Details"):
        with st.form(f"edit_registration_{selected.id}"):
            name = st.text_input("Full Name", value=selected.name)
            address = st.text_area("Address", value=selected.address)
            mobile = st.text_input("Mobile Number", value=selected.mobile, max_chars=10)
            e1, e2 = st.columns(2)
            new_panchayath = e1.selectbox(
                "Panchayath", panchayath_names,
                index=panchayath_names.index(selected.panchayath) if selected.panchayath in panchayath_names else 0,
            )
            ward = e2.text_input("Ward", value=selected.ward)
            new_category = st.selectbox(
                "Category", category_names,
                index=category_names.index(selected.category) if selected.category in category_names else 0,
            )
            agent_details = st.text_input("Agent Details", value=selected.agent_details or "")
            if st.form_submit_button("Save Changes"):
                try:
                    svc.update_registration(session, selected.id, {
                        "name": name, "address": address, "mobile": mobile,
                        "panchayath": new_panchayath, "ward": ward,
                        "category": new_category, "agent_details": agent_details,
                    })
                    st.toast("Registration updated successfully!")
                    st.rerun()
                except PortalException as e:
                    st.error(e.message)

if Action.DELETE in actions:
    with st.expander("Delete Registration"):
        confirmed = st.checkbox(f"I confirm deleting {selected.customer_id}", key=f"confirm_del_{selected.id}")
        if st.button("Delete", type="primary", disabled=not confirmed, key=f"delete_{selected.id}"):
            try:
                svc.delete_registration(session, selected.id, confirmed=confirmed)
                st.toast("The registration has been removed successfully.")
                st.rerun()
            except PortalException as e:
                st.error(e.message)
