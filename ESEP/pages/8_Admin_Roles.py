"""
Admin Roles Page - Administrator accounts and their roles.
Roles: Super Admin
"""

import streamlit as st
import pandas as pd

from core.models.roles import Action, AdminRole, Section, ROLE_DESCRIPTIONS
from core.services.admin_user_service import AdminUserService
from utils.auth_guard import require_section
from utils.exceptions import PortalException
from utils.formatters import format_date, status_badge
from utils.live_refresh import watch_tables
from utils.sidebar import render_sidebar

session = require_section(Section.ADMINS)
render_sidebar(session)

st.title("Admin Role Management")
st.caption("Manage administrator accounts and their permissions")
st.markdown("---")

watch_tables("admin_users")

svc = AdminUserService()

try:
    admins = svc.list_admins(session)
except PortalException as e:
    st.error(f"Failed to load admin users. {e.message}")
    st.stop()

st.dataframe(pd.DataFrame([{
    "Username": a.username,
    "Role": a.role,
    "Permissions": a.permissions,
    "Status": status_badge(a.status.value),
    "Created": format_date(a.created_at),
} for a in admins]), use_container_width=True, hide_index=True)

manageable = [a for a in admins if svc.row_actions(session, a)]
if manageable:
    st.markdown("---")
    selected = st.selectbox("Manage Admin", manageable, format_func=lambda a: f"{a.username} ({a.role})")
    actions = svc.row_actions(session, selected)

    b1, b2 = st.columns(2)
    if Action.SET_STATUS in actions:
        label = "Deactivate" if selected.is_active else "Activate"
        if b1.button(label, key=f"toggle_admin_{selected.id}", use_container_width=True):
            try:
                new_status = svc.toggle_status(session, selected.id)
                st.toast(f"Admin {'activated' if new_status.value == 'active' else 'deactivated'} successfully.")
                st.rerun()
            except PortalException as e:
                st.error(e.message)

    if Action.DELETE in actions:
        with b2:
            confirmed = st.checkbox(f"I confirm deleting {selected.username}", key=f"confirm_a_{selected.id}")
            if st.button("Delete Admin", type="primary", disabled=not confirmed, key=f"delete_a_{selected.id}"):
                try:
                    svc.delete_admin(session, selected.id)
                    st.toast("Admin deleted successfully.")
                    st.rerun()
                except PortalException as e:
                    st.error(e.message)

    if Action.UPDATE in actions:
        editable_roles = [AdminRole.LOCAL_ADMIN.value, AdminRole.USER_ADMIN.value]
        with st.form(f"edit_admin_{selected.id}"):
            role = st.selectbox("Role", editable_roles,
                                index=editable_roles.index(selected.role) if selected.role in editable_roles else 0)
            permissions = st.text_input("Permissions", value=selected.permissions)
            if st.form_submit_button("Save Changes"):
                try:
                    svc.update_admin(session, selected.id, {"role": role, "permissions": permissions})
                    st.toast("Admin updated successfully.")
                    st.rerun()
                except PortalException as e:
                    st.error(e.message)

with st.expander("Add Admin"):
    with st.form("add_admin", clear_on_submit=True):
        username = st.text_input("Username")
        password = st.text_input("Password", type="password")
        role = st.selectbox("Role", [r.value for r in AdminRole])
        permissions = st.text_input("Permissions", placeholder="Defaults to the role description")
        if st.form_submit_button("Create Admin"):
            try:
                svc.create_admin(session, username, password, role, permissions)
                st.toast("Admin created successfully.")
                st.rerun()
            except PortalException as e:
                st.error(e.message)

st.markdown("---")
st.markdown("#### Role Permissions")
for role in AdminRole:
    st.markdown(f"**{role.value}:** {ROLE_DESCRIPTIONS[role]}")
