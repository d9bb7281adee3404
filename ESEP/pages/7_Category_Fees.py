"""
Category Fee & Image Page - Manage categories, fees, images, features and visibility.
Roles: Super Admin, Local Admin
"""

import streamlit as st
import pandas as pd

from core.models.roles import Action, Section
from core.services.category_service import CategoryService
from utils.auth_guard import require_section
from utils.exceptions import PortalException
from utils.formatters import format_currency, format_fee
from utils.live_refresh import watch_tables
from utils.sidebar import render_sidebar

session = require_section(Section.CATEGORIES)
render_sidebar(session)

st.title("Category Management")
st.markdown("---")

watch_tables("categories")

svc = CategoryService()

if session.can(Action.CREATE):
    with st.expander("Add Category"):
        with st.form("add_category", clear_on_submit=True):
            name = st.text_input("Category Name *")
            description = st.text_area("Description *")
            c1, c2 = st.columns(2)
            actual_fee = c1.number_input("Actual Fee (₹)", min_value=0.0, step=1.0)
            offer_fee = c2.number_input("Offer Fee (₹)", min_value=0.0, step=1.0)
            image = st.text_input("Image URL", placeholder="https://...")
            features = st.text_area("Features (one per line)")
            is_active = st.checkbox("Active", value=True)
            if st.form_submit_button("Add Category"):
                try:
                    svc.create_category(
                        session, name, description,
                        actual_fee=str(actual_fee), offer_fee=str(offer_fee),
                        image=image, features=svc.parse_features(features), is_active=is_active,
                    )
                    st.toast("Category added successfully!")
                    st.rerun()
                except PortalException as e:
                    st.error(e.message)

try:
    categories = svc.list_categories()
except PortalException as e:
    st.error(f"Failed to load categories. {e.message}")
    st.stop()

if not categories:
    st.info("No categories in the database. The public pages show the default catalogue.")
    st.stop()

st.dataframe(pd.DataFrame([{
    "Name": c.name,
    "Actual Fee": format_currency(c.actual_fee),
    "Offer Fee": format_fee(c.offer_fee),
    "Discount": f"{c.discount_percent}%",
    "Features": len(c.features),
    "Status": "Active" if c.is_active else "Inactive",
} for c in categories]), use_container_width=True, hide_index=True)

manageable = [c for c in categories if svc.row_actions(session, c)]
if not manageable:
    st.stop()

st.markdown("---")
selected = st.selectbox("Manage Category", manageable, format_func=lambda c: c.name)
actions = svc.row_actions(session, selected)

a1, a2 = st.columns(2)
if Action.SET_STATUS in actions:
    label = "Deactivate" if selected.is_active else "Activate"
    if a1.button(label, key=f"toggle_{selected.id}", use_container_width=True):
        try:
            now_active = svc.toggle_active(session, selected.id)
            st.toast(f"Category {'activated' if now_active else 'deactivated'} successfully!")
            st.rerun()
        except PortalException as e:
            st.error(e.message)

if Action.DELETE in actions:
    with a2:
        confirmed = st.checkbox("Are you sure you want to delete this category?", key=f"confirm_c_{selected.id}")
        if st.button("Delete Category", type="primary", disabled=not confirmed, key=f"delete_c_{selected.id}"):
            try:
                svc.delete_category(session, selected.id)
                st.toast("Category deleted successfully!")
                st.rerun()
            except PortalException as e:
                st.error(e.message)

if Action.UPDATE in actions:
    with st.form(f"edit_category_{selected.id}"):
        st.subheader(f"Edit {selected.name}")
        name = st.text_input("Category Name", value=selected.name)
        description = st.text_area("Description", value=selected.description)
        c1, c2 = st.columns(2)
        actual_fee = c1.number_input("Actual Fee (₹)", min_value=0.0, step=1.0, value=float(selected.actual_fee))
        offer_fee = c2.number_input("Offer Fee (₹)", min_value=0.0, step=1.0, value=float(selected.offer_fee))
        image = st.text_input("Image URL", value=selected.image or "")
        if selected.image:
            st.image(selected.image, width=240)
        features = st.text_area("Features (one per line)", value="\n".join(selected.features))
        if st.form_submit_button("Save Changes"):
            try:
                svc.update_category(session, selected.id, {
                    "name": name, "description": description,
                    "actual_fee": str(actual_fee), "offer_fee": str(offer_fee),
                    "image": image, "features": svc.parse_features(features),
                })
                st.toast("Category updated successfully!")
                st.rerun()
            except PortalException as e:
                st.error(e.message)
