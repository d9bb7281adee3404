"""
Dashboard Page - Registration totals by category, panchayath and status.
Roles: all admin roles
"""

import streamlit as st
import pandas as pd

from core.models.roles import Section
from core.services.dashboard_service import DashboardService
from utils.auth_guard import require_section
from utils.exceptions import PortalException
from utils.formatters import format_currency, format_date, status_badge
from utils.live_refresh import watch_tables
from utils.sidebar import render_sidebar

session = require_section(Section.DASHBOARD)
render_sidebar(session)

st.title("Dashboard Overview")
st.caption(f"Welcome, **{session.username}** ({session.role.value})")
st.markdown("---")

watch_tables("registrations", "panchayaths")

try:
    svc = DashboardService()
    stats = svc.get_stats()
    recent = svc.recent_registrations()
except PortalException as e:
    st.error(f"Error loading dashboard data: {e.message}")
    st.stop()

m1, m2, m3, m4 = st.columns(4)
m1.metric("Total Registrations", stats.total)
m2.metric("Pending", stats.by_status.get("pending", 0))
m3.metric("Approved", stats.by_status.get("approved", 0))
m4.metric("Rejected", stats.by_status.get("rejected", 0))

st.markdown("---")

col_cat, col_pan = st.columns(2)

with col_cat:
    st.subheader("Category Distribution")
    if stats.by_category:
        df = pd.DataFrame(sorted(stats.by_category.items()), columns=["Category", "Registrations"])
        st.bar_chart(df.set_index("Category"))
    else:
        st.info("No registrations yet.")

with col_pan:
    st.subheader("Panchayath Distribution")
    if stats.by_panchayath:
        df = pd.DataFrame(stats.by_panchayath, columns=["Panchayath", "Registrations"])
        st.dataframe(df, use_container_width=True, hide_index=True)
    else:
        st.info("No panchayaths configured.")

st.subheader("Recent Registrations")
if not recent:
    st.info("No registrations logged yet.")
else:
    df = pd.DataFrame([{
        "Customer ID": r.customer_id,
        "Name": r.name,
        "Category": r.category,
        "Fee": format_currency(r.fee_amount),
        "Status": status_badge(r.status.value),
        "Date": format_date(r.created_at),
    } for r in recent])
    st.table(df)
