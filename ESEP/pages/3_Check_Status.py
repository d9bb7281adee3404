"""
Check Status Page - Look up a registration by mobile number or customer ID.
"""

import streamlit as st

from core.models.entities import LookupMode
from core.services.status_service import StatusService
from utils.exceptions import NotFoundException, ValidationException, PortalException
from utils.formatters import format_currency, format_date, status_badge, STATUS_MESSAGES
from utils.helpers import StringUtils

st.title("Check Registration Status")
st.markdown("---")

with st.form("status_form"):
    mode = st.radio(
        "Search by", list(LookupMode), horizontal=True,
        format_func=lambda m: "Mobile Number" if m == LookupMode.MOBILE else "Customer ID",
    )
    query = st.text_input("Mobile number or customer ID", placeholder="e.g. 9876543210 or ESEP9876543210A")
    submitted = st.form_submit_button("Check Status", use_container_width=True)

if submitted:
    try:
        registration = StatusService().find_registration(query, mode)
    except ValidationException as e:
        st.error(e.message)
    except NotFoundException:
        st.warning("No registration found with the provided details")
    except PortalException:
        st.error("Failed to search registration")
    else:
        with st.container(border=True):
            c1, c2 = st.columns(2)
            c1.metric("Customer ID", registration.customer_id)
            c2.metric("Status", status_badge(registration.status.value).upper())

            d1, d2 = st.columns(2)
            d1.markdown(f"**Name:** {registration.name}")
            d1.markdown(f"**Category:** {registration.category}")
            d1.markdown(f"**Fee:** {format_currency(registration.fee_amount)}")
            d2.markdown(f"**Mobile:** {StringUtils.mask_phone_number(registration.mobile)}")
            d2.markdown(f"**Panchayath:** {registration.panchayath} (Ward {registration.ward})")
            d2.markdown(f"**Registered:** {format_date(registration.created_at)}")

            message = STATUS_MESSAGES[registration.status.value]
            if registration.status.value == "approved":
                st.success(message)
            elif registration.status.value == "rejected":
                st.error(message)
            else:
                st.info(message)
