"""
Registration Page - Category selection, registration form, confirmation and customer ID.
"""

import os
import streamlit as st

from core.services.category_service import CategoryService
from core.services.panchayath_service import PanchayathService
from core.services.registration_service import RegistrationService
from utils.exceptions import PortalException, DuplicateRegistrationException, DatabaseException
from utils.formatters import format_currency, format_fee

# Initialise session state
for key, default in {
    "reg_step": 1,            # 1=category, 2=form, 3=confirm, 4=done
    "reg_category": None,
    "reg_form": {},
    "reg_customer_id": None,
}.items():
    if key not in st.session_state:
        st.session_state[key] = default

registration_service = RegistrationService()


def reset_registration():
    st.session_state.reg_step = 1
    st.session_state.reg_category = None
    st.session_state.reg_form = {}
    st.session_state.reg_customer_id = None


st.title("Registration")

# Step indicator
cols = st.columns(4)
steps = ["(1) Category", "(2) Details", "(3) Confirm", "(4) Complete"]
for i, (col, label) in enumerate(zip(cols, steps), 1):
    if i < st.session_state.reg_step:
        col.success(label)
    elif i == st.session_state.reg_step:
        col.info(label)
    else:
        col.markdown(f"<div style='text-align:center;color:#aaa'>{label}</div>",
                     unsafe_allow_html=True)

st.divider()


# STEP 1 - Category selection
if st.session_state.reg_step == 1:
    categories = CategoryService().list_public_categories()

    st.subheader("Select a Category")
    cols = st.columns(3)
    for index, category in enumerate(categories):
        with cols[index % 3]:
            with st.container(border=True):
                st.markdown(f"**{category.name}**")
                st.caption(category.description)
                fee_label = format_fee(category.offer_fee)
                if category.actual_fee > category.offer_fee:
                    fee_label += f" (was {format_currency(category.actual_fee)})"
                st.markdown(f"Fee: **{fee_label}**")
                if st.button("Select", key=f"select_{category.id}", use_container_width=True):
                    st.session_state.reg_category = category
                    st.session_state.reg_step = 2
                    st.rerun()


# STEP 2 - Registration form
elif st.session_state.reg_step == 2:
    category = st.session_state.reg_category

    head_left, head_right = st.columns([3, 1])
    head_left.subheader(f"Registration Form - {category.name}")
    if head_right.button("← Back to Categories"):
        reset_registration()
        st.rerun()
    st.markdown(f"Fee: **{format_fee(category.offer_fee)}**")

    try:
        panchayaths = PanchayathService().list_panchayaths()
    except DatabaseException:
        panchayaths = []
        st.error("Failed to load panchayaths. Please refresh the page.")

    saved = st.session_state.reg_form
    panchayath_names = [p.name for p in panchayaths]

    with st.form("registration_form", clear_on_submit=False):
        name = st.text_input("Full Name *", value=saved.get("name", ""), placeholder="Enter your full name")
        address = st.text_area("Address *", value=saved.get("address", ""),
                               placeholder="Enter your complete address")
        mobile = st.text_input("Mobile Number *", value=saved.get("mobile", ""), max_chars=10,
                               placeholder="10-digit mobile number")
        c1, c2 = st.columns(2)
        panchayath = c1.selectbox(
            "Panchayath *", panchayath_names,
            index=panchayath_names.index(saved["panchayath"]) if saved.get("panchayath") in panchayath_names else None,
            placeholder="Select panchayath",
            format_func=lambda n: next((f"{p.name} ({p.district})" for p in panchayaths if p.name == n), n),
        )
        ward = c2.text_input("Ward *", value=saved.get("ward", ""), placeholder="Ward number or name")
        agent_details = st.text_input("Agent Details", value=saved.get("agent_details") or "",
                                      placeholder="Optional")

        submitted = st.form_submit_button("Review Registration", use_container_width=True)

    if submitted:
        form = {
            "name": name, "address": address, "mobile": mobile,
            "panchayath": panchayath or "", "ward": ward, "agent_details": agent_details,
        }
        try:
            st.session_state.reg_form = registration_service.validate_submission(form)
            st.session_state.reg_step = 3
            st.rerun()
        except DuplicateRegistrationException as e:
            st.error(f"Registration Already Exists. {e.message}")
        except PortalException as e:
            st.error(e.message)


# STEP 3 - Confirmation
elif st.session_state.reg_step == 3:
    category = st.session_state.reg_category
    form = st.session_state.reg_form

    st.subheader("Confirm Registration")
    st.markdown(f"""
- **Category:** {category.name}
- **Fee:** {format_fee(category.offer_fee)}
- **Name:** {form['name']}
- **Address:** {form['address']}
- **Mobile:** {form['mobile']}
- **Panchayath:** {form['panchayath']}
- **Ward:** {form['ward']}
- **Agent Details:** {form.get('agent_details') or '-'}
""")

    c1, c2 = st.columns(2)
    if c1.button("Edit Details", use_container_width=True):
        st.session_state.reg_step = 2
        st.rerun()
    if c2.button("Confirm & Submit", type="primary", use_container_width=True):
        try:
            with st.spinner("Submitting registration..."):
                registration = registration_service.register(form, category)
            st.session_state.reg_customer_id = registration.customer_id
            st.session_state.reg_step = 4
            st.rerun()
        except PortalException as e:
            st.error(f"Failed to submit registration. {e.message}")
            if os.getenv("DEBUG") == "True":
                st.exception(e)


# STEP 4 - Done
else:
    st.balloons()
    st.success("Registration submitted successfully!")
    st.markdown("Your Customer ID is:")
    st.code(st.session_state.reg_customer_id, language=None)
    st.caption("Please save this ID. You can use it or your mobile number to check your registration status.")

    c1, c2 = st.columns(2)
    with c1:
        st.page_link("pages/3_Check_Status.py", label="Check Status ->", use_container_width=True)
    if c2.button("Register Another", use_container_width=True):
        reset_registration()
        st.rerun()
