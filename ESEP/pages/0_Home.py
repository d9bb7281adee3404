"""
Home Page - Program introduction and entry points into the registration flow.
"""

import streamlit as st

st.markdown(
    """
    <div style="text-align:center; padding:2rem 0 1rem;">
        <h1 style="margin:0; color:#1E5631;">Self-Employment Registration Portal</h1>
        <p style="color:#5D6D7E; font-size:1.2rem; margin-top:.5rem;">
            Empowering entrepreneurs through categorised self-employment programs
        </p>
    </div>
    """,
    unsafe_allow_html=True,
)

c1, c2, c3 = st.columns(3)
with c1:
    with st.container(border=True):
        st.subheader("Explore Categories")
        st.caption("Farming, food processing, home services, e-commerce and more.")
        st.page_link("pages/1_Categories.py", label="View Categories ->", use_container_width=True)
with c2:
    with st.container(border=True):
        st.subheader("Register")
        st.caption("Choose a category and submit your registration in minutes.")
        st.page_link("pages/2_Register.py", label="Start Registration ->", use_container_width=True)
with c3:
    with st.container(border=True):
        st.subheader("Check Status")
        st.caption("Track your registration using your mobile number or customer ID.")
        st.page_link("pages/3_Check_Status.py", label="Check Status ->", use_container_width=True)

st.markdown("---")

st.subheader("About the Program")
st.markdown(
    """
    The program connects local entrepreneurs with networks in dairy and poultry farming,
    terrace and organic gardening, food processing, skilled home services and e-commerce
    delivery. Each category carries a registration fee, with an introductory offer fee
    shown on the category card.

    After you register you receive a **Customer ID** (for example `ESEP9876543210A`).
    Keep it safe: together with your mobile number it lets you check whether your
    registration is pending, approved or rejected.
    """
)

st.caption("(c) 2026 ESEP Self-Employment Registration Portal")
