"""
About Page - The society behind the portal, its categories and the Job Card offer.
"""

import streamlit as st

from core.services.category_service import CategoryService
from utils.formatters import format_fee

st.markdown(
    """
    <div style="text-align:center; padding:1.5rem 0 1rem;">
        <h1 style="margin:0; color:#1E5631;">About E-Life Society</h1>
        <p style="color:#5D6D7E; font-size:1.2rem; margin-top:.5rem;">
            Empowering communities through self-employment programs
        </p>
    </div>
    """,
    unsafe_allow_html=True,
)

with st.container(border=True):
    st.subheader("Pennyekart - Hybrid E-commerce Platform")
    st.markdown(
        """
        Pennyekart connects home delivery services with the self-employment programs of
        E-Life Society. Registered members take part in local delivery, farming, food and
        home-service networks while customers get convenient doorstep service.
        """
    )

categories = CategoryService().list_public_categories()

left, right = st.columns(2)
with left:
    with st.container(border=True):
        st.subheader("Our Categories")
        for category in categories:
            st.markdown(f"**{category.name}** ({format_fee(category.offer_fee)})")
            st.caption(category.description)

with right:
    with st.container(border=True):
        st.subheader("Why Choose E-Life Society?")
        st.markdown(
            """
            - Self-employment opportunities across many trades
            - Hybrid e-commerce and community delivery model
            - Community-focused support through local panchayaths
            - Investment and profit opportunities with the Job Card
            - Introductory offer fees on every category
            """
        )

job_card = next((c for c in categories if c.id == "job-card"), None)
if job_card:
    with st.container(border=True):
        st.subheader("Job Card")
        st.markdown(
            "The Job Card gives access to every category instead of separate registrations. "
            "It is available for first-time registrations and can later be converted to any "
            "single category; the conversion cannot be reversed."
        )
        if job_card.actual_fee > job_card.offer_fee:
            st.markdown(f"Offer fee **{format_fee(job_card.offer_fee)}**, {job_card.discount_percent}% off.")
        for feature in job_card.features:
            st.markdown(f"- {feature}")

st.page_link("pages/2_Register.py", label="Start Registration ->")
