"""
Categories Page - Public catalogue of self-employment categories.
"""

import streamlit as st

from core.services.category_service import CategoryService
from utils.formatters import format_currency, format_fee

st.title("Our Categories")
st.caption("Explore our range of self-employment categories designed to empower your entrepreneurial journey.")
st.page_link("pages/2_Register.py", label="Start Registration ->")
st.markdown("---")


def render_category_card(category):
    with st.container(border=True):
        if category.image:
            st.image(category.image, use_container_width=True)
        st.subheader(category.name)
        st.caption(category.description)

        f1, f2 = st.columns(2)
        f1.metric("Offer Fee", format_fee(category.offer_fee))
        if category.actual_fee > category.offer_fee:
            f2.markdown(f"~~{format_currency(category.actual_fee)}~~")
            f2.markdown(f"**{category.discount_percent}% OFF**")

        for feature in category.features:
            st.markdown(f"- {feature}")


categories = CategoryService().list_public_categories()

cols = st.columns(3)
for index, category in enumerate(categories):
    with cols[index % 3]:
        render_category_card(category)
