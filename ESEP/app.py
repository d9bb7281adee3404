import streamlit as st

st.set_page_config(
    page_title="ESEP Self-Employment Registration",
    page_icon="🌱",
    layout="wide",
    initial_sidebar_state="collapsed",
)

from mysql.connector import Error

from core.models.roles import Section
from db.database import db_manager
from utils.auth_guard import is_logged_in, get_current_session, get_session_store
from utils.exceptions import PortalException, ValidationException


@st.cache_resource
def bootstrap_database():
    """Runs schema.sql once per server process"""
    return db_manager.initialize_schema()


try:
    bootstrap_database()
except Error:
    st.warning("The database is unavailable. Some pages will not load until it is reachable.")


# --- PAGE DEFINITIONS ---
def login_page():
    # Centered login card
    col_left, col_center, col_right = st.columns([1, 2, 1])

    with col_center:
        st.markdown("<br>", unsafe_allow_html=True)
        st.markdown(
            """
            <div style="text-align:center">
                <h1 style="color:#1E5631">Admin Login</h1>
                <p style="color:#5D6D7E; font-size:1.1rem">Self-Employment Registration Portal</p>
            </div>
            """,
            unsafe_allow_html=True,
        )
        st.markdown("---")

        # --- Login form ---
        with st.form("login_form", clear_on_submit=False):
            username = st.text_input("Username", placeholder="Enter your username")
            password = st.text_input("Password", type="password", placeholder="Enter your password")
            submitted = st.form_submit_button("Login", use_container_width=True)

        if submitted:
            try:
                with st.spinner("Authenticating..."):
                    session = get_session_store().login(username, password)
                st.toast(f"Welcome, {session.role.value}!")
                st.rerun()
            except ValidationException as e:
                st.error(e.message)
            except PortalException:
                st.error("Login failed. Invalid username or password.")

        st.markdown("---")
        st.page_link("pages/0_Home.py", label="← Back to Home")


# --- NAVIGATION SETUP ---
def public_pages(home_default: bool):
    return [
        st.Page("pages/0_Home.py", title="Home", default=home_default),
        st.Page("pages/1_Categories.py", title="Categories"),
        st.Page("pages/2_Register.py", title="Register"),
        st.Page("pages/3_Check_Status.py", title="Check Status"),
        st.Page("pages/9_About.py", title="About"),
    ]


if not is_logged_in():
    pg = st.navigation({
        "Portal": public_pages(home_default=True),
        "Admin": [st.Page(login_page, title="Admin Login", url_path="admin-login")],
    })
    pg.run()

else:
    session = get_current_session()

    admin_pages = [
        (Section.DASHBOARD, st.Page("pages/4_Dashboard.py", title="Dashboard", default=True)),
        (Section.REGISTRATIONS, st.Page("pages/5_Registrations.py", title="Registrations")),
        (Section.PANCHAYATH, st.Page("pages/6_Panchayaths.py", title="Panchayath")),
        (Section.CATEGORIES, st.Page("pages/7_Category_Fees.py", title="Category Fee & Image")),
        (Section.ADMINS, st.Page("pages/8_Admin_Roles.py", title="Admin Roles")),
    ]

    # Sections the role cannot open are left out of the menu entirely
    pg = st.navigation({
        "Admin": [page for section, page in admin_pages if session.can_open(section)],
        "Portal": public_pages(home_default=False),
    })
    pg.run()
