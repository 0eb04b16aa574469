"""
EKATHRA event registration app
Attendee sign-up with QR receipts, plus an admin registrations panel.
"""
import logging
import streamlit as st

from src.ui.admin_panel import render_admin_panel
from src.ui.register_page import render_register_page
from src.ui.html_utils import file_data_uri, html_block
from src.ui.state import get_app_settings

logger = logging.getLogger(__name__)


# Streamlit page configuration
st.set_page_config(
    page_title="EKATHRA Registration",
    page_icon="🎫",
    layout="wide",
    initial_sidebar_state="collapsed"
)


def configure_logging(level: str):
    """Configure root logging once per process."""
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def initialize_session_state():
    """Initialize navigation defaults."""
    if "current_page" not in st.session_state:
        st.session_state.current_page = "register"


def apply_custom_css():
    """Apply the dark theme."""
    st.markdown("""
        <style>
        .stApp {
            background-color: #121212;
            color: #f1f1f1;
            font-family: Arial, sans-serif;
        }

        #MainMenu {visibility: hidden;}
        footer {visibility: hidden;}
        header, [data-testid="stHeader"] {
            visibility: hidden;
            height: 0;
        }

        .stButton > button, .stDownloadButton > button, .stFormSubmitButton > button {
            border-radius: 6px;
            border: none;
            transition: transform 0.2s;
        }

        .stButton > button:hover, .stDownloadButton > button:hover {
            transform: translateY(-2px);
        }

        .stTextInput > div > div > input {
            background: #1e1e1e;
            border: 1px solid #333;
            border-radius: 4px;
            color: #f1f1f1;
        }

        .event-header {
            text-align: center;
            margin-bottom: 20px;
        }

        .event-header img {
            width: 100px;
            margin-bottom: 10px;
        }

        .event-footer {
            text-align: center;
            margin-top: 40px;
            font-size: 14px;
            color: #aaa;
        }
        </style>
    """, unsafe_allow_html=True)


def render_header():
    """Render event banner and navigation buttons."""
    settings = get_app_settings()
    logo_uri = file_data_uri(settings.logo_path)
    logo = f'<img src="{logo_uri}" alt="EKATHRA Logo"/>' if logo_uri else ""

    st.markdown(
        html_block(
            f"""
            <div class="event-header">
                {logo}
                <h1>{settings.event_title}</h1>
                <p>{settings.event_date_long} · {settings.event_venue}</p>
            </div>
            """
        ),
        unsafe_allow_html=True,
    )

    _, nav_col1, nav_col2, _ = st.columns([2, 1, 1, 2], gap="small")

    with nav_col1:
        if st.button("📝 Register", use_container_width=True, key="nav_register"):
            st.session_state.current_page = "register"

    with nav_col2:
        if st.button("🔐 Admin", use_container_width=True, key="nav_admin"):
            st.session_state.current_page = "admin"


def render_footer():
    settings = get_app_settings()
    st.markdown(f"<div class='event-footer'>{settings.event_footer}</div>", unsafe_allow_html=True)


def render_current_page():
    """Render the page selected in session state."""
    try:
        if st.session_state.current_page == "register":
            render_register_page()

        elif st.session_state.current_page == "admin":
            render_admin_panel()

        else:
            st.error(f"Unknown page: {st.session_state.current_page}")
            if st.button("Back to registration"):
                st.session_state.current_page = "register"
                st.rerun()

    except Exception as e:
        logger.exception("Unhandled exception while rendering page")
        st.error("Something went wrong, please try again")

        with st.expander("🔍 Error details"):
            st.code(str(e))

        if st.button("Back to registration"):
            st.session_state.current_page = "register"
            st.rerun()


def main():
    """Application entry point."""
    try:
        configure_logging(get_app_settings().log_level)
        initialize_session_state()
        apply_custom_css()
        render_header()
        render_current_page()
        render_footer()
    except Exception as e:
        logger.exception("Unhandled exception during app execution")
        st.error("The application hit an error, please refresh the page")
        st.code(str(e))

        if st.button("🔄 Reset"):
            st.session_state.clear()
            st.rerun()


if __name__ == "__main__":
    main()
