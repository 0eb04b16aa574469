"""Streamlit bindings for settings, the record store and per-session state."""
import logging

import streamlit as st

from src.models.app_state import AppState
from src.services.record_store import RecordStore, create_record_store
from src.services.registration_service import load_attendees
from src.utils.config import Settings, get_settings
from src.utils.exceptions import RegistrationError

logger = logging.getLogger(__name__)

APP_STATE_KEY = "app_state"


@st.cache_resource
def get_app_settings() -> Settings:
    """Settings shared by every session of this process."""
    return get_settings()


@st.cache_resource
def get_record_store() -> RecordStore:
    """Record store client shared by every session of this process."""
    return create_record_store(get_app_settings())


def get_app_state() -> AppState:
    """Return this browser session's AppState, creating it on first use."""
    if APP_STATE_KEY not in st.session_state:
        st.session_state[APP_STATE_KEY] = AppState()
    return st.session_state[APP_STATE_KEY]


def ensure_attendees_loaded(state: AppState) -> bool:
    """
    Run the initial store read once per session.

    Returns:
        True if attendees are loaded, False if loading failed (error shown)
    """
    if state.loaded:
        return True

    try:
        with st.spinner("Loading registrations..."):
            load_attendees(state, get_record_store())
    except RegistrationError as e:
        logger.error(f"Initial load failed: {e}")
        st.error(f"❌ {e}. Please refresh to try again.")
        return False

    return True


def render_feedback(state: AppState) -> None:
    """Show and clear the queued feedback message."""
    feedback = state.pop_feedback()
    if not feedback:
        return

    level, message = feedback
    if level == "success":
        st.success(message)
    elif level == "error":
        st.error(message)
    elif level == "warning":
        st.warning(message)
    else:
        st.info(message)
