"""Admin panel UI: passphrase login, registrations table, delete and CSV export."""
import logging
import traceback

import streamlit as st

from src.models.attendee import Attendee
from src.services.admin_service import (
    delete_attendee,
    list_attendees,
    login_admin,
    logout_admin,
)
from src.services.export_service import CSV_FILENAME, CSV_MIME, export_csv
from src.ui.html_utils import html_block
from src.ui.state import (
    ensure_attendees_loaded,
    get_app_settings,
    get_app_state,
    get_record_store,
    render_feedback,
)
from src.utils.exceptions import AuthGateError, RegistrationError

logger = logging.getLogger(__name__)

PASSPHRASE_KEY = "admin_passphrase_input"


def _show_admin_exception(error: Exception, context: str) -> None:
    """Display error details in UI and log full traceback."""
    logger.exception("Admin panel error during %s", context)

    st.error(f"❌ {context} failed: {error}")
    with st.expander("🔍 Error details"):
        st.code("".join(traceback.format_exception(type(error), error, error.__traceback__)))


def _handle_login() -> None:
    """Login form callback."""
    state = get_app_state()
    passphrase = st.session_state.get(PASSPHRASE_KEY, "")

    try:
        login_admin(state, passphrase, get_app_settings())
    except AuthGateError as e:
        state.set_feedback("error", f"❌ {e}")
        return

    st.session_state[PASSPHRASE_KEY] = ""
    st.session_state["current_page"] = "admin"


def _handle_delete(attendee: Attendee) -> None:
    """Delete button callback."""
    state = get_app_state()

    try:
        removed = delete_attendee(state, get_record_store(), attendee.id, attendee.store_key)
    except RegistrationError as e:
        state.set_feedback("error", f"❌ {e}")
        return

    state.set_feedback("success", f"✅ Removed {removed.name}")


def _handle_logout() -> None:
    logout_admin(get_app_state())
    st.session_state["current_page"] = "register"


def _inject_admin_styles():
    st.markdown(
        html_block(
            """
            <style>
            .admin-row-header {
                font-weight: 700;
                border-bottom: 1px solid #ccc;
                padding: 8px 0;
            }
            .admin-title {
                margin-bottom: 4px;
            }
            </style>
            """
        ),
        unsafe_allow_html=True,
    )


def render_login_page():
    """Render admin login page."""
    state = get_app_state()

    _, center, _ = st.columns([1, 1.2, 1])
    with center:
        with st.form("admin_login_form", clear_on_submit=False):
            st.markdown("### 🔐 Admin Login")
            st.text_input(
                "Password",
                type="password",
                placeholder="Enter password",
                key=PASSPHRASE_KEY,
            )
            st.form_submit_button(
                "Login",
                on_click=_handle_login,
                use_container_width=True,
                type="primary",
            )

        render_feedback(state)


def _render_attendee_rows(attendees, disabled: bool) -> None:
    header_cols = st.columns([2, 1.5, 3, 1], gap="small")
    for col, label in zip(header_cols, ("Name", "Phone", "Receipt ID", "Action")):
        col.markdown(f"<div class='admin-row-header'>{label}</div>", unsafe_allow_html=True)

    for attendee in attendees:
        col1, col2, col3, col4 = st.columns([2, 1.5, 3, 1], gap="small")
        col1.text(attendee.name)
        col2.text(attendee.phone)
        col3.code(attendee.id, language=None)
        with col4:
            st.button(
                "Delete",
                key=f"delete_{attendee.id}",
                on_click=_handle_delete,
                args=(attendee,),
                disabled=disabled,
            )


def render_admin_panel():
    """Render admin management panel, or the login form when not authenticated."""
    state = get_app_state()

    if not state.admin_authenticated:
        render_login_page()
        return

    try:
        _inject_admin_styles()

        title_col, logout_col = st.columns([4, 1], gap="small")
        with title_col:
            st.markdown("<h3 class='admin-title'>Admin Panel</h3>", unsafe_allow_html=True)
        with logout_col:
            st.button("🚪 Logout", on_click=_handle_logout, use_container_width=True)

        render_feedback(state)

        if not ensure_attendees_loaded(state):
            return

        attendees = list_attendees(state)
        st.caption(f"{len(attendees)} registration(s)")

        if attendees:
            # pending is cleared before the rerun; OperationPendingError rejects re-entry
            _render_attendee_rows(attendees, disabled=state.pending)
        else:
            st.info("📝 No registrations yet")

        st.download_button(
            "📥 Export CSV",
            data=export_csv(attendees).encode("utf-8"),
            file_name=CSV_FILENAME,
            mime=CSV_MIME,
            use_container_width=True,
            key="download_registrations_csv",
        )
    except Exception as error:
        _show_admin_exception(error, "Loading admin panel")
