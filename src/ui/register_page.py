"""Registration page: form, receipt card and PDF download."""
import logging
from typing import Optional

import streamlit as st

from src.services.receipt_service import (
    PDF_MIME,
    Receipt,
    build_receipt,
    make_qr_png,
    receipt_pdf_filename,
    receipt_to_pdf,
)
from src.services.registration_service import register_attendee
from src.ui.html_utils import file_data_uri, html_block, receipt_card_html
from src.ui.state import (
    ensure_attendees_loaded,
    get_app_settings,
    get_app_state,
    get_record_store,
    render_feedback,
)
from src.utils.exceptions import (
    DuplicateNameError,
    OperationPendingError,
    StorePersistenceError,
    ValidationError,
)

logger = logging.getLogger(__name__)

NAME_KEY = "register_name"
PHONE_KEY = "register_phone"


@st.cache_data(show_spinner=False)
def _receipt_pdf(receipt: Receipt, logo_path: Optional[str]) -> bytes:
    return receipt_to_pdf(receipt, logo_path=logo_path)


def _handle_register() -> None:
    """Form submit callback; runs before the page re-renders."""
    state = get_app_state()

    try:
        attendee = register_attendee(
            state,
            get_record_store(),
            st.session_state.get(NAME_KEY, ""),
            st.session_state.get(PHONE_KEY, ""),
        )
    except ValidationError:
        return
    except DuplicateNameError as e:
        state.set_feedback("error", f"❌ {e}")
        return
    except OperationPendingError as e:
        state.set_feedback("warning", f"⏳ {e}")
        return
    except StorePersistenceError as e:
        state.set_feedback("error", f"❌ {e}. Please try again.")
        return

    st.session_state[NAME_KEY] = ""
    st.session_state[PHONE_KEY] = ""
    state.set_feedback("success", f"🎉 {attendee.name} is registered!")


def _inject_register_styles():
    st.markdown(
        html_block(
            """
            <style>
            .receipt-card {
                background: #1e1e1e;
                border: 1px dashed #007bff;
                border-radius: 10px;
                padding: 20px;
                margin-top: 20px;
                color: #f1f1f1;
            }
            .receipt-card p {
                margin: 6px 0;
            }
            .receipt-logo {
                width: 70px;
                margin-bottom: 10px;
            }
            .receipt-qr {
                text-align: center;
                margin: 10px;
            }
            .receipt-qr img {
                background: #fff;
                padding: 6px;
            }
            </style>
            """
        ),
        unsafe_allow_html=True,
    )


def _render_receipt(receipt: Receipt, logo_path: Optional[str]) -> None:
    st.markdown(
        receipt_card_html(
            receipt,
            make_qr_png(receipt.receipt_id),
            logo_uri=file_data_uri(logo_path),
        ),
        unsafe_allow_html=True,
    )

    st.download_button(
        "📄 Download PDF",
        data=_receipt_pdf(receipt, logo_path),
        file_name=receipt_pdf_filename(receipt.name),
        mime=PDF_MIME,
        use_container_width=True,
        key="download_receipt_pdf",
    )


def render_register_page():
    """Render the registration form and, after a successful sign-up, the receipt."""
    _inject_register_styles()

    state = get_app_state()
    settings = get_app_settings()

    _, center, _ = st.columns([1, 2, 1])
    with center:
        st.markdown("## Register")
        loaded = ensure_attendees_loaded(state)

        with st.form("register_form", clear_on_submit=False):
            st.text_input("Name", key=NAME_KEY, placeholder="Name")
            st.text_input("Phone", key=PHONE_KEY, placeholder="Phone")
            # pending is cleared before the rerun; OperationPendingError rejects re-entry
            st.form_submit_button(
                "✅ Submit",
                on_click=_handle_register,
                disabled=not loaded or state.pending,
                use_container_width=True,
                type="primary",
            )

        render_feedback(state)

        if state.current_receipt is not None:
            receipt = build_receipt(state.current_receipt, settings)
            _render_receipt(receipt, settings.logo_path)
