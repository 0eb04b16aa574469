"""Utilities for preparing HTML snippets before rendering in Streamlit."""
import base64
import mimetypes
import os
from html import escape
from textwrap import dedent
from typing import Optional

from src.services.receipt_service import RECEIPT_TITLE, Receipt


def html_block(template: str) -> str:
    """
    Normalize multi-line HTML so Streamlit doesn't treat it as Markdown code.

    Streamlit's Markdown renderer interprets lines with >=4 leading spaces as
    code blocks. We dedent and strip leading whitespace on each line to avoid
    that while keeping the markup intact.
    """
    lines = dedent(template).splitlines()
    return "\n".join(line.lstrip() for line in lines).strip()


def png_data_uri(png: bytes) -> str:
    """Inline PNG bytes as a data URI."""
    return "data:image/png;base64," + base64.b64encode(png).decode("ascii")


def file_data_uri(path: Optional[str]) -> Optional[str]:
    """Inline an image file as a data URI, or None if it doesn't exist."""
    if not path or not os.path.exists(path):
        return None

    mime, _ = mimetypes.guess_type(path)
    with open(path, "rb") as f:
        encoded = base64.b64encode(f.read()).decode("ascii")
    return f"data:{mime or 'image/png'};base64,{encoded}"


def receipt_card_html(receipt: Receipt, qr_png: bytes, logo_uri: Optional[str] = None) -> str:
    """Build the on-screen receipt card. All attendee text is HTML-escaped."""
    rows = "\n".join(
        f"<p><strong>{escape(label)}:</strong> {escape(value)}</p>"
        for label, value in receipt.fields()
    )
    logo = (
        f'<img class="receipt-logo" src="{escape(logo_uri, quote=True)}" alt="Event logo"/>'
        if logo_uri
        else ""
    )

    return html_block(
        f"""
        <div class="receipt-card">
            <h3>🎫 {RECEIPT_TITLE}</h3>
            {logo}
            {rows}
            <div class="receipt-qr">
                <img src="{png_data_uri(qr_png)}" width="120" height="120" alt="Receipt QR code"/>
            </div>
        </div>
        """
    )
