"""Receipt building and rendering (QR code, image, PDF)."""
import io
import logging
import os
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

import qrcode
from PIL import Image, ImageDraw, ImageFont
from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas as pdf_canvas

from src.models.attendee import Attendee
from src.utils.config import Settings

logger = logging.getLogger(__name__)

PDF_MIME = "application/pdf"
UNSAFE_FILENAME_CHARS = re.compile(r"[\\/:*?\"<>|\x00-\x1f]+")

RECEIPT_WIDTH = 720
RECEIPT_PADDING = 36
RECEIPT_TITLE = "Registration Receipt"
QR_SIZE = 160
LOGO_WIDTH = 90

BACKGROUND = "#1e1e1e"
BORDER = "#007bff"
TEXT = "#f1f1f1"
MUTED = "#aaaaaa"

FONT_REGULAR = ("DejaVuSans.ttf", "Arial.ttf")
FONT_BOLD = ("DejaVuSans-Bold.ttf", "Arial Bold.ttf")


@dataclass(frozen=True)
class Receipt:
    """Everything needed to render one receipt."""

    name: str
    phone: str
    receipt_id: str
    date: str
    venue: str

    def fields(self) -> List[Tuple[str, str]]:
        """Label/value pairs in display order."""
        return [
            ("Name", self.name),
            ("Phone", self.phone),
            ("Receipt ID", self.receipt_id),
            ("Date", self.date),
            ("Venue", self.venue),
        ]


def build_receipt(attendee: Attendee, settings: Settings) -> Receipt:
    """Combine an attendee with the configured event date and venue."""
    return Receipt(
        name=attendee.name,
        phone=attendee.phone,
        receipt_id=attendee.id,
        date=settings.event_date,
        venue=settings.event_venue,
    )


def receipt_pdf_filename(name: str) -> str:
    """Download filename for a receipt PDF; path and reserved characters become underscores."""
    safe_name = UNSAFE_FILENAME_CHARS.sub("_", name.strip())
    return f"EKATHRA_Receipt_{safe_name}.pdf"


def make_qr_png(payload: str, box_size: int = 10) -> bytes:
    """Encode payload as a QR code and return PNG bytes."""
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=box_size,
        border=4,
    )
    qr.add_data(payload)
    qr.make(fit=True)

    buf = io.BytesIO()
    qr.make_image(fill_color="black", back_color="white").save(buf, format="PNG")
    return buf.getvalue()


def _load_font(candidates: Tuple[str, ...], size: int):
    for path in candidates:
        try:
            return ImageFont.truetype(path, size)
        except OSError:
            continue
    return ImageFont.load_default(size=size)


def _load_logo(logo_path: Optional[str]) -> Optional[Image.Image]:
    if not logo_path or not os.path.exists(logo_path):
        return None
    try:
        logo = Image.open(logo_path).convert("RGBA")
    except OSError as e:
        logger.warning(f"Cannot open logo {logo_path}: {e}")
        return None
    ratio = LOGO_WIDTH / logo.width
    return logo.resize((LOGO_WIDTH, max(1, int(logo.height * ratio))))


def render_receipt_image(receipt: Receipt, logo_path: Optional[str] = None) -> Image.Image:
    """
    Draw the receipt card.

    Layout, top to bottom: title, optional logo, one line per field,
    then the QR code of the receipt ID centered.
    """
    title_font = _load_font(FONT_BOLD, 30)
    label_font = _load_font(FONT_BOLD, 19)
    value_font = _load_font(FONT_REGULAR, 19)
    line_height = 34

    logo = _load_logo(logo_path)
    qr_image = Image.open(io.BytesIO(make_qr_png(receipt.receipt_id))).convert("RGB")
    qr_image = qr_image.resize((QR_SIZE, QR_SIZE), Image.Resampling.NEAREST)

    height = RECEIPT_PADDING * 2 + 50
    if logo is not None:
        height += logo.height + 16
    height += line_height * len(receipt.fields()) + 20 + QR_SIZE

    image = Image.new("RGB", (RECEIPT_WIDTH, height), BACKGROUND)
    draw = ImageDraw.Draw(image)
    draw.rectangle(
        [6, 6, RECEIPT_WIDTH - 7, height - 7],
        outline=BORDER,
        width=2,
    )

    y = RECEIPT_PADDING
    draw.text((RECEIPT_PADDING, y), RECEIPT_TITLE, font=title_font, fill=TEXT)
    y += 50

    if logo is not None:
        image.paste(logo, (RECEIPT_PADDING, y), logo)
        y += logo.height + 16

    for label, value in receipt.fields():
        label_text = f"{label}: "
        draw.text((RECEIPT_PADDING, y), label_text, font=label_font, fill=TEXT)
        offset = draw.textlength(label_text, font=label_font)
        draw.text((RECEIPT_PADDING + offset, y), value, font=value_font, fill=MUTED)
        y += line_height

    y += 20
    image.paste(qr_image, ((RECEIPT_WIDTH - QR_SIZE) // 2, y))
    return image


def receipt_to_pdf(receipt: Receipt, logo_path: Optional[str] = None) -> bytes:
    """
    Render the receipt into a single-page A4 PDF.

    The receipt image spans the full page width, anchored at the top,
    with its aspect ratio preserved.
    """
    image = render_receipt_image(receipt, logo_path=logo_path)

    buf = io.BytesIO()
    page_width, page_height = A4
    c = pdf_canvas.Canvas(buf, pagesize=A4)
    c.setTitle(f"{RECEIPT_TITLE} - {receipt.name}")

    draw_height = image.height * page_width / image.width
    c.drawImage(
        ImageReader(image),
        0,
        page_height - draw_height,
        width=page_width,
        height=draw_height,
    )
    c.showPage()
    c.save()
    return buf.getvalue()
