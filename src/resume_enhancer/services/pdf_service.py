"""Render enhanced resume text to a downloadable PDF."""

from io import BytesIO
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

from resume_enhancer.models.resume import Enhancement

MARGIN = 15 * mm
TITLE_FONT_SIZE = 14
BODY_FONT_SIZE = 10
LINE_HEIGHT = 12
BODY_FONT = "Helvetica"
TEXT_WIDTH = A4[0] - 2 * MARGIN


def wrap_line(paragraph: str, max_width: float = TEXT_WIDTH) -> list[str]:
    """Split one paragraph into lines that fit max_width in the body font."""
    return simpleSplit(paragraph, BODY_FONT, BODY_FONT_SIZE, max_width) or [""]


def render_enhancement_pdf(enhancement: Enhancement) -> bytes:
    """Title, type and date header followed by the wrapped enhanced text."""
    buffer = BytesIO()
    c = canvas.Canvas(buffer, pagesize=A4)
    _, height = A4
    x, y = MARGIN, height - MARGIN

    c.setFont("Helvetica-Bold", TITLE_FONT_SIZE)
    c.drawString(x, y, "Enhanced Resume")
    y -= LINE_HEIGHT * 1.5

    c.setFont(BODY_FONT, BODY_FONT_SIZE)
    c.drawString(x, y, f"Enhancement Type: {enhancement.enhancement_type}")
    y -= LINE_HEIGHT
    c.drawString(x, y, f"Generated: {enhancement.created_at:%Y-%m-%d}")
    y -= LINE_HEIGHT * 2

    body = (enhancement.enhanced_content or "").replace("\r\n", "\n")
    for paragraph in body.split("\n"):
        for line in wrap_line(paragraph):
            if y < MARGIN + LINE_HEIGHT:
                c.showPage()
                c.setFont(BODY_FONT, BODY_FONT_SIZE)
                y = height - MARGIN
            c.drawString(x, y, line)
            y -= LINE_HEIGHT

    c.save()
    return buffer.getvalue()
