import io
from datetime import date, datetime
from typing import Optional

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle
from xml.sax.saxutils import escape

from app.core.config import STUDIO_NAME, STUDIO_TAGLINE, STUDIO_CONTACT

BRAND_COLOR = colors.HexColor("#7a5c3e")
LIGHT_FILL = colors.HexColor("#f5f1ec")


def get_styles():
    styles = getSampleStyleSheet()
    styles.add(
        ParagraphStyle(
            "StudioName",
            parent=styles["Title"],
            textColor=BRAND_COLOR,
            spaceAfter=2,
        )
    )
    styles.add(
        ParagraphStyle(
            "StudioLine",
            parent=styles["Normal"],
            alignment=1,
            textColor=colors.grey,
        )
    )
    return styles


def text(value) -> str:
    """Escape user-entered text for use inside a Paragraph."""
    if value is None or value == "":
        return "-"
    return escape(str(value))


def fmt_date(value: Optional[date]) -> str:
    if value is None:
        return "-"
    if isinstance(value, datetime):
        value = value.date()
    return value.strftime("%d %B %Y")


def letterhead(styles) -> list:
    elements = [
        Paragraph(f"<b>{escape(STUDIO_NAME)}</b>", styles["StudioName"]),
        Paragraph(escape(STUDIO_TAGLINE), styles["StudioLine"]),
    ]
    if STUDIO_CONTACT:
        elements.append(Paragraph(escape(STUDIO_CONTACT), styles["StudioLine"]))
    elements.append(Spacer(1, 16))
    return elements


def grid_table(rows: list, col_widths: list, *, total_row: bool = False) -> Table:
    table = Table(rows, colWidths=col_widths, repeatRows=1)
    style = [
        ("BACKGROUND", (0, 0), (-1, 0), BRAND_COLOR),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("ALIGN", (-1, 1), (-1, -1), "RIGHT"),
        ("BACKGROUND", (0, 1), (-1, -1), LIGHT_FILL),
    ]
    if total_row:
        style.append(("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"))
    table.setStyle(TableStyle(style))
    return table


def build_pdf(elements: list, title: str) -> bytes:
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        rightMargin=30,
        leftMargin=30,
        topMargin=30,
        bottomMargin=30,
        title=title,
        author=STUDIO_NAME,
    )
    doc.build(elements)
    return buffer.getvalue()
