import re
from datetime import date

from reportlab.platypus import Paragraph, Spacer

from app.schemas.billing.quotation_schemas import QuotationOut
from app.utils.decimal_utils import format_inr
from app.utils.pdf_generators.letterhead import (
    build_pdf,
    fmt_date,
    get_styles,
    grid_table,
    letterhead,
    text,
)


def _label(key: str) -> str:
    words = re.sub(r"(?<=[a-z0-9])(?=[A-Z])", " ", key).replace("_", " ")
    return words[:1].upper() + words[1:]


def deliverable_lines(deliverables: dict | None) -> list[str]:
    """Flatten the deliverables JSON into printable lines, skipping unset entries."""
    lines: list[str] = []
    for key, value in (deliverables or {}).items():
        if isinstance(value, dict):
            lines.extend(deliverable_lines(value))
        elif value is True:
            lines.append(_label(key))
        elif value in (None, False, "", 0):
            continue
        else:
            lines.append(f"{_label(key)}: {value}")
    return lines


def _event_dates(q: QuotationOut) -> str:
    start = fmt_date(q.event_date_start)
    if q.event_date_end is None or q.event_date_end == q.event_date_start:
        return start
    return f"{start} to {fmt_date(q.event_date_end)}"


def _service_rows(q: QuotationOut) -> list:
    rows = [["#", "Service", "Details", "Amount"]]
    n = 0

    for label, items in (
        ("Photography", q.services.photography),
        ("Videography", q.services.videography),
    ):
        for item in items:
            n += 1
            details = f"{item.stage.value}, {item.camera_count} camera(s), {item.session.value}"
            rows.append([n, f"{label}: {item.type.value}", details, format_inr(item.rate)])

    for item in q.services.additional:
        n += 1
        name = item.custom_name or item.name
        details = f"{item.session.value}, qty {item.quantity}"
        rows.append([n, name, details, format_inr(item.rate)])

    return rows


def generate_quotation_pdf(q: QuotationOut, issued_on: date | None = None) -> bytes:
    """
    Render a quotation with the studio letterhead, client and event
    details, the priced services, deliverables and the quoted total.
    """
    styles = get_styles()
    elements = letterhead(styles)

    # -------------------------------
    # Header
    # -------------------------------
    elements.append(Paragraph(f"<b>Quotation #: </b>{text(q.quotation_number)}", styles["Heading2"]))
    elements.append(Paragraph(f"Date: {fmt_date(issued_on or q.created_at)}", styles["Normal"]))
    elements.append(Spacer(1, 10))

    # -------------------------------
    # Client & event
    # -------------------------------
    elements.append(Paragraph("<b>Client Details</b>", styles["Heading3"]))
    elements.append(Paragraph(f"Name: {text(q.customer_name)}", styles["Normal"]))
    elements.append(Paragraph(f"Event: {text(q.event_type)}", styles["Normal"]))
    elements.append(Paragraph(f"Event Dates: {_event_dates(q)}", styles["Normal"]))
    elements.append(Paragraph(f"Location: {text(q.location)}", styles["Normal"]))
    if q.package_type:
        elements.append(Paragraph(f"Package: {text(q.package_type)}", styles["Normal"]))
    elements.append(Spacer(1, 12))

    # -------------------------------
    # Services
    # -------------------------------
    rows = _service_rows(q)
    rows.append(["", "", "Total", format_inr(q.total)])
    elements.append(grid_table(rows, [25, 170, 210, 100], total_row=True))
    elements.append(Spacer(1, 16))

    # -------------------------------
    # Deliverables
    # -------------------------------
    lines = deliverable_lines(q.deliverables)
    if lines:
        elements.append(Paragraph("<b>Deliverables</b>", styles["Heading3"]))
        for line in lines:
            elements.append(Paragraph(f"&bull; {text(line)}", styles["Normal"]))
        elements.append(Spacer(1, 12))

    elements.append(Paragraph("Thank you for considering us for your special day!", styles["Normal"]))

    return build_pdf(elements, f"Quotation {q.quotation_number}")
