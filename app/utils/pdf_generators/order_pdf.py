from reportlab.platypus import Paragraph, Spacer

from app.schemas.billing.order_schemas import OrderDetailOut
from app.models.enums.workflow_state import WORKFLOW_FIELDS
from app.utils.decimal_utils import format_inr
from app.utils.pdf_generators.letterhead import (
    build_pdf,
    fmt_date,
    get_styles,
    grid_table,
    letterhead,
    text,
)


def generate_order_pdf(order: OrderDetailOut) -> bytes:
    """Order summary: budget figures, workflow checklist and both ledgers."""
    styles = get_styles()
    elements = letterhead(styles)
    fin = order.financials

    elements.append(Paragraph(f"<b>Order #: </b>{text(order.order_number)}", styles["Heading2"]))
    elements.append(Paragraph(f"Quotation: {text(order.quotation_number)}", styles["Normal"]))
    elements.append(Paragraph(f"Customer: {text(order.customer_name)}", styles["Normal"]))
    elements.append(Paragraph(f"Event: {text(order.event_type)} on {fmt_date(order.event_date_start)}", styles["Normal"]))
    elements.append(Paragraph(f"Status: {order.status.capitalize()}", styles["Normal"]))
    elements.append(Spacer(1, 12))

    # -------------------------------
    # Summary
    # -------------------------------
    summary = [
        ["Item", "Amount"],
        ["Estimated Budget", format_inr(order.estimated_budget)],
        ["Final Budget", format_inr(order.final_budget)],
        ["Total Payments", format_inr(fin.total_payments)],
        ["Balance", format_inr(fin.balance)],
        ["Total Expenses", format_inr(fin.total_expenses)],
        ["Profit", format_inr(fin.profit)],
    ]
    elements.append(grid_table(summary, [250, 150]))
    elements.append(Spacer(1, 12))

    # -------------------------------
    # Workflow
    # -------------------------------
    workflow = order.workflow_status.model_dump(mode="json")
    rows = [["Task", "Done"]]
    rows += [[field.replace("_", " ").title(), workflow[field]] for field in WORKFLOW_FIELDS]
    elements.append(Paragraph("<b>Workflow</b>", styles["Heading3"]))
    elements.append(grid_table(rows, [250, 150]))
    elements.append(Spacer(1, 12))

    # -------------------------------
    # Payments
    # -------------------------------
    elements.append(Paragraph("<b>Payments</b>", styles["Heading3"]))
    rows = [["Date", "Type", "Notes", "Amount"]]
    rows += [
        [fmt_date(p.date), p.payment_type.value, p.notes or "-", format_inr(p.amount)]
        for p in order.payments
    ]
    rows.append(["", "", "Total", format_inr(fin.total_payments)])
    elements.append(grid_table(rows, [100, 110, 190, 100], total_row=True))
    elements.append(Spacer(1, 12))

    # -------------------------------
    # Expenses
    # -------------------------------
    elements.append(Paragraph("<b>Expenses</b>", styles["Heading3"]))
    rows = [["Date", "Cost Head", "Vendor", "Amount"]]
    rows += [
        [fmt_date(e.date), e.cost_head, e.vendor_name or "-", format_inr(e.amount)]
        for e in order.expenses
    ]
    rows.append(["", "", "Total", format_inr(fin.total_expenses)])
    elements.append(grid_table(rows, [100, 160, 140, 100], total_row=True))

    return build_pdf(elements, f"Order {order.order_number}")
