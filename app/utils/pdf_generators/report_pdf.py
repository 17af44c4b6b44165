from reportlab.platypus import Paragraph, Spacer

from app.schemas.reports.report_schemas import FinancialReport
from app.utils.decimal_utils import format_inr
from app.utils.pdf_generators.letterhead import (
    build_pdf,
    fmt_date,
    get_styles,
    grid_table,
    letterhead,
    text,
)


def generate_report_pdf(report: FinancialReport) -> bytes:
    styles = get_styles()
    elements = letterhead(styles)

    elements.append(Paragraph(f"<b>{report.period.capitalize()} Financial Report</b>", styles["Heading2"]))
    elements.append(Paragraph(f"Category: {text(report.category)}", styles["Normal"]))
    elements.append(Paragraph(f"Generated: {fmt_date(report.generated_at)}", styles["Normal"]))
    elements.append(Spacer(1, 12))

    rows = [["Order ID", "Customer", "Event Type", "Amount", "Expenses", "Profit", "Date"]]
    rows += [
        [
            r.order_number,
            r.customer_name,
            r.event_type,
            format_inr(r.amount),
            format_inr(r.expenses),
            format_inr(r.profit),
            r.created_at.strftime("%d-%m-%Y"),
        ]
        for r in report.rows
    ]
    rows.append([
        "Total", "", "",
        format_inr(report.total_amount),
        format_inr(report.total_expenses),
        format_inr(report.total_profit),
        "",
    ])
    elements.append(grid_table(rows, [85, 85, 70, 75, 75, 75, 65], total_row=True))

    return build_pdf(elements, f"{report.period.capitalize()} Financial Report")
