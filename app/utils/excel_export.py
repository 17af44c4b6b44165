import io

from openpyxl import Workbook
from openpyxl.styles import Font

from app.schemas.reports.report_schemas import FinancialReport

REPORT_HEADERS = ["Order ID", "Customer", "Event Type", "Amount", "Expenses", "Profit", "Date"]


def generate_report_excel(report: FinancialReport) -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.title = "Report"

    ws.append(REPORT_HEADERS)
    for cell in ws[1]:
        cell.font = Font(bold=True)

    for r in report.rows:
        ws.append([
            r.order_number,
            r.customer_name,
            r.event_type,
            float(r.amount),
            float(r.expenses),
            float(r.profit),
            r.created_at.date(),
        ])

    ws.append([])
    ws.append([
        "TOTAL",
        None,
        None,
        float(report.total_amount),
        float(report.total_expenses),
        float(report.total_profit),
        None,
    ])
    for cell in ws[ws.max_row]:
        cell.font = Font(bold=True)

    for column, width in zip("ABCDEFG", (18, 24, 16, 14, 14, 14, 12)):
        ws.column_dimensions[column].width = width

    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()
