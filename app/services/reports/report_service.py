"""
Dashboard figures and the financial report.

Order figures are rolled up in Python from the loaded ledgers so they agree
with what the order endpoints show; revenue is summed in SQL from payment
dates.
"""
from datetime import date, datetime, timezone
from typing import Optional

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.billing.payment_models import Payment
from app.schemas.reports.report_schemas import (
    DashboardStats,
    FinancialReport,
    ReportPeriod,
    ReportRow,
)
from app.services.billing.calculations import (
    calculate_profit,
    is_workflow_pending,
    resolve_budget,
)
from app.services.billing.order_service import compute_financials, load_orders
from app.utils.decimal_utils import ZERO, sum_amounts, to_decimal
from app.utils.logger import get_logger

logger = get_logger(__name__)

ALL_CATEGORIES = "all"
UNKNOWN = "Unknown"


def period_bounds(period: ReportPeriod, today: date) -> tuple[date, date]:
    """Half-open [start, end) range of the month or year containing ``today``."""
    if period == "yearly":
        return date(today.year, 1, 1), date(today.year + 1, 1, 1)

    start = date(today.year, today.month, 1)
    if today.month == 12:
        return start, date(today.year + 1, 1, 1)
    return start, date(today.year, today.month + 1, 1)


def _in_period(created_at: Optional[datetime], period: ReportPeriod, today: date) -> bool:
    if created_at is None:
        return False
    start, end = period_bounds(period, today)
    return start <= created_at.date() < end


async def _revenue_between(db: AsyncSession, start: date, end: date):
    total = await db.scalar(
        select(func.coalesce(func.sum(Payment.amount), 0)).where(
            Payment.date >= start,
            Payment.date < end,
        )
    )
    return to_decimal(total)


# =====================================================
# DASHBOARD
# =====================================================
async def dashboard_stats(db: AsyncSession, today: Optional[date] = None) -> DashboardStats:
    today = today or date.today()
    orders = await load_orders(db)

    pending = sum(1 for o in orders if is_workflow_pending(o.workflow_status))
    financials = [compute_financials(o) for o in orders]

    stats = DashboardStats(
        total_orders=len(orders),
        pending_orders=pending,
        completed_orders=len(orders) - pending,
        monthly_revenue=await _revenue_between(db, *period_bounds("monthly", today)),
        yearly_revenue=await _revenue_between(db, *period_bounds("yearly", today)),
        total_profit=sum((f.profit for f in financials), ZERO),
        total_balance=sum((f.balance for f in financials), ZERO),
    )

    logger.debug("Dashboard computed", extra={"orders": stats.total_orders})
    return stats


# =====================================================
# FINANCIAL REPORT
# =====================================================
async def financial_report(
    db: AsyncSession,
    *,
    period: ReportPeriod = "monthly",
    category: str = ALL_CATEGORIES,
    today: Optional[date] = None,
) -> FinancialReport:
    today = today or date.today()
    category = (category or ALL_CATEGORIES).strip()

    rows: list[ReportRow] = []
    for order in await load_orders(db):
        if not _in_period(order.created_at, period, today):
            continue

        quotation = order.quotation
        event_type = (quotation.event_type or "").strip() if quotation else ""

        if category.lower() != ALL_CATEGORIES and event_type != category:
            continue

        amount = resolve_budget(order.final_budget, order.estimated_budget)
        expenses = sum_amounts(e.amount for e in order.expenses)

        rows.append(
            ReportRow(
                order_id=order.id,
                order_number=order.order_number,
                customer_name=order.customer.name if order.customer else UNKNOWN,
                event_type=event_type or UNKNOWN,
                amount=amount,
                expenses=expenses,
                profit=calculate_profit(amount, expenses),
                created_at=order.created_at,
            )
        )

    rows.sort(key=lambda r: (r.created_at, r.order_id))

    logger.info(
        "Financial report generated",
        extra={"period": period, "category": category, "rows": len(rows)},
    )

    return FinancialReport(
        period=period,
        category=category,
        generated_at=datetime.now(timezone.utc),
        total_amount=sum((r.amount for r in rows), ZERO),
        total_expenses=sum((r.expenses for r in rows), ZERO),
        total_profit=sum((r.profit for r in rows), ZERO),
        rows=rows,
    )
