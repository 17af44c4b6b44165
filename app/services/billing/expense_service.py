from datetime import date

from sqlalchemy import select, func, asc, desc
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import lazyload

from app.models.billing.expense_models import Expense
from app.models.billing.order_models import Order

from app.schemas.billing.expense_schemas import (
    ExpenseCreate,
    ExpenseUpdate,
    ExpenseOut,
    ExpenseListData,
)

from app.core.exceptions import AppException
from app.constants.error_codes import ErrorCode
from app.constants.activity_codes import ActivityCode
from app.services.billing.payment_service import get_ledger_order
from app.utils.activity_helpers import emit_activity
from app.utils.decimal_utils import to_decimal
from app.utils.logger import get_logger

logger = get_logger(__name__)

REQUIRED_FIELDS = ("cost_head", "amount", "date")
UPDATABLE_FIELDS = REQUIRED_FIELDS + ("vendor_name", "description")


def _map_expense(expense: Expense) -> ExpenseOut:
    return ExpenseOut.model_validate(expense)


async def _get_expense_or_404(db: AsyncSession, expense_id: int) -> Expense:
    result = await db.execute(
        select(Expense).options(lazyload("*")).where(Expense.id == expense_id)
    )
    expense = result.scalar_one_or_none()
    if not expense:
        raise AppException(404, "Expense not found", ErrorCode.EXPENSE_NOT_FOUND)
    return expense


# =========================
# CREATE
# =========================
async def create_expense(db: AsyncSession, payload: ExpenseCreate, user) -> ExpenseOut:
    order = await get_ledger_order(db, payload.order_id)

    data = payload.model_dump()
    data["cost_head"] = data["cost_head"].strip()
    expense = Expense(**data)
    db.add(expense)
    await db.flush()

    await emit_activity(
        db,
        actor_email=user.email,
        code=ActivityCode.CREATE_EXPENSE,
        cost_head=expense.cost_head,
        amount=expense.amount,
        target_name=order.order_number,
    )

    await db.commit()
    await db.refresh(expense)

    logger.info(
        "Expense recorded",
        extra={"order_number": order.order_number, "expense_id": expense.id},
    )
    return _map_expense(expense)


# =========================
# GET
# =========================
async def get_expense(db: AsyncSession, expense_id: int) -> ExpenseOut:
    return _map_expense(await _get_expense_or_404(db, expense_id))


# =========================
# LIST
# =========================
async def list_expenses(
    db: AsyncSession,
    *,
    order_id: int | None = None,
    cost_head: str | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
    page: int = 1,
    page_size: int = 20,
    sort_by: str = "date",
    order: str = "desc",
) -> ExpenseListData:
    base_query = (
        select(Expense)
        .options(lazyload("*"))
        .join(Order, Expense.order_id == Order.id)
    )

    if order_id:
        base_query = base_query.where(Expense.order_id == order_id)

    if cost_head:
        base_query = base_query.where(Expense.cost_head.ilike(f"%{cost_head.strip()}%"))

    if start_date:
        base_query = base_query.where(Expense.date >= start_date)

    if end_date:
        base_query = base_query.where(Expense.date <= end_date)

    filtered = base_query.subquery()
    total = await db.scalar(select(func.count()).select_from(filtered))
    total_amount = await db.scalar(
        select(func.coalesce(func.sum(filtered.c.amount), 0))
    )

    sort_map = {
        "date": Expense.date,
        "created_at": Expense.created_at,
        "amount": Expense.amount,
        "cost_head": Expense.cost_head,
    }
    sort_col = sort_map.get(sort_by, Expense.date)

    result = await db.execute(
        base_query
        .order_by(asc(sort_col) if order == "asc" else desc(sort_col), Expense.id)
        .offset((page - 1) * page_size)
        .limit(page_size)
    )

    return ExpenseListData(
        total=total or 0,
        total_amount=to_decimal(total_amount),
        items=[_map_expense(e) for e in result.scalars().all()],
    )


# =========================
# UPDATE
# =========================
async def update_expense(
    db: AsyncSession,
    expense_id: int,
    payload: ExpenseUpdate,
    user,
) -> ExpenseOut:
    expense = await _get_expense_or_404(db, expense_id)

    data = payload.model_dump(exclude_unset=True)
    if data.get("cost_head"):
        data["cost_head"] = data["cost_head"].strip()

    changed = False
    for field in UPDATABLE_FIELDS:
        if field not in data:
            continue
        if field in REQUIRED_FIELDS and data[field] is None:
            continue
        if data[field] != getattr(expense, field):
            setattr(expense, field, data[field])
            changed = True

    if not changed:
        return _map_expense(expense)

    order = await get_ledger_order(db, expense.order_id)
    await emit_activity(
        db,
        actor_email=user.email,
        code=ActivityCode.UPDATE_EXPENSE,
        expense_id=expense.id,
        target_name=order.order_number,
    )

    await db.commit()
    await db.refresh(expense)
    return _map_expense(expense)


# =========================
# DELETE
# =========================
async def delete_expense(db: AsyncSession, expense_id: int, user) -> ExpenseOut:
    expense = await _get_expense_or_404(db, expense_id)
    order = await get_ledger_order(db, expense.order_id)
    result = _map_expense(expense)

    await db.delete(expense)
    await emit_activity(
        db,
        actor_email=user.email,
        code=ActivityCode.DELETE_EXPENSE,
        expense_id=expense_id,
        target_name=order.order_number,
    )
    await db.commit()

    logger.info("Expense deleted", extra={"expense_id": expense_id})
    return result
