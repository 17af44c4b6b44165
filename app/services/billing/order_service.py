from typing import Literal

from sqlalchemy import select, or_, desc
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.billing.order_models import Order
from app.models.billing.quotation_models import Quotation
from app.models.masters.customer_models import Customer
from app.models.enums.workflow_state import WORKFLOW_FIELDS

from app.schemas.billing.order_schemas import (
    OrderUpdate,
    OrderOut,
    OrderDetailOut,
    OrderFinancials,
    OrderListData,
    WorkflowStatus,
)
from app.schemas.billing.expense_schemas import ExpenseOut
from app.schemas.billing.payment_schemas import PaymentOut

from app.core.exceptions import AppException
from app.constants.error_codes import ErrorCode
from app.constants.activity_codes import ActivityCode
from app.services.billing.calculations import order_financials, workflow_label
from app.utils.activity_helpers import emit_activity
from app.utils.logger import get_logger

logger = get_logger(__name__)


def _order_options():
    return (
        selectinload(Order.quotation),
        selectinload(Order.customer),
        selectinload(Order.expenses),
        selectinload(Order.payments),
    )


async def get_order_model(db: AsyncSession, order_id: int) -> Order:
    result = await db.execute(
        select(Order)
        .options(*_order_options())
        .where(Order.id == order_id)
        .execution_options(populate_existing=True)
    )
    order = result.scalar_one_or_none()
    if not order:
        raise AppException(404, "Order not found", ErrorCode.ORDER_NOT_FOUND)
    return order


def compute_financials(order: Order) -> OrderFinancials:
    return OrderFinancials(
        **order_financials(
            order.final_budget,
            order.estimated_budget,
            [e.amount for e in order.expenses],
            [p.amount for p in order.payments],
        )
    )


def _workflow(order: Order) -> WorkflowStatus:
    return WorkflowStatus.model_validate(order.workflow_status or {})


def _map_order(order: Order) -> OrderOut:
    quotation = order.quotation
    return OrderOut(
        id=order.id,
        order_number=order.order_number,
        quotation_id=order.quotation_id,
        quotation_number=quotation.quotation_number if quotation else None,
        customer_id=order.customer_id,
        customer_name=order.customer.name if order.customer else None,
        event_type=quotation.event_type if quotation else None,
        event_date_start=quotation.event_date_start if quotation else None,
        estimated_budget=order.estimated_budget,
        final_budget=order.final_budget,
        workflow_status=_workflow(order),
        # derived on every read, never stored
        status=workflow_label(order.workflow_status),
        financials=compute_financials(order),
        created_at=order.created_at,
    )


def _map_order_detail(order: Order) -> OrderDetailOut:
    return OrderDetailOut(
        **_map_order(order).model_dump(),
        expenses=[
            ExpenseOut.model_validate(e)
            for e in sorted(order.expenses, key=lambda e: (e.date, e.id))
        ],
        payments=[
            PaymentOut.model_validate(p)
            for p in sorted(order.payments, key=lambda p: (p.date, p.id))
        ],
    )


# =====================================================
# READ
# =====================================================
async def get_order(db: AsyncSession, order_id: int) -> OrderDetailOut:
    return _map_order_detail(await get_order_model(db, order_id))


async def load_orders(
    db: AsyncSession,
    *,
    customer_id: int | None = None,
    search: str | None = None,
) -> list[Order]:
    stmt = (
        select(Order)
        .join(Customer, Customer.id == Order.customer_id)
        .outerjoin(Quotation, Quotation.id == Order.quotation_id)
        .options(*_order_options())
        .order_by(desc(Order.created_at), desc(Order.id))
    )

    if customer_id:
        stmt = stmt.where(Order.customer_id == customer_id)

    if search:
        pattern = f"%{search.strip()}%"
        stmt = stmt.where(
            or_(
                Order.order_number.ilike(pattern),
                Quotation.quotation_number.ilike(pattern),
                Customer.name.ilike(pattern),
            )
        )

    result = await db.execute(stmt)
    return list(result.scalars().all())


async def list_orders(
    db: AsyncSession,
    *,
    status: Literal["pending", "completed"] | None = None,
    customer_id: int | None = None,
    search: str | None = None,
    balance_due: bool = False,
    page: int = 1,
    page_size: int = 20,
) -> OrderListData:
    orders = [
        _map_order(o)
        for o in await load_orders(db, customer_id=customer_id, search=search)
    ]

    # status and balance are derived, so they are filtered after mapping
    if status:
        orders = [o for o in orders if o.status == status]

    if balance_due:
        orders = [o for o in orders if o.financials.balance > 0]

    start = (page - 1) * page_size
    return OrderListData(
        total=len(orders),
        items=orders[start:start + page_size],
    )


# =====================================================
# UPDATE
# =====================================================
async def update_order(
    db: AsyncSession,
    order_id: int,
    payload: OrderUpdate,
    user,
) -> OrderDetailOut:
    order = await get_order_model(db, order_id)

    changes: list[str] = []
    data = payload.model_dump(exclude_unset=True, mode="json")

    if "final_budget" in data and payload.final_budget != order.final_budget:
        order.final_budget = payload.final_budget
        changes.append("final_budget")

    if data.get("workflow_status"):
        workflow = dict(order.workflow_status or {})
        for field in WORKFLOW_FIELDS:
            value = data["workflow_status"].get(field)
            if value is not None and workflow.get(field) != value:
                workflow[field] = value
                changes.append(field)
        # reassign so the JSON column is marked dirty
        order.workflow_status = workflow

    if not changes:
        return _map_order_detail(order)

    await emit_activity(
        db,
        actor_email=user.email,
        code=ActivityCode.UPDATE_ORDER,
        target_name=order.order_number,
        changes=", ".join(changes),
    )
    await db.commit()

    logger.info("Order updated", extra={"order_number": order.order_number, "changes": changes})
    return _map_order_detail(await get_order_model(db, order_id))
