from datetime import date
from decimal import Decimal

from sqlalchemy import select, func, asc, desc
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import lazyload

from app.models.billing.payment_models import Payment
from app.models.billing.order_models import Order
from app.models.enums.payment_type import PaymentType

from app.schemas.billing.payment_schemas import (
    PaymentCreate,
    PaymentUpdate,
    PaymentOut,
    PaymentListData,
)

from app.core.exceptions import AppException
from app.constants.error_codes import ErrorCode
from app.constants.activity_codes import ActivityCode
from app.utils.activity_helpers import emit_activity
from app.utils.logger import get_logger

logger = get_logger(__name__)

UPDATABLE_FIELDS = ("payment_type", "amount", "date", "notes")


# =====================================================
# MAPPER
# =====================================================
def _map_payment(payment: Payment) -> PaymentOut:
    return PaymentOut.model_validate(payment)


async def get_ledger_order(db: AsyncSession, order_id: int) -> Order:
    result = await db.execute(
        select(Order).options(lazyload("*")).where(Order.id == order_id)
    )
    order = result.scalar_one_or_none()
    if not order:
        raise AppException(404, "Order not found", ErrorCode.ORDER_NOT_FOUND)
    return order


async def _get_payment_or_404(db: AsyncSession, payment_id: int) -> Payment:
    result = await db.execute(
        select(Payment)
        .options(lazyload("*"))
        .where(Payment.id == payment_id)
    )

    payment = result.scalar_one_or_none()
    if not payment:
        raise AppException(
            404,
            "Payment not found",
            ErrorCode.PAYMENT_NOT_FOUND,
        )
    return payment


# =====================================================
# CREATE
# =====================================================
async def create_payment(
    db: AsyncSession,
    payload: PaymentCreate,
    user,
) -> PaymentOut:
    order = await get_ledger_order(db, payload.order_id)

    payment = Payment(**payload.model_dump())
    db.add(payment)
    await db.flush()

    await emit_activity(
        db,
        actor_email=user.email,
        code=ActivityCode.CREATE_PAYMENT,
        payment_type=payment.payment_type.value,
        amount=payment.amount,
        target_name=order.order_number,
    )

    await db.commit()
    await db.refresh(payment)

    logger.info(
        "Payment recorded",
        extra={"order_number": order.order_number, "payment_id": payment.id},
    )
    return _map_payment(payment)


# =====================================================
# GET PAYMENT BY ID
# =====================================================
async def get_payment(
    db: AsyncSession,
    payment_id: int,
) -> PaymentOut:
    return _map_payment(await _get_payment_or_404(db, payment_id))


# =====================================================
# LIST PAYMENTS
# =====================================================
async def list_payments(
    db: AsyncSession,
    *,
    order_id: int | None = None,
    customer_id: int | None = None,
    payment_type: PaymentType | None = None,
    min_amount: Decimal | None = None,
    max_amount: Decimal | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
    page: int = 1,
    page_size: int = 20,
    sort_by: str = "date",
    order: str = "desc",
) -> PaymentListData:
    logger.debug(
        "List payments",
        extra={
            "order_id": order_id,
            "customer_id": customer_id,
            "page": page,
            "page_size": page_size,
        },
    )

    # -------------------------------
    # BASE QUERY
    # -------------------------------
    base_query = (
        select(Payment)
        .options(lazyload("*"))
        .join(Order, Payment.order_id == Order.id)
    )

    if order_id:
        base_query = base_query.where(Payment.order_id == order_id)

    if customer_id:
        base_query = base_query.where(Order.customer_id == customer_id)

    if payment_type:
        base_query = base_query.where(Payment.payment_type == payment_type)

    if min_amount is not None:
        base_query = base_query.where(Payment.amount >= min_amount)

    if max_amount is not None:
        base_query = base_query.where(Payment.amount <= max_amount)

    if start_date:
        base_query = base_query.where(Payment.date >= start_date)

    if end_date:
        base_query = base_query.where(Payment.date <= end_date)

    # -------------------------------
    # COUNT (NO SORT)
    # -------------------------------
    total = await db.scalar(
        select(func.count()).select_from(base_query.subquery())
    )

    # -------------------------------
    # SORT + PAGINATION
    # -------------------------------
    sort_map = {
        "date": Payment.date,
        "created_at": Payment.created_at,
        "amount": Payment.amount,
    }
    sort_col = sort_map.get(sort_by, Payment.date)

    stmt = (
        base_query
        .order_by(asc(sort_col) if order == "asc" else desc(sort_col), Payment.id)
        .offset((page - 1) * page_size)
        .limit(page_size)
    )

    result = await db.execute(stmt)
    payments = result.scalars().all()

    return PaymentListData(
        total=total or 0,
        items=[_map_payment(p) for p in payments],
    )


# =====================================================
# UPDATE
# =====================================================
async def update_payment(
    db: AsyncSession,
    payment_id: int,
    payload: PaymentUpdate,
    user,
) -> PaymentOut:
    payment = await _get_payment_or_404(db, payment_id)

    data = payload.model_dump(exclude_unset=True)
    changed = False
    for field in UPDATABLE_FIELDS:
        # amount, type and date cannot be cleared
        if field in data and (data[field] is not None or field == "notes"):
            if data[field] != getattr(payment, field):
                setattr(payment, field, data[field])
                changed = True

    if not changed:
        return _map_payment(payment)

    order = await get_ledger_order(db, payment.order_id)
    await emit_activity(
        db,
        actor_email=user.email,
        code=ActivityCode.UPDATE_PAYMENT,
        payment_id=payment.id,
        target_name=order.order_number,
    )

    await db.commit()
    await db.refresh(payment)
    return _map_payment(payment)


# =====================================================
# DELETE
# =====================================================
async def delete_payment(
    db: AsyncSession,
    payment_id: int,
    user,
) -> PaymentOut:
    payment = await _get_payment_or_404(db, payment_id)
    order = await get_ledger_order(db, payment.order_id)
    result = _map_payment(payment)

    await db.delete(payment)
    await emit_activity(
        db,
        actor_email=user.email,
        code=ActivityCode.DELETE_PAYMENT,
        payment_id=payment_id,
        target_name=order.order_number,
    )
    await db.commit()

    logger.info("Payment deleted", extra={"payment_id": payment_id})
    return result
