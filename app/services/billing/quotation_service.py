from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import select, func, asc, desc, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload, lazyload

from app.core.config import QUOTATION_PREFIX, ORDER_PREFIX
from app.models.billing.quotation_models import Quotation
from app.models.billing.order_models import Order, default_workflow_status
from app.models.masters.customer_models import Customer
from app.models.enums.quotation_status import QuotationStatus

from app.schemas.billing.quotation_schemas import (
    QuotationCreate,
    QuotationUpdate,
    QuotationOut,
    QuotationServices,
    QuotationTotalOut,
    QuotationListData,
    QuotationListItem,
)

from app.core.exceptions import AppException
from app.constants.error_codes import ErrorCode
from app.constants.activity_codes import ActivityCode
from app.services.billing.calculations import calculate_quotation_total
from app.services.billing.numbering import add_with_sequence
from app.utils.activity_helpers import emit_activity
from app.utils.logger import get_logger

logger = get_logger(__name__)

EVENT_FIELDS = (
    "event_type",
    "event_date_start",
    "event_date_end",
    "location",
    "package_type",
    "session_type",
)


def _dump_services(services: QuotationServices) -> dict:
    return services.model_dump(mode="json")


async def _get_quotation(
    db: AsyncSession,
    quotation_id: int,
) -> Quotation:
    result = await db.execute(
        select(Quotation)
        .options(
            selectinload(Quotation.customer),
            selectinload(Quotation.order),
        )
        .where(Quotation.id == quotation_id)
        .execution_options(populate_existing=True)
    )
    q = result.scalar_one_or_none()
    if not q:
        raise AppException(404, "Quotation not found", ErrorCode.QUOTATION_NOT_FOUND)
    return q


def _map_quotation(q: Quotation) -> QuotationOut:
    return QuotationOut(
        id=q.id,
        quotation_number=q.quotation_number,
        customer_id=q.customer_id,
        customer_name=q.customer.name if q.customer else None,
        event_type=q.event_type,
        event_date_start=q.event_date_start,
        event_date_end=q.event_date_end,
        location=q.location,
        package_type=q.package_type,
        session_type=q.session_type,
        services=QuotationServices.model_validate(q.services or {}),
        deliverables=q.deliverables,
        customer_total=q.customer_total,
        manual_total=q.manual_total,
        total=q.effective_total,
        status=q.status,
        remarks=q.remarks,
        confirmed_at=q.confirmed_at,
        order_id=q.order.id if q.order else None,
        order_number=q.order.order_number if q.order else None,
        created_at=q.created_at,
        updated_at=q.updated_at,
    )


def preview_total(services: QuotationServices) -> QuotationTotalOut:
    return QuotationTotalOut(customer_total=calculate_quotation_total(_dump_services(services)))


# =====================================================
# CREATE
# =====================================================
async def create_quotation(
    db: AsyncSession,
    payload: QuotationCreate,
    user,
) -> QuotationOut:
    customer = await db.get(Customer, payload.customer_id)
    if not customer:
        raise AppException(404, "Customer not found", ErrorCode.CUSTOMER_NOT_FOUND)

    services = _dump_services(payload.services)
    customer_total = calculate_quotation_total(services)

    # fields omitted on the quotation fall back to what intake captured
    event_details = {
        field: getattr(payload, field) if getattr(payload, field) is not None else getattr(customer, field)
        for field in EVENT_FIELDS
    }

    def build(number: str) -> Quotation:
        return Quotation(
            quotation_number=number,
            customer_id=payload.customer_id,
            status=QuotationStatus.pending,
            services=services,
            deliverables=payload.deliverables,
            customer_total=customer_total,
            manual_total=payload.manual_total,
            **event_details,
        )

    q = await add_with_sequence(db, build, Quotation.quotation_number, QUOTATION_PREFIX)

    await emit_activity(
        db,
        actor_email=user.email,
        code=ActivityCode.CREATE_QUOTATION,
        target_name=q.quotation_number,
        amount=q.effective_total,
    )

    await db.commit()

    logger.info("Quotation created", extra={"quotation_number": q.quotation_number})
    return _map_quotation(await _get_quotation(db, q.id))


# =====================================================
# READ
# =====================================================
async def get_quotation(
    db: AsyncSession,
    quotation_id: int,
) -> QuotationOut:
    return _map_quotation(await _get_quotation(db, quotation_id))


async def list_quotations(
    db: AsyncSession,
    customer_id: int | None = None,
    status: QuotationStatus | None = None,
    search: str | None = None,
    page: int = 1,
    page_size: int = 20,
    sort_by: str = "created_at",
    order: str = "desc",
) -> QuotationListData:
    base_query = (
        select(Quotation)
        .join(Customer, Customer.id == Quotation.customer_id)
        .options(selectinload(Quotation.customer), lazyload(Quotation.order))
    )

    if customer_id:
        base_query = base_query.where(Quotation.customer_id == customer_id)

    if status:
        base_query = base_query.where(Quotation.status == status)

    if search:
        pattern = f"%{search.strip()}%"
        base_query = base_query.where(
            or_(
                Quotation.quotation_number.ilike(pattern),
                Customer.name.ilike(pattern),
                Customer.phone.ilike(pattern),
            )
        )

    total = await db.scalar(
        select(func.count()).select_from(base_query.subquery())
    )

    sort_map = {
        "created_at": Quotation.created_at,
        "quotation_number": Quotation.quotation_number,
        "event_date": Quotation.event_date_start,
    }
    sort_col = sort_map.get(sort_by, Quotation.created_at)

    result = await db.execute(
        base_query
        .order_by(asc(sort_col) if order == "asc" else desc(sort_col), Quotation.id)
        .offset((page - 1) * page_size)
        .limit(page_size)
    )

    items = [
        QuotationListItem(
            id=q.id,
            quotation_number=q.quotation_number,
            customer_id=q.customer_id,
            customer_name=q.customer.name if q.customer else None,
            event_type=q.event_type,
            event_date_start=q.event_date_start,
            status=q.status,
            total=q.effective_total,
            created_at=q.created_at,
        )
        for q in result.scalars().all()
    ]

    return QuotationListData(
        total=total or 0,
        items=items,
    )


# =====================================================
# STATUS TRANSITIONS
# =====================================================
def _sync_order_budget(order: Order, total: Decimal) -> None:
    order.estimated_budget = total
    order.final_budget = total


async def _confirm(db: AsyncSession, q: Quotation, user) -> Quotation:
    total = q.effective_total
    order = q.order

    if order is not None:
        # never a second order for the same quotation
        _sync_order_budget(order, total)
        logger.info("Reusing order on confirm", extra={"order_number": order.order_number})
    else:
        def build(number: str) -> Order:
            return Order(
                order_number=number,
                quotation_id=q.id,
                customer_id=q.customer_id,
                estimated_budget=total,
                final_budget=total,
                workflow_status=default_workflow_status(),
            )

        order = await add_with_sequence(db, build, Order.order_number, ORDER_PREFIX)
        q.order = order

        await emit_activity(
            db,
            actor_email=user.email,
            code=ActivityCode.CREATE_ORDER,
            target_name=order.order_number,
            quotation_number=q.quotation_number,
            amount=total,
        )
        logger.info("Order created", extra={"order_number": order.order_number})

    q.status = QuotationStatus.confirmed
    q.confirmed_at = datetime.now(timezone.utc)

    await emit_activity(
        db,
        actor_email=user.email,
        code=ActivityCode.CONFIRM_QUOTATION,
        target_name=q.quotation_number,
        order_number=order.order_number,
    )
    return q


async def _decline(db: AsyncSession, q: Quotation, remarks: str | None, user) -> Quotation:
    remarks = (remarks if remarks is not None else q.remarks) or ""
    if not remarks.strip():
        raise AppException(
            422,
            "Remarks are required when declining a quotation",
            ErrorCode.QUOTATION_REMARKS_REQUIRED,
        )

    order = q.order
    if order is not None:
        payments, expenses = len(order.payments), len(order.expenses)
        q.order = None
        await db.delete(order)

        await emit_activity(
            db,
            actor_email=user.email,
            code=ActivityCode.DELETE_ORDER,
            target_name=order.order_number,
            payments=payments,
            expenses=expenses,
        )
        logger.info(
            "Order removed on decline",
            extra={"order_number": order.order_number, "payments": payments},
        )

    q.status = QuotationStatus.declined
    q.remarks = remarks.strip()

    await emit_activity(
        db,
        actor_email=user.email,
        code=ActivityCode.DECLINE_QUOTATION,
        target_name=q.quotation_number,
        remarks=q.remarks,
    )
    return q


async def _reopen(db: AsyncSession, q: Quotation, user) -> Quotation:
    # any order created by an earlier confirmation is left untouched
    q.status = QuotationStatus.pending

    await emit_activity(
        db,
        actor_email=user.email,
        code=ActivityCode.REOPEN_QUOTATION,
        target_name=q.quotation_number,
    )
    return q


async def _transition(
    db: AsyncSession,
    q: Quotation,
    status: QuotationStatus,
    remarks: str | None,
    user,
) -> Quotation:
    if status == QuotationStatus.confirmed:
        return await _confirm(db, q, user)
    if status == QuotationStatus.declined:
        return await _decline(db, q, remarks, user)
    return await _reopen(db, q, user)


# =====================================================
# UPDATE
# =====================================================
async def update_quotation(
    db: AsyncSession,
    quotation_id: int,
    payload: QuotationUpdate,
    user,
) -> QuotationOut:
    q = await _get_quotation(db, quotation_id)

    # confirmed quotations stay editable
    changes: list[str] = []
    data = payload.model_dump(exclude_unset=True)

    for field in EVENT_FIELDS:
        if field in data and data[field] != getattr(q, field):
            setattr(q, field, data[field])
            changes.append(field)

    if payload.services is not None:
        q.services = _dump_services(payload.services)
        q.customer_total = calculate_quotation_total(q.services)
        changes.append("services")

    if "manual_total" in data and data["manual_total"] != q.manual_total:
        q.manual_total = data["manual_total"]
        changes.append("manual_total")

    if "deliverables" in data:
        q.deliverables = data["deliverables"]
        changes.append("deliverables")

    if q.order is not None and ("services" in changes or "manual_total" in changes):
        _sync_order_budget(q.order, q.effective_total)

    if payload.remarks is not None and payload.status is None:
        q.remarks = payload.remarks
        changes.append("remarks")

    if changes:
        await emit_activity(
            db,
            actor_email=user.email,
            code=ActivityCode.UPDATE_QUOTATION,
            target_name=q.quotation_number,
            changes=", ".join(changes),
        )

    if payload.status is not None:
        q = await _transition(db, q, payload.status, payload.remarks, user)
        logger.info(
            "Quotation status changed",
            extra={"quotation_number": q.quotation_number, "status": payload.status.value},
        )

    await db.commit()
    return _map_quotation(await _get_quotation(db, quotation_id))


async def change_quotation_status(
    db: AsyncSession,
    quotation_id: int,
    status: QuotationStatus,
    user,
    remarks: str | None = None,
) -> QuotationOut:
    return await update_quotation(
        db,
        quotation_id,
        QuotationUpdate(status=status, remarks=remarks),
        user,
    )
