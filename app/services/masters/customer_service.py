# app/services/masters/customer_service.py

import re
import uuid
from typing import Optional

from sqlalchemy import select, func, or_, asc, desc
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.masters.customer_models import Customer
from app.models.billing.quotation_models import Quotation
from app.schemas.masters.customer_schema import (
    CustomerCreate,
    CustomerUpdate,
    CustomerOut,
    CustomerListData,
)

from app.core.exceptions import AppException
from app.constants.error_codes import ErrorCode
from app.constants.activity_codes import ActivityCode
from app.utils.activity_helpers import emit_activity
from app.utils.logger import get_logger

logger = get_logger(__name__)

UPDATABLE_FIELDS = (
    "name",
    "phone",
    "email",
    "address",
    "event_type",
    "event_date_start",
    "event_date_end",
    "location",
    "package_type",
    "session_type",
)


def generate_customer_code(name: str, phone: Optional[str]) -> str:
    clean_name = re.sub(r"[^A-Za-z]", "", name or "").upper()
    prefix_name = clean_name[:3].ljust(3, "X")
    digits = re.sub(r"[^0-9]", "", phone or "")
    prefix_phone = digits[-3:] if len(digits) >= 3 else digits.zfill(3)
    unique_part = uuid.uuid4().hex[:6].upper()
    return f"CUST-{prefix_name}{prefix_phone}-{unique_part}"


def _map_customer(customer: Customer) -> CustomerOut:
    return CustomerOut.model_validate(customer)


async def _get_customer_or_404(db: AsyncSession, customer_id: int) -> Customer:
    customer = await db.get(Customer, customer_id)
    if not customer:
        raise AppException(
            404,
            "Customer not found",
            ErrorCode.CUSTOMER_NOT_FOUND,
        )
    return customer


# =========================
# CREATE
# =========================
async def create_customer(db: AsyncSession, payload: CustomerCreate, user) -> CustomerOut:
    customer = Customer(
        customer_code=generate_customer_code(payload.name, payload.phone),
        **payload.model_dump(),
    )
    db.add(customer)

    try:
        await db.flush()
    except IntegrityError:
        raise AppException(
            409,
            "Customer code already exists. Please retry.",
            ErrorCode.CUSTOMER_CODE_EXISTS,
        )

    await emit_activity(
        db,
        actor_email=user.email,
        code=ActivityCode.CREATE_CUSTOMER,
        target_name=customer.name,
    )

    await db.commit()
    await db.refresh(customer)

    logger.info("Customer created", extra={"customer_id": customer.id})
    return _map_customer(customer)


# =========================
# GET
# =========================
async def get_customer(db: AsyncSession, customer_id: int) -> CustomerOut:
    return _map_customer(await _get_customer_or_404(db, customer_id))


# =========================
# LIST
# =========================
async def list_customers(
    db: AsyncSession,
    *,
    search: Optional[str] = None,
    page: int = 1,
    page_size: int = 20,
    sort_by: str = "created_at",
    order: str = "desc",
) -> CustomerListData:
    base_query = select(Customer)

    if search:
        pattern = f"%{search.strip()}%"
        base_query = base_query.where(
            or_(
                Customer.name.ilike(pattern),
                Customer.phone.ilike(pattern),
                Customer.email.ilike(pattern),
                Customer.customer_code.ilike(pattern),
            )
        )

    total = await db.scalar(
        select(func.count()).select_from(base_query.subquery())
    )

    sort_map = {
        "created_at": Customer.created_at,
        "name": Customer.name,
    }
    sort_col = sort_map.get(sort_by, Customer.created_at)

    result = await db.execute(
        base_query
        .order_by(asc(sort_col) if order == "asc" else desc(sort_col), Customer.id)
        .offset((page - 1) * page_size)
        .limit(page_size)
    )

    return CustomerListData(
        total=total or 0,
        items=[_map_customer(c) for c in result.scalars().all()],
    )


# =========================
# UPDATE
# =========================
async def update_customer(
    db: AsyncSession,
    customer_id: int,
    payload: CustomerUpdate,
    user,
) -> CustomerOut:
    customer = await _get_customer_or_404(db, customer_id)

    changes: list[str] = []
    data = payload.model_dump(exclude_unset=True)
    for field in UPDATABLE_FIELDS:
        if field in data and data[field] != getattr(customer, field):
            setattr(customer, field, data[field])
            changes.append(field)

    if not changes:
        return _map_customer(customer)

    await emit_activity(
        db,
        actor_email=user.email,
        code=ActivityCode.UPDATE_CUSTOMER,
        target_name=customer.name,
        changes=", ".join(changes),
    )

    await db.commit()
    await db.refresh(customer)
    return _map_customer(customer)


# =========================
# DELETE
# =========================
async def delete_customer(db: AsyncSession, customer_id: int, user) -> CustomerOut:
    customer = await _get_customer_or_404(db, customer_id)

    has_quotations = await db.scalar(
        select(select(Quotation.id).where(Quotation.customer_id == customer.id).exists())
    )
    if has_quotations:
        raise AppException(
            409,
            "Customer has quotations and cannot be deleted",
            ErrorCode.CUSTOMER_HAS_QUOTATIONS,
        )

    result = _map_customer(customer)

    await db.delete(customer)
    await emit_activity(
        db,
        actor_email=user.email,
        code=ActivityCode.DELETE_CUSTOMER,
        target_name=customer.name,
    )
    await db.commit()

    logger.info("Customer deleted", extra={"customer_id": customer_id})
    return result
