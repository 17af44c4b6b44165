from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from datetime import date
from decimal import Decimal

from app.core.db import get_db
from app.models.enums.payment_type import PaymentType
from app.utils.get_user import get_current_user
from app.utils.response import success_response, APIResponse

from app.services.billing.payment_service import (
    create_payment,
    get_payment,
    list_payments,
    update_payment,
    delete_payment,
)

from app.schemas.billing.payment_schemas import (
    PaymentCreate,
    PaymentUpdate,
    PaymentOut,
    PaymentListData,
)

router = APIRouter(
    prefix="/payments",
    tags=["Payments"],
)


# =====================================================
# CREATE PAYMENT
# =====================================================
@router.post(
    "",
    response_model=APIResponse[PaymentOut],
)
async def create_payment_api(
    payload: PaymentCreate,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    payment = await create_payment(db, payload, user)
    return success_response("Payment recorded successfully", payment)


# =====================================================
# GET PAYMENT BY ID
# =====================================================
@router.get(
    "/{payment_id}",
    response_model=APIResponse[PaymentOut],
)
async def get_payment_api(
    payment_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    payment = await get_payment(db, payment_id)
    return success_response("Payment retrieved successfully", payment)


# =====================================================
# LIST PAYMENTS
# =====================================================
@router.get(
    "",
    response_model=APIResponse[PaymentListData],
)
async def list_payments_api(
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),

    order_id: int | None = Query(None),
    customer_id: int | None = Query(None),
    payment_type: PaymentType | None = Query(None),
    min_amount: Decimal | None = Query(None, ge=0),
    max_amount: Decimal | None = Query(None, ge=0),
    start_date: date | None = Query(None),
    end_date: date | None = Query(None),

    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),

    sort_by: str = Query("date"),
    order: str = Query("desc"),
):
    data = await list_payments(
        db=db,
        order_id=order_id,
        customer_id=customer_id,
        payment_type=payment_type,
        min_amount=min_amount,
        max_amount=max_amount,
        start_date=start_date,
        end_date=end_date,
        page=page,
        page_size=page_size,
        sort_by=sort_by,
        order=order,
    )

    return success_response("Payments retrieved successfully", data)


# =====================================================
# UPDATE / DELETE
# =====================================================
@router.patch(
    "/{payment_id}",
    response_model=APIResponse[PaymentOut],
)
async def update_payment_api(
    payment_id: int,
    payload: PaymentUpdate,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    payment = await update_payment(db, payment_id, payload, user)
    return success_response("Payment updated successfully", payment)


@router.delete(
    "/{payment_id}",
    response_model=APIResponse[PaymentOut],
)
async def delete_payment_api(
    payment_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    payment = await delete_payment(db, payment_id, user)
    return success_response("Payment deleted successfully", payment)
