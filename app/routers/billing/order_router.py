from typing import Literal

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.utils.get_user import get_current_user
from app.utils.response import success_response, file_response, APIResponse, PDF_MEDIA_TYPE
from app.utils.pdf_generators.order_pdf import generate_order_pdf
from app.utils.logger import get_logger

from app.schemas.billing.order_schemas import (
    OrderUpdate,
    OrderDetailOut,
    OrderListData,
)
from app.services.billing.order_service import (
    get_order,
    list_orders,
    update_order,
)

router = APIRouter(
    prefix="/orders",
    tags=["Orders"],
)
logger = get_logger(__name__)


@router.get(
    "",
    response_model=APIResponse[OrderListData],
)
async def list_orders_api(
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
    status: Literal["pending", "completed"] | None = Query(None),
    customer_id: int | None = Query(None),
    search: str | None = Query(None),
    balance_due: bool = Query(False),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
):
    data = await list_orders(
        db,
        status=status,
        customer_id=customer_id,
        search=search,
        balance_due=balance_due,
        page=page,
        page_size=page_size,
    )
    return success_response("Orders retrieved successfully", data)


@router.get(
    "/{order_id}",
    response_model=APIResponse[OrderDetailOut],
)
async def get_order_api(
    order_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    order = await get_order(db, order_id)
    return success_response("Order retrieved successfully", order)


@router.patch(
    "/{order_id}",
    response_model=APIResponse[OrderDetailOut],
)
async def update_order_api(
    order_id: int,
    payload: OrderUpdate,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    logger.info("Update order", extra={"order_id": order_id})
    order = await update_order(db, order_id, payload, user)
    return success_response("Order updated successfully", order)


@router.get("/{order_id}/pdf")
async def order_pdf_api(
    order_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    order = await get_order(db, order_id)
    return file_response(generate_order_pdf(order), f"{order.order_number}.pdf", PDF_MEDIA_TYPE)
