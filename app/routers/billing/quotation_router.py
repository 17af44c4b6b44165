from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.utils.get_user import get_current_user
from app.utils.response import success_response, file_response, APIResponse, PDF_MEDIA_TYPE
from app.utils.pdf_generators.quotation_pdf import generate_quotation_pdf
from app.utils.logger import get_logger

from app.constants.studio import EVENT_TYPES, PACKAGE_TYPES, ADDITIONAL_SERVICES
from app.models.enums.quotation_status import QuotationStatus
from app.models.enums.service_options import ShootType, ServiceStage, SessionType
from app.schemas.billing.quotation_schemas import (
    QuotationCreate,
    QuotationUpdate,
    QuotationDecline,
    QuotationServices,
    QuotationTotalOut,
    QuotationOut,
    QuotationListData,
)

from app.services.billing.quotation_service import (
    create_quotation,
    update_quotation,
    change_quotation_status,
    get_quotation,
    list_quotations,
    preview_total,
)

router = APIRouter(
    prefix="/quotations",
    tags=["Quotations"],
)
logger = get_logger(__name__)


@router.post(
    "",
    response_model=APIResponse[QuotationOut],
)
async def create_quotation_api(
    payload: QuotationCreate,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    quotation = await create_quotation(db, payload, user)
    return success_response(
        "Quotation created successfully",
        quotation,
    )


@router.post(
    "/calculate",
    response_model=APIResponse[QuotationTotalOut],
)
async def calculate_quotation_api(
    payload: QuotationServices,
    user=Depends(get_current_user),
):
    return success_response("Quotation total calculated", preview_total(payload))


@router.get("/options")
async def quotation_options_api(user=Depends(get_current_user)):
    return success_response(
        "Quotation options retrieved successfully",
        {
            "event_types": EVENT_TYPES,
            "package_types": PACKAGE_TYPES,
            "additional_services": ADDITIONAL_SERVICES,
            "shoot_types": [t.value for t in ShootType],
            "service_stages": [s.value for s in ServiceStage],
            "session_types": [s.value for s in SessionType],
        },
    )


@router.get(
    "",
    response_model=APIResponse[QuotationListData],
)
async def list_quotations_api(
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
    customer_id: int | None = Query(None),
    status: QuotationStatus | None = Query(None),
    search: str | None = Query(None),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    sort_by: str = Query("created_at"),
    order: str = Query("desc"),
):
    data = await list_quotations(
        db=db,
        customer_id=customer_id,
        status=status,
        search=search,
        page=page,
        page_size=page_size,
        sort_by=sort_by,
        order=order,
    )
    return success_response(
        "Quotations retrieved successfully",
        data,
    )


@router.get(
    "/{quotation_id}",
    response_model=APIResponse[QuotationOut],
)
async def get_quotation_api(
    quotation_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    quotation = await get_quotation(db, quotation_id)
    return success_response(
        "Quotation retrieved successfully",
        quotation,
    )


@router.patch(
    "/{quotation_id}",
    response_model=APIResponse[QuotationOut],
)
async def update_quotation_api(
    quotation_id: int,
    payload: QuotationUpdate,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    quotation = await update_quotation(db, quotation_id, payload, user)
    return success_response(
        "Quotation updated successfully",
        quotation,
    )


@router.post(
    "/{quotation_id}/confirm",
    response_model=APIResponse[QuotationOut],
)
async def confirm_quotation_api(
    quotation_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    logger.info("Confirm quotation", extra={"quotation_id": quotation_id})
    quotation = await change_quotation_status(db, quotation_id, QuotationStatus.confirmed, user)
    return success_response(
        "Quotation confirmed successfully",
        quotation,
    )


@router.post(
    "/{quotation_id}/decline",
    response_model=APIResponse[QuotationOut],
)
async def decline_quotation_api(
    quotation_id: int,
    payload: QuotationDecline,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    logger.info("Decline quotation", extra={"quotation_id": quotation_id})
    quotation = await change_quotation_status(
        db, quotation_id, QuotationStatus.declined, user, remarks=payload.remarks
    )
    return success_response(
        "Quotation declined successfully",
        quotation,
    )


@router.post(
    "/{quotation_id}/reopen",
    response_model=APIResponse[QuotationOut],
)
async def reopen_quotation_api(
    quotation_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    quotation = await change_quotation_status(db, quotation_id, QuotationStatus.pending, user)
    return success_response(
        "Quotation moved back to pending",
        quotation,
    )


@router.get("/{quotation_id}/pdf")
async def quotation_pdf_api(
    quotation_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    quotation = await get_quotation(db, quotation_id)
    content = generate_quotation_pdf(quotation)
    return file_response(content, f"{quotation.quotation_number}.pdf", PDF_MEDIA_TYPE)
