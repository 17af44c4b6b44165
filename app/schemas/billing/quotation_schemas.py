from pydantic import BaseModel, Field
from typing import List, Optional
from decimal import Decimal
from datetime import datetime, date

from app.models.enums.quotation_status import QuotationStatus
from app.models.enums.service_options import ShootType, ServiceStage, SessionType

# =====================================================
# SERVICE LINE ITEMS
# =====================================================

class CoverageService(BaseModel):
    type: ShootType
    stage: ServiceStage
    camera_count: int = Field(1, ge=0)
    rate: Decimal = Field(..., ge=0)
    session: SessionType = SessionType.full


class PhotographyService(CoverageService):
    pass


class VideographyService(CoverageService):
    pass


class AdditionalService(BaseModel):
    name: str = Field(..., min_length=1)
    custom_name: Optional[str] = None
    session: SessionType = SessionType.full
    rate: Decimal = Field(..., ge=0)
    quantity: int = Field(1, ge=1)


class QuotationServices(BaseModel):
    photography: List[PhotographyService] = []
    videography: List[VideographyService] = []
    additional: List[AdditionalService] = []


class QuotationTotalOut(BaseModel):
    customer_total: Decimal


# =====================================================
# QUOTATION CREATE / UPDATE
# =====================================================

class QuotationCreate(BaseModel):
    customer_id: int

    # default to what was captured on the customer at intake
    event_type: Optional[str] = None
    event_date_start: Optional[date] = None
    event_date_end: Optional[date] = None
    location: Optional[str] = None
    package_type: Optional[str] = None
    session_type: Optional[str] = None

    services: QuotationServices = Field(default_factory=QuotationServices)
    manual_total: Optional[Decimal] = Field(None, ge=0)
    deliverables: Optional[dict] = None


class QuotationUpdate(BaseModel):
    event_type: Optional[str] = None
    event_date_start: Optional[date] = None
    event_date_end: Optional[date] = None
    location: Optional[str] = None
    package_type: Optional[str] = None
    session_type: Optional[str] = None

    services: Optional[QuotationServices] = None
    manual_total: Optional[Decimal] = Field(None, ge=0)
    deliverables: Optional[dict] = None

    status: Optional[QuotationStatus] = None
    remarks: Optional[str] = None


class QuotationDecline(BaseModel):
    remarks: str = Field(..., min_length=1)


# =====================================================
# QUOTATION RESPONSES
# =====================================================

class QuotationOut(BaseModel):
    id: int
    quotation_number: str
    customer_id: int
    customer_name: Optional[str]

    event_type: Optional[str]
    event_date_start: Optional[date]
    event_date_end: Optional[date]
    location: Optional[str]
    package_type: Optional[str]
    session_type: Optional[str]

    services: QuotationServices
    deliverables: Optional[dict]

    customer_total: Decimal
    manual_total: Optional[Decimal]
    total: Decimal

    status: QuotationStatus
    remarks: Optional[str]
    confirmed_at: Optional[datetime]

    order_id: Optional[int]
    order_number: Optional[str]

    created_at: datetime
    updated_at: Optional[datetime]


class QuotationListItem(BaseModel):
    id: int
    quotation_number: str
    customer_id: int
    customer_name: Optional[str]
    event_type: Optional[str]
    event_date_start: Optional[date]
    status: QuotationStatus
    total: Decimal
    created_at: datetime


class QuotationListData(BaseModel):
    total: int
    items: List[QuotationListItem]
