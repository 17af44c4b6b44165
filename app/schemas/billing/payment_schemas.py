from pydantic import BaseModel, Field
from datetime import datetime, date as Day
from decimal import Decimal
from typing import Optional, List

from app.models.enums.payment_type import PaymentType


# =========================
# IN
# =========================
class PaymentCreate(BaseModel):
    order_id: int
    payment_type: PaymentType
    amount: Decimal = Field(..., ge=0)
    date: Day
    notes: Optional[str] = None


class PaymentUpdate(BaseModel):
    payment_type: Optional[PaymentType] = None
    amount: Optional[Decimal] = Field(None, ge=0)
    date: Optional[Day] = None
    notes: Optional[str] = None


# =========================
# OUT
# =========================
class PaymentOut(BaseModel):
    id: int
    order_id: int
    payment_type: PaymentType
    amount: Decimal
    date: Day
    notes: Optional[str]
    created_at: datetime

    model_config = {"from_attributes": True}


# =========================
# LIST DATA
# =========================
class PaymentListData(BaseModel):
    total: int
    items: List[PaymentOut]
