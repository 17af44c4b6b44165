from pydantic import BaseModel, Field
from datetime import datetime, date as Day
from decimal import Decimal
from typing import Optional, List


class ExpenseCreate(BaseModel):
    order_id: int
    cost_head: str = Field(..., min_length=1, max_length=120)
    amount: Decimal = Field(..., ge=0)
    vendor_name: Optional[str] = None
    description: Optional[str] = None
    date: Day


class ExpenseUpdate(BaseModel):
    cost_head: Optional[str] = Field(None, min_length=1, max_length=120)
    amount: Optional[Decimal] = Field(None, ge=0)
    vendor_name: Optional[str] = None
    description: Optional[str] = None
    date: Optional[Day] = None


class ExpenseOut(BaseModel):
    id: int
    order_id: int
    cost_head: str
    amount: Decimal
    vendor_name: Optional[str]
    description: Optional[str]
    date: Day
    created_at: datetime

    model_config = {"from_attributes": True}


class ExpenseListData(BaseModel):
    total: int
    total_amount: Decimal
    items: List[ExpenseOut]
