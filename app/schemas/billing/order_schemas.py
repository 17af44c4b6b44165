from pydantic import BaseModel, Field
from datetime import datetime, date
from decimal import Decimal
from typing import Optional, List, Literal

from app.models.enums.workflow_state import WorkflowState
from app.schemas.billing.expense_schemas import ExpenseOut
from app.schemas.billing.payment_schemas import PaymentOut


class WorkflowStatus(BaseModel):
    photo_selection: WorkflowState = WorkflowState.no
    album_design: WorkflowState = WorkflowState.no
    album_printing: WorkflowState = WorkflowState.no
    video_editing: WorkflowState = WorkflowState.no
    outdoor_shoot: WorkflowState = WorkflowState.no
    album_delivery: WorkflowState = WorkflowState.no


class WorkflowStatusUpdate(BaseModel):
    photo_selection: Optional[WorkflowState] = None
    album_design: Optional[WorkflowState] = None
    album_printing: Optional[WorkflowState] = None
    video_editing: Optional[WorkflowState] = None
    outdoor_shoot: Optional[WorkflowState] = None
    album_delivery: Optional[WorkflowState] = None


class OrderUpdate(BaseModel):
    final_budget: Optional[Decimal] = Field(None, ge=0)
    workflow_status: Optional[WorkflowStatusUpdate] = None


class OrderFinancials(BaseModel):
    budget: Decimal
    total_expenses: Decimal
    total_payments: Decimal
    profit: Decimal
    balance: Decimal
    profit_margin: Decimal
    payment_percentage: Decimal


class OrderOut(BaseModel):
    id: int
    order_number: str
    quotation_id: Optional[int]
    quotation_number: Optional[str]
    customer_id: int
    customer_name: Optional[str]
    event_type: Optional[str]
    event_date_start: Optional[date]

    estimated_budget: Optional[Decimal]
    final_budget: Optional[Decimal]
    workflow_status: WorkflowStatus
    status: Literal["pending", "completed"]

    financials: OrderFinancials
    created_at: datetime


class OrderDetailOut(OrderOut):
    expenses: List[ExpenseOut]
    payments: List[PaymentOut]


class OrderListData(BaseModel):
    total: int
    items: List[OrderOut]
