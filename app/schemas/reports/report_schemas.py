from pydantic import BaseModel
from datetime import datetime
from decimal import Decimal
from typing import List, Literal

ReportPeriod = Literal["monthly", "yearly"]


class DashboardStats(BaseModel):
    total_orders: int
    pending_orders: int
    completed_orders: int
    monthly_revenue: Decimal
    yearly_revenue: Decimal
    total_profit: Decimal
    total_balance: Decimal


class ReportRow(BaseModel):
    order_id: int
    order_number: str
    customer_name: str
    event_type: str
    amount: Decimal
    expenses: Decimal
    profit: Decimal
    created_at: datetime


class FinancialReport(BaseModel):
    period: ReportPeriod
    category: str
    generated_at: datetime
    total_amount: Decimal
    total_expenses: Decimal
    total_profit: Decimal
    rows: List[ReportRow]
