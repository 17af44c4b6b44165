from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.utils.get_user import get_current_user
from app.utils.response import success_response, APIResponse

from app.schemas.billing.expense_schemas import (
    ExpenseCreate,
    ExpenseUpdate,
    ExpenseOut,
    ExpenseListData,
)
from app.services.billing.expense_service import (
    create_expense,
    get_expense,
    list_expenses,
    update_expense,
    delete_expense,
)

router = APIRouter(prefix="/expenses", tags=["Expenses"])


@router.post("", response_model=APIResponse[ExpenseOut])
async def create_expense_api(
    payload: ExpenseCreate,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    expense = await create_expense(db, payload, user)
    return success_response("Expense recorded successfully", expense)


@router.get("/{expense_id}", response_model=APIResponse[ExpenseOut])
async def get_expense_api(
    expense_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    expense = await get_expense(db, expense_id)
    return success_response("Expense retrieved successfully", expense)


@router.get("", response_model=APIResponse[ExpenseListData])
async def list_expenses_api(
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),

    order_id: Optional[int] = Query(None),
    cost_head: Optional[str] = Query(None),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),

    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    sort_by: str = Query("date"),
    order: str = Query("desc"),
):
    data = await list_expenses(
        db,
        order_id=order_id,
        cost_head=cost_head,
        start_date=start_date,
        end_date=end_date,
        page=page,
        page_size=page_size,
        sort_by=sort_by,
        order=order,
    )
    return success_response("Expenses retrieved successfully", data)


@router.patch("/{expense_id}", response_model=APIResponse[ExpenseOut])
async def update_expense_api(
    expense_id: int,
    payload: ExpenseUpdate,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    expense = await update_expense(db, expense_id, payload, user)
    return success_response("Expense updated successfully", expense)


@router.delete("/{expense_id}", response_model=APIResponse[ExpenseOut])
async def delete_expense_api(
    expense_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    expense = await delete_expense(db, expense_id, user)
    return success_response("Expense deleted successfully", expense)
