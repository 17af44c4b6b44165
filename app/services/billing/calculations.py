"""
Pricing and financial rules for quotations and orders.

Everything here is pure: callers pass plain values (or the stored JSON
service lists) and get Decimals back, so the same rules serve the API,
the dashboard and the exports.
"""
from collections.abc import Mapping
from decimal import Decimal
from typing import Iterable, Optional

from app.models.enums.workflow_state import WorkflowState, WORKFLOW_FIELDS
from app.utils.decimal_utils import ZERO, sum_amounts, to_decimal

SERVICE_GROUPS = ("photography", "videography", "additional")


def _field(item, name: str):
    if isinstance(item, Mapping):
        return item.get(name)
    return getattr(item, name, None)


def service_cost(item) -> Decimal:
    # Only the rate is charged. Camera count, session and quantity describe
    # the booking and are never multiplied in.
    return to_decimal(_field(item, "rate"))


def calculate_quotation_total(services) -> Decimal:
    if not services:
        return ZERO

    total = ZERO
    for group in SERVICE_GROUPS:
        for item in _field(services, group) or []:
            total += service_cost(item)
    return total


def resolve_budget(final_budget=None, estimated_budget=None) -> Decimal:
    if final_budget is not None:
        return to_decimal(final_budget)
    if estimated_budget is not None:
        return to_decimal(estimated_budget)
    return ZERO


def calculate_profit(budget, total_expenses) -> Decimal:
    return to_decimal(budget) - to_decimal(total_expenses)


def calculate_balance(budget, total_payments) -> Decimal:
    return max(ZERO, to_decimal(budget) - to_decimal(total_payments))


def calculate_profit_margin(budget, total_expenses) -> Decimal:
    budget = to_decimal(budget)
    if budget == 0:
        return ZERO
    return to_decimal((budget - to_decimal(total_expenses)) / budget * 100)


def calculate_payment_percentage(amount, budget) -> Decimal:
    budget = to_decimal(budget)
    if budget == 0:
        return ZERO
    return to_decimal(to_decimal(amount) / budget * 100)


def is_workflow_pending(workflow_status: Optional[Mapping]) -> bool:
    status = workflow_status or {}
    return any(status.get(field) == WorkflowState.no.value for field in WORKFLOW_FIELDS)


def workflow_label(workflow_status: Optional[Mapping]) -> str:
    return "pending" if is_workflow_pending(workflow_status) else "completed"


def order_financials(
    final_budget,
    estimated_budget,
    expense_amounts: Iterable,
    payment_amounts: Iterable,
) -> dict:
    budget = resolve_budget(final_budget, estimated_budget)
    total_expenses = sum_amounts(expense_amounts)
    total_payments = sum_amounts(payment_amounts)

    return {
        "budget": budget,
        "total_expenses": total_expenses,
        "total_payments": total_payments,
        "profit": calculate_profit(budget, total_expenses),
        "balance": calculate_balance(budget, total_payments),
        "profit_margin": calculate_profit_margin(budget, total_expenses),
        "payment_percentage": calculate_payment_percentage(total_payments, budget),
    }
