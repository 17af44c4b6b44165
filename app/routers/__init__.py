# app/routers/__init__.py

from .auth.auth_router import router as auth_router
from .auth.activity_router import router as activity_router

from .masters.customer_router import router as customer_router

from .billing.quotation_router import router as quotation_router
from .billing.order_router import router as order_router
from .billing.expense_router import router as expense_router
from .billing.payment_router import router as payment_router

from .reports.report_router import router as report_router


__all__ = [
"auth_router",
"activity_router",

"customer_router",

"quotation_router",
"order_router",
"expense_router",
"payment_router",

"report_router",
]
