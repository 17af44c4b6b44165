# Masters
from app.models.masters.customer_models import Customer

# Billing
from app.models.billing.quotation_models import Quotation
from app.models.billing.order_models import Order
from app.models.billing.expense_models import Expense
from app.models.billing.payment_models import Payment

# Support
from app.models.support.activity_models import ActivityLog
