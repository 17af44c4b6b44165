import enum


class ErrorCode(str, enum.Enum):
    # ---------------- GENERIC ----------------
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    INTERNAL_ERROR = "INTERNAL_ERROR"

    # ---------------- AUTH ----------------
    INVALID_OAUTH_TOKEN = "INVALID_OAUTH_TOKEN"
    EMAIL_NOT_ALLOWED = "EMAIL_NOT_ALLOWED"
    OAUTH_NOT_CONFIGURED = "OAUTH_NOT_CONFIGURED"

    # ---------------- CUSTOMERS ----------------
    CUSTOMER_NOT_FOUND = "CUSTOMER_NOT_FOUND"
    CUSTOMER_CODE_EXISTS = "CUSTOMER_CODE_EXISTS"
    CUSTOMER_HAS_QUOTATIONS = "CUSTOMER_HAS_QUOTATIONS"

    # ---------------- QUOTATIONS ----------------
    QUOTATION_NOT_FOUND = "QUOTATION_NOT_FOUND"
    QUOTATION_REMARKS_REQUIRED = "QUOTATION_REMARKS_REQUIRED"

    # ---------------- ORDERS ----------------
    ORDER_NOT_FOUND = "ORDER_NOT_FOUND"

    # ---------------- LEDGERS ----------------
    EXPENSE_NOT_FOUND = "EXPENSE_NOT_FOUND"
    PAYMENT_NOT_FOUND = "PAYMENT_NOT_FOUND"
