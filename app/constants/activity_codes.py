import enum


class ActivityCode(str, enum.Enum):
    # AUTH
    LOGIN = "LOGIN"

    # CUSTOMERS
    CREATE_CUSTOMER = "CREATE_CUSTOMER"
    UPDATE_CUSTOMER = "UPDATE_CUSTOMER"
    DELETE_CUSTOMER = "DELETE_CUSTOMER"

    # QUOTATIONS
    CREATE_QUOTATION = "CREATE_QUOTATION"
    UPDATE_QUOTATION = "UPDATE_QUOTATION"
    CONFIRM_QUOTATION = "CONFIRM_QUOTATION"
    DECLINE_QUOTATION = "DECLINE_QUOTATION"
    REOPEN_QUOTATION = "REOPEN_QUOTATION"

    # ORDERS
    CREATE_ORDER = "CREATE_ORDER"
    UPDATE_ORDER = "UPDATE_ORDER"
    DELETE_ORDER = "DELETE_ORDER"

    # LEDGERS
    CREATE_EXPENSE = "CREATE_EXPENSE"
    UPDATE_EXPENSE = "UPDATE_EXPENSE"
    DELETE_EXPENSE = "DELETE_EXPENSE"
    CREATE_PAYMENT = "CREATE_PAYMENT"
    UPDATE_PAYMENT = "UPDATE_PAYMENT"
    DELETE_PAYMENT = "DELETE_PAYMENT"
