from app.constants.activity_codes import ActivityCode


ACTIVITY_TEMPLATES = {
    # ---------------- AUTH ----------------
    ActivityCode.LOGIN:
        "{actor_email} signed in with Google",

    # ---------------- CUSTOMERS ----------------
    ActivityCode.CREATE_CUSTOMER:
        "{actor_email} created customer {target_name}",

    ActivityCode.UPDATE_CUSTOMER:
        "{actor_email} updated customer {target_name}: {changes}",

    ActivityCode.DELETE_CUSTOMER:
        "{actor_email} deleted customer {target_name}",

    # ---------------- QUOTATIONS ----------------
    ActivityCode.CREATE_QUOTATION:
        "{actor_email} created quotation {target_name} for {amount}",

    ActivityCode.UPDATE_QUOTATION:
        "{actor_email} updated quotation {target_name}: {changes}",

    ActivityCode.CONFIRM_QUOTATION:
        "{actor_email} confirmed quotation {target_name} (order {order_number})",

    ActivityCode.DECLINE_QUOTATION:
        "{actor_email} declined quotation {target_name}: {remarks}",

    ActivityCode.REOPEN_QUOTATION:
        "{actor_email} moved quotation {target_name} back to Pending",

    # ---------------- ORDERS ----------------
    ActivityCode.CREATE_ORDER:
        "Order {target_name} created from quotation {quotation_number} with budget {amount}",

    ActivityCode.UPDATE_ORDER:
        "{actor_email} updated order {target_name}: {changes}",

    ActivityCode.DELETE_ORDER:
        "Order {target_name} deleted with {payments} payment(s) and {expenses} expense(s)",

    # ---------------- EXPENSES ----------------
    ActivityCode.CREATE_EXPENSE:
        "{actor_email} recorded expense {cost_head} of {amount} on order {target_name}",

    ActivityCode.UPDATE_EXPENSE:
        "{actor_email} updated expense #{expense_id} on order {target_name}",

    ActivityCode.DELETE_EXPENSE:
        "{actor_email} deleted expense #{expense_id} on order {target_name}",

    # ---------------- PAYMENTS ----------------
    ActivityCode.CREATE_PAYMENT:
        "{actor_email} recorded {payment_type} of {amount} on order {target_name}",

    ActivityCode.UPDATE_PAYMENT:
        "{actor_email} updated payment #{payment_id} on order {target_name}",

    ActivityCode.DELETE_PAYMENT:
        "{actor_email} deleted payment #{payment_id} on order {target_name}",
}
