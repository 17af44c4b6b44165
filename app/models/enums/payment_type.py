# app/models/enums/payment_type.py
import enum

class PaymentType(str, enum.Enum):
    initial_advance = "Initial Advance"
    function_advance = "Function Advance"
    printing_advance = "Printing Advance"
    final_payment = "Final Payment"
