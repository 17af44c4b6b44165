# app/models/enums/quotation_status.py
import enum

class QuotationStatus(str, enum.Enum):
    pending = "Pending"
    confirmed = "Confirmed"
    declined = "Declined"
