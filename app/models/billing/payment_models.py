from sqlalchemy import Column, Integer, Numeric, String, ForeignKey, Date, Enum, CheckConstraint
from sqlalchemy.orm import relationship
from app.core.db import Base
from app.models.base.mixins import TimestampMixin
from app.models.billing.quotation_models import enum_values
from app.models.enums.payment_type import PaymentType

class Payment(Base, TimestampMixin):
    __tablename__ = "payments"

    id = Column(Integer, primary_key=True)

    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)

    payment_type = Column(Enum(PaymentType, name="paymenttype", values_callable=enum_values), nullable=False)
    amount = Column(Numeric(14, 2), nullable=False)
    date = Column(Date, nullable=False, index=True)
    notes = Column(String, nullable=True)

    order = relationship("Order", back_populates="payments", lazy="select")

    __table_args__ = (CheckConstraint("amount >= 0", name="ck_payment_amount_non_negative"),)

    def __repr__(self):
        return f"<Payment id={self.id} amount={self.amount}>"
