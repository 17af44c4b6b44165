from sqlalchemy import Column, Integer, Numeric, String, ForeignKey, Date, CheckConstraint
from sqlalchemy.orm import relationship
from app.core.db import Base
from app.models.base.mixins import TimestampMixin

class Expense(Base, TimestampMixin):
    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True)

    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)

    cost_head = Column(String(120), nullable=False, index=True)
    amount = Column(Numeric(14, 2), nullable=False)
    vendor_name = Column(String(255), nullable=True)
    description = Column(String, nullable=True)
    date = Column(Date, nullable=False, index=True)

    order = relationship("Order", back_populates="expenses", lazy="select")

    __table_args__ = (CheckConstraint("amount >= 0", name="ck_expense_amount_non_negative"),)

    def __repr__(self):
        return f"<Expense id={self.id} head={self.cost_head} amount={self.amount}>"
