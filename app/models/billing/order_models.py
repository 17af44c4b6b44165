from sqlalchemy import Column, Integer, String, ForeignKey, Numeric, JSON, CheckConstraint
from sqlalchemy.orm import relationship

from app.core.db import Base
from app.models.base.mixins import TimestampMixin
from app.models.enums.workflow_state import WorkflowState, WORKFLOW_FIELDS


def default_workflow_status() -> dict:
    return {field: WorkflowState.no.value for field in WORKFLOW_FIELDS}


class Order(Base, TimestampMixin):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True)
    order_number = Column(String(50), nullable=False, unique=True, index=True)

    quotation_id = Column(Integer, ForeignKey("quotations.id", ondelete="SET NULL"), nullable=True, unique=True, index=True)
    customer_id = Column(Integer, ForeignKey("customers.id", ondelete="RESTRICT"), nullable=False, index=True)

    estimated_budget = Column(Numeric(14, 2), nullable=True)
    final_budget = Column(Numeric(14, 2), nullable=True)

    workflow_status = Column(JSON, nullable=False, default=default_workflow_status)

    quotation = relationship("Quotation", back_populates="order", lazy="selectin")
    customer = relationship("Customer", back_populates="orders", lazy="selectin")
    expenses = relationship("Expense", back_populates="order", cascade="all, delete-orphan", lazy="selectin")
    payments = relationship("Payment", back_populates="order", cascade="all, delete-orphan", lazy="selectin")

    __table_args__ = (
        CheckConstraint("estimated_budget IS NULL OR estimated_budget >= 0", name="ck_order_estimated_non_negative"),
        CheckConstraint("final_budget IS NULL OR final_budget >= 0", name="ck_order_final_non_negative"),
    )

    def __repr__(self):
        return f"<Order {self.order_number} quotation_id={self.quotation_id}>"
