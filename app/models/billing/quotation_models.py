from decimal import Decimal

from sqlalchemy import Column, Integer, String, ForeignKey, Numeric, Enum, JSON, Index, CheckConstraint, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.types import Date
from app.core.db import Base
from app.models.base.mixins import TimestampMixin
from app.models.enums.quotation_status import QuotationStatus


def enum_values(enum_cls):
    return [member.value for member in enum_cls]


class Quotation(Base, TimestampMixin):
    __tablename__ = "quotations"

    id = Column(Integer, primary_key=True)
    quotation_number = Column(String(50), nullable=False, unique=True, index=True)
    customer_id = Column(Integer, ForeignKey("customers.id", ondelete="RESTRICT"), nullable=False, index=True)
    status = Column(
        Enum(QuotationStatus, name="quotationstatus", values_callable=enum_values),
        nullable=False,
        default=QuotationStatus.pending,
        index=True,
    )

    event_type = Column(String(100), nullable=True)
    event_date_start = Column(Date, nullable=True)
    event_date_end = Column(Date, nullable=True)
    location = Column(String, nullable=True)
    package_type = Column(String(50), nullable=True)
    session_type = Column(String(50), nullable=True)

    # {"photography": [...], "videography": [...], "additional": [...]}
    services = Column(JSON, nullable=False, default=dict)
    deliverables = Column(JSON, nullable=True)

    customer_total = Column(Numeric(14, 2), nullable=False, default=Decimal("0.00"))
    manual_total = Column(Numeric(14, 2), nullable=True)

    remarks = Column(String, nullable=True)
    confirmed_at = Column(DateTime(timezone=True), nullable=True)

    customer = relationship("Customer", back_populates="quotations", lazy="selectin")
    order = relationship("Order", back_populates="quotation", uselist=False, lazy="selectin")

    __table_args__ = (
        Index("ix_quotation_customer_status", "customer_id", "status"),
        CheckConstraint("customer_total >= 0", name="ck_quotation_customer_total_non_negative"),
        CheckConstraint("manual_total IS NULL OR manual_total >= 0", name="ck_quotation_manual_total_non_negative"),
    )

    @property
    def effective_total(self) -> Decimal:
        if self.manual_total is not None:
            return self.manual_total
        return self.customer_total or Decimal("0.00")

    def __repr__(self):
        return f"<Quotation {self.quotation_number} status={self.status}>"
