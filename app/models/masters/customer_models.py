from sqlalchemy import Column, Integer, String, Date, Index
from sqlalchemy.orm import relationship
from app.core.db import Base
from app.models.base.mixins import TimestampMixin


class Customer(Base, TimestampMixin):
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True)

    customer_code = Column(String(50), nullable=False, unique=True, index=True)

    name = Column(String(255), nullable=False, index=True)
    phone = Column(String(20), nullable=False, index=True)
    email = Column(String(255), nullable=True, index=True)
    address = Column(String, nullable=True)

    # event details captured at intake, copied onto the first quotation
    event_type = Column(String(100), nullable=True)
    event_date_start = Column(Date, nullable=True)
    event_date_end = Column(Date, nullable=True)
    location = Column(String, nullable=True)
    package_type = Column(String(50), nullable=True)
    session_type = Column(String(50), nullable=True)

    quotations = relationship("Quotation", back_populates="customer", lazy="select")
    orders = relationship("Order", back_populates="customer", lazy="select")

    __table_args__ = (Index("ix_customer_name_phone", "name", "phone"),)

    def __repr__(self):
        return f"<Customer id={self.id} code={self.customer_code} name={self.name}>"
