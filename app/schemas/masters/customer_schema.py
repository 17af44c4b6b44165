# app/schemas/masters/customer_schema.py

from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional, List
from datetime import datetime, date


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


class CustomerBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    phone: str = Field(..., min_length=10, max_length=20)
    email: Optional[EmailStr] = None
    address: Optional[str] = None

    event_type: Optional[str] = None
    event_date_start: Optional[date] = None
    event_date_end: Optional[date] = None
    location: Optional[str] = None
    package_type: Optional[str] = None
    session_type: Optional[str] = None

    # intake form submits "" for an empty email box
    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value):
        return _blank_to_none(value)


class CustomerCreate(CustomerBase):
    pass


class CustomerUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    phone: Optional[str] = Field(None, min_length=10, max_length=20)
    email: Optional[EmailStr] = None
    address: Optional[str] = None

    event_type: Optional[str] = None
    event_date_start: Optional[date] = None
    event_date_end: Optional[date] = None
    location: Optional[str] = None
    package_type: Optional[str] = None
    session_type: Optional[str] = None

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value):
        return _blank_to_none(value)


class CustomerOut(CustomerBase):
    id: int
    customer_code: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class CustomerListData(BaseModel):
    total: int
    items: List[CustomerOut]
