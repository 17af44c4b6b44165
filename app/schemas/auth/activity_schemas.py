from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional, List, Literal


class ActivityFilters(BaseModel):
    actor_email: Optional[str] = None
    search: Optional[str] = None

    page: int = Field(1, ge=1)
    page_size: int = Field(20, ge=1, le=100)

    sort_order: Literal["asc", "desc"] = "desc"


class ActivityLogOut(BaseModel):
    id: int
    actor_email: Optional[str]
    message: str
    created_at: datetime

    model_config = {"from_attributes": True}


class ActivityListData(BaseModel):
    total: int
    items: List[ActivityLogOut]
