from sqlalchemy import Column, Integer, String
from app.core.db import Base
from app.models.base.mixins import TimestampMixin


class ActivityLog(Base, TimestampMixin):
    """Immutable audit log. APPEND-ONLY. Never updated, never deleted."""

    __tablename__ = "activity_log"

    id = Column(Integer, primary_key=True)
    actor_email = Column(String(255), nullable=True, index=True)
    message = Column(String, nullable=False)

    def __repr__(self):
        return f"<ActivityLog id={self.id} actor={self.actor_email}>"
