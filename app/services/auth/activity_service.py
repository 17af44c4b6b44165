# app/services/auth/activity_service.py

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, desc, asc

from app.models.support.activity_models import ActivityLog
from app.schemas.auth.activity_schemas import (
    ActivityLogOut,
    ActivityFilters,
    ActivityListData,
)
from app.utils.logger import get_logger

logger = get_logger(__name__)


async def list_activities(
    *,
    db: AsyncSession,
    filters: ActivityFilters,
) -> ActivityListData:
    # -------------------------
    # Base query
    # -------------------------
    query = select(ActivityLog)

    # -------------------------
    # Filters
    # -------------------------
    if filters.actor_email:
        query = query.where(ActivityLog.actor_email == filters.actor_email.strip().lower())

    if filters.search:
        query = query.where(ActivityLog.message.ilike(f"%{filters.search.strip()}%"))

    total = await db.scalar(select(func.count()).select_from(query.subquery()))

    # -------------------------
    # Sorting + pagination
    # -------------------------
    order_fn = desc if filters.sort_order == "desc" else asc
    query = (
        query.order_by(order_fn(ActivityLog.created_at), order_fn(ActivityLog.id))
        .limit(filters.page_size)
        .offset((filters.page - 1) * filters.page_size)
    )

    result = await db.execute(query)
    activities = result.scalars().all()

    logger.debug(
        "Activities fetched",
        extra={"total": total, "page": filters.page, "page_size": filters.page_size},
    )

    return ActivityListData(
        total=total or 0,
        items=[ActivityLogOut.model_validate(a) for a in activities],
    )
