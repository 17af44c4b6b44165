# app/routers/auth/activity_router.py

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.schemas.auth.activity_schemas import ActivityFilters, ActivityListData
from app.services.auth.activity_service import list_activities
from app.utils.get_user import get_current_user
from app.utils.response import success_response, APIResponse

router = APIRouter(prefix="/activities", tags=["Activity Log"])


@router.get("", response_model=APIResponse[ActivityListData])
async def list_activities_api(
    filters: ActivityFilters = Depends(),
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    result = await list_activities(db=db, filters=filters)

    return success_response(
        "Activities fetched successfully",
        result,
    )
