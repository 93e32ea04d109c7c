"""Analytics router - aggregate reporting over the caller's boards."""
from fastapi import APIRouter, Depends

from app.database import get_database
from app.models.analytics import AnalyticsOverview
from app.services.analytics_service import AnalyticsService
from app.utils.auth import get_current_user_id


router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("/overview", response_model=AnalyticsOverview)
async def get_overview(
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """Board counts, average progress and completion distribution."""
    service = AnalyticsService(db)
    return await service.get_overview(user_id=user_id)
