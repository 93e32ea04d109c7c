"""Progress router - monthly updates, target comparison and suggestions."""
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from app.database import get_database
from app.models.monthly_update import Comparison, Month, MonthlyUpdate, MonthlyUpdateCreate
from app.models.suggestion import Suggestion
from app.services.monthly_update_service import MonthlyUpdateService
from app.services.suggestion_service import SuggestionService
from app.utils.auth import get_current_user_id
from app.utils.http import http_errors


router = APIRouter(prefix="/progress", tags=["progress"])


@router.get("/{board_id}", response_model=list[MonthlyUpdate])
async def get_progress_history(
    board_id: str,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """Monthly update history for a board, most recent month first."""
    service = MonthlyUpdateService(db)
    with http_errors():
        return await service.list_monthly_updates(user_id=user_id, board_id=board_id)


@router.post("/{board_id}/monthly", response_model=MonthlyUpdate)
async def add_monthly_update(
    board_id: str,
    update: MonthlyUpdateCreate,
    response: Response,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Record the actuals for a month.

    - 201 when the month is new, 200 when an existing month is updated
    - Fields left out of the body keep their stored values
    """
    service = MonthlyUpdateService(db)
    with http_errors():
        monthly_update, created = await service.upsert_monthly_update(
            user_id=user_id,
            board_id=board_id,
            update_create=update,
        )
    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return monthly_update


@router.get("/{board_id}/comparison", response_model=Comparison)
async def get_comparison(
    board_id: str,
    month: Optional[Month] = Query(None, description="Month name, requires year"),
    year: Optional[int] = Query(None, description="Year, requires month"),
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """Actual vs target metrics for each recorded month."""
    service = MonthlyUpdateService(db)
    with http_errors():
        return await service.get_comparison(
            user_id=user_id,
            board_id=board_id,
            month=month,
            year=year,
        )


@router.get("/{board_id}/suggestions", response_model=list[Suggestion])
async def get_suggestions(
    board_id: str,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """Rule-based suggestions from the board's targets and recent updates."""
    service = SuggestionService(db)
    with http_errors():
        return await service.get_suggestions(user_id=user_id, board_id=board_id)
