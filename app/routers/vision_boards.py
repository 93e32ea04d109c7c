"""Vision board router - boards, sections, strategy sheet and module progress."""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from app.database import get_database
from app.models.vision_board import (
    BoardProgress,
    ModuleProgress,
    Section,
    SectionUpdate,
    StrategyProgress,
    StrategySummary,
    VisionBoard,
    VisionBoardCreate,
    VisionBoardUpdate,
)
from app.services.vision_board_service import VisionBoardService
from app.utils.auth import get_current_user_id
from app.utils.http import http_errors


router = APIRouter(prefix="/vision-boards", tags=["vision-boards"])


@router.post("", response_model=VisionBoard, status_code=status.HTTP_201_CREATED)
async def create_vision_board(
    board: VisionBoardCreate,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Create a new vision board.

    - Requires authentication
    - All 28 sections start empty unless initial sections are supplied
    """
    service = VisionBoardService(db)
    with http_errors():
        return await service.create_vision_board(user_id=user_id, board_create=board)


@router.get("", response_model=list[VisionBoard])
async def list_vision_boards(
    active: Optional[bool] = Query(None, description="Filter by active (true) or archived (false)"),
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """List the authenticated user's vision boards, newest first."""
    service = VisionBoardService(db)
    return await service.list_vision_boards(user_id=user_id, active=active)


@router.get("/{board_id}", response_model=VisionBoard)
async def get_vision_board(
    board_id: str,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Get a single vision board.

    - Returns 404 if the board is not found or belongs to another user
    """
    service = VisionBoardService(db)
    with http_errors():
        return await service.get_vision_board(user_id=user_id, board_id=board_id)


@router.put("/{board_id}", response_model=VisionBoard)
async def update_vision_board(
    board_id: str,
    board_update: VisionBoardUpdate,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Update name, active flag and/or whole sections.

    - Overall progress is recomputed
    - Returns 400 for unknown or malformed sections, 404 if board not found
    """
    service = VisionBoardService(db)
    with http_errors():
        return await service.update_vision_board(
            user_id=user_id,
            board_id=board_id,
            board_update=board_update,
        )


@router.delete("/{board_id}")
async def delete_vision_board(
    board_id: str,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Permanently delete a vision board and its monthly updates.

    - Prefer archiving in normal use
    """
    service = VisionBoardService(db)
    with http_errors():
        return await service.delete_vision_board(user_id=user_id, board_id=board_id)


@router.put("/{board_id}/archive", response_model=VisionBoard)
async def archive_vision_board(
    board_id: str,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """Archive a vision board (excluded from active lists, not deleted)."""
    service = VisionBoardService(db)
    with http_errors():
        return await service.archive_vision_board(user_id=user_id, board_id=board_id)


@router.put("/{board_id}/sections/{section_name}", response_model=VisionBoard)
async def update_section(
    board_id: str,
    section_name: str,
    section_update: SectionUpdate,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Replace one section of a board.

    - Accepts legacy and strategy sheet section names
    - ``data`` replaces the stored data object entirely
    - Returns the board with recomputed overall progress
    - Returns 400 for an unknown section name, before anything is written
    """
    service = VisionBoardService(db)
    with http_errors():
        return await service.update_section(
            user_id=user_id,
            board_id=board_id,
            section_name=section_name,
            section_update=section_update,
        )


@router.get("/{board_id}/progress", response_model=BoardProgress)
async def get_progress(
    board_id: str,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """Overall progress and binary progress of each legacy section."""
    service = VisionBoardService(db)
    with http_errors():
        return await service.get_progress(user_id=user_id, board_id=board_id)


@router.get("/{board_id}/strategy", response_model=dict[str, Section])
async def get_strategy_sheet(
    board_id: str,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """The board's strategy sheet."""
    service = VisionBoardService(db)
    with http_errors():
        return await service.get_strategy_sheet(user_id=user_id, board_id=board_id)


@router.get("/{board_id}/strategy/progress", response_model=StrategyProgress)
async def get_strategy_progress(
    board_id: str,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """Progress over the strategy sheet sections only."""
    service = VisionBoardService(db)
    with http_errors():
        return await service.get_strategy_progress(user_id=user_id, board_id=board_id)


@router.get("/{board_id}/strategy/summary", response_model=StrategySummary)
async def get_strategy_summary(
    board_id: str,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """One-page strategy summary."""
    service = VisionBoardService(db)
    with http_errors():
        return await service.get_strategy_summary(user_id=user_id, board_id=board_id)


@router.get("/{board_id}/modules", response_model=list[ModuleProgress])
async def list_module_progress(
    board_id: str,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """Derived progress of every UI module."""
    service = VisionBoardService(db)
    with http_errors():
        return await service.list_module_progress(user_id=user_id, board_id=board_id)


@router.get("/{board_id}/modules/{module_id}", response_model=ModuleProgress)
async def get_module_progress(
    board_id: str,
    module_id: str,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Derived progress of one UI module.

    - Returns 400 for an unknown module id
    """
    service = VisionBoardService(db)
    with http_errors():
        return await service.get_module_progress(
            user_id=user_id,
            board_id=board_id,
            module_id=module_id,
        )
