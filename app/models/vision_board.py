"""Vision board model definitions."""
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field


class Section(BaseModel):
    """One named section of a board: an editor flag plus free-form data."""

    completed: bool = False
    data: dict[str, Any] = {}


class SectionUpdate(BaseModel):
    """
    Section payload sent by an editor.

    Omitted fields keep their stored value; a provided ``data`` replaces the
    stored object entirely.
    """

    completed: Optional[bool] = None
    data: Optional[dict[str, Any]] = None


class VisionBoardCreate(BaseModel):
    """Vision board creation model."""

    name: str = Field(min_length=1, max_length=100)
    sections: dict[str, SectionUpdate] = {}
    strategy_sheet: dict[str, SectionUpdate] = {}


class VisionBoardUpdate(BaseModel):
    """Vision board update model - all fields optional."""

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    is_active: Optional[bool] = None
    sections: Optional[dict[str, SectionUpdate]] = None
    strategy_sheet: Optional[dict[str, SectionUpdate]] = None


class VisionBoard(BaseModel):
    """Full vision board model with database fields."""

    id: str = Field(alias="_id", serialization_alias="id")
    user_id: str
    name: str
    is_active: bool = True
    overall_progress: int = Field(0, ge=0, le=100)
    sections: dict[str, Section]
    strategy_sheet: dict[str, Section]
    archived_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"populate_by_name": True}


class SectionProgress(BaseModel):
    """Binary progress of a single legacy section."""

    name: str
    completed: bool
    progress: int


class BoardProgress(BaseModel):
    """Overall progress plus the legacy section breakdown."""

    overall_progress: int
    sections: list[SectionProgress]


class StrategySectionStatus(BaseModel):
    name: str
    completed: bool
    has_data: bool


class StrategyProgress(BaseModel):
    """Progress over the strategy sheet alone."""

    overall_progress: int
    completed_sections: int
    total_sections: int
    sections: list[StrategySectionStatus]


class StrategySummary(BaseModel):
    """One-page view assembled from the strategy sheet's statement fields."""

    company_name: str = ""
    core_purpose: str = ""
    vision: str = ""
    mission: str = ""
    brand_promise: str = ""
    bhag: str = ""
    who_we_serve: str = ""
    problem_we_solve: str = ""
    how_we_make_money: str = ""
    why_we_win: str = ""
    year1_focus: str = ""
    three_year_direction: str = ""
    ten_year_ambition: str = ""


class ModuleProgress(BaseModel):
    """Derived progress of one UI module."""

    module: str
    name: str
    sections: list[str]
    progress: int
