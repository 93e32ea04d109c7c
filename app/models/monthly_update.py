"""Monthly update model definitions."""
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class Month(str, Enum):
    """Calendar months, stored by name."""

    JANUARY = "January"
    FEBRUARY = "February"
    MARCH = "March"
    APRIL = "April"
    MAY = "May"
    JUNE = "June"
    JULY = "July"
    AUGUST = "August"
    SEPTEMBER = "September"
    OCTOBER = "October"
    NOVEMBER = "November"
    DECEMBER = "December"

    @property
    def number(self) -> int:
        """1-based month number, for chronological sorting."""
        return list(Month).index(self) + 1


class MonthlyUpdateBase(BaseModel):
    """Base monthly update fields."""

    month: Month
    year: int = Field(ge=2020, le=2100)
    actual_revenue: float = Field(0, ge=0)
    actual_team_size: int = Field(0, ge=0)
    actual_leads: int = Field(0, ge=0)
    actual_customers: int = Field(0, ge=0)
    notes: Optional[str] = Field(None, max_length=1000)
    wins: Optional[str] = Field(None, max_length=500)
    challenges: Optional[str] = Field(None, max_length=500)
    next_month_goals: Optional[str] = Field(None, max_length=500)


class MonthlyUpdateCreate(MonthlyUpdateBase):
    """Monthly update creation model (also used to update an existing month)."""

    pass


class MonthlyUpdate(MonthlyUpdateBase):
    """Full monthly update model with database fields."""

    id: str = Field(alias="_id", serialization_alias="id")
    vision_board_id: str
    user_id: str
    created_at: datetime
    updated_at: datetime

    model_config = {"populate_by_name": True}


class ComparisonTargets(BaseModel):
    """Targets read from the board's legacy sections."""

    annual_revenue: float = 0
    monthly_revenue: float = 0
    team_size: float = 0
    leads: float = 0


class ActualMetrics(BaseModel):
    revenue: float
    team_size: int
    leads: int
    customers: int


class TargetMetrics(BaseModel):
    revenue: float
    team_size: float
    leads: float


class ComparisonRow(BaseModel):
    """Actual vs target for one month."""

    month: Month
    year: int
    actual: ActualMetrics
    target: TargetMetrics
    variance: TargetMetrics


class Comparison(BaseModel):
    targets: ComparisonTargets
    comparison: list[ComparisonRow]
