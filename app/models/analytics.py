"""Analytics model definitions."""
from pydantic import BaseModel


class CompletionBucket(BaseModel):
    """Boards whose overall progress falls in [lower_bound, next bound)."""

    lower_bound: int
    count: int


class AnalyticsOverview(BaseModel):
    """Aggregate figures across the caller's vision boards."""

    total_vision_boards: int = 0
    active_vision_boards: int = 0
    archived_vision_boards: int = 0
    average_progress: int = 0
    total_monthly_updates: int = 0
    completion_distribution: list[CompletionBucket] = []
