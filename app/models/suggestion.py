"""Suggestion model definitions."""
from typing import Literal

from pydantic import BaseModel


SuggestionPriority = Literal["high", "medium", "low"]


class Suggestion(BaseModel):
    """A rule-based recommendation for a vision board."""

    type: Literal["warning", "recommendation", "alert", "info", "success"]
    category: str
    title: str
    message: str
    action: str
    priority: SuggestionPriority
