"""Summary input models: aggregates supplied by the storage layer."""
import datetime as dt
from typing import Literal, Optional

from pydantic import BaseModel, Field


class DailySummaryData(BaseModel):
    """Today's activity counts"""
    kind: Literal["daily"] = "daily"
    day: Optional[dt.date] = None
    tasks_completed: int = Field(0, ge=0)
    tasks_pending: int = Field(0, ge=0)
    total_spent: float = Field(0.0, ge=0)
    upcoming_events: int = Field(0, ge=0)
    missed_reminders: int = Field(0, ge=0)
    currency_symbol: str = "$"


class WeeklySummaryData(BaseModel):
    """Activity over the last 7 days"""
    kind: Literal["weekly"] = "weekly"
    total_tasks: int = Field(0, ge=0)
    tasks_completed: int = Field(0, ge=0)
    total_spent: float = Field(0.0, ge=0)
    top_category: Optional[str] = None
    missed_reminders: int = Field(0, ge=0)
    currency_symbol: str = "$"
