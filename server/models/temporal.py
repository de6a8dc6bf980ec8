"""Temporal fragment model"""
import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict


class TemporalFragment(BaseModel):
    """A (date, time) pair resolved from raw text. Either side may be absent."""
    model_config = ConfigDict(frozen=True)

    date: Optional[dt.date] = None
    time: Optional[dt.time] = None

    @property
    def is_empty(self) -> bool:
        return self.date is None and self.time is None
