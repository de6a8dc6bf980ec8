"""Structured failure events for the external parser.

Failures are logged and also kept in a bounded in-memory buffer so that
tests and the /health/parser endpoint can inspect what went wrong recently.
"""
from collections import deque
from datetime import datetime, timezone
from typing import Deque, List, Literal, Optional
import logging

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

MAX_DETAIL_CHARS = 500

FailureStage = Literal["network", "decode", "validation"]


class ParserFailureEvent(BaseModel):
    """One failed interaction with the external parser."""
    model_config = ConfigDict(frozen=True)

    stage: FailureStage
    status: Optional[int] = None
    code: Optional[str] = None
    detail: str = ""
    occurred_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class FailureChannel:
    """Sink for parser failure events."""

    def __init__(self, max_events: int = 100):
        self._events: Deque[ParserFailureEvent] = deque(maxlen=max_events)

    def report(
        self,
        stage: FailureStage,
        *,
        status: Optional[int] = None,
        code: Optional[str] = None,
        detail: str = "",
    ) -> ParserFailureEvent:
        event = ParserFailureEvent(
            stage=stage,
            status=status,
            code=code,
            detail=(detail or "")[:MAX_DETAIL_CHARS],
        )
        self._events.append(event)
        logger.warning(
            f"Parser failure at stage={stage} status={status or '-'} "
            f"code={code or '-'} detail={event.detail[:120]!r}"
        )
        return event

    def recent(self, limit: Optional[int] = None) -> List[ParserFailureEvent]:
        """Most recent events, oldest first."""
        events = list(self._events)
        if limit is not None:
            events = events[-limit:] if limit > 0 else []
        return events

    def clear(self) -> None:
        self._events.clear()

    def __len__(self) -> int:
        return len(self._events)
