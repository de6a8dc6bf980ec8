"""API response schemas"""
from pydantic import BaseModel
from typing import List

from core.events import ParserFailureEvent


class ChatResponse(BaseModel):
    reply: str


class SummaryResponse(BaseModel):
    summary: str


class ParserHealthResponse(BaseModel):
    status: str  # 'ok' | 'degraded'
    available: bool
    model: str
    recent_failures: int
    failures: List[ParserFailureEvent]
