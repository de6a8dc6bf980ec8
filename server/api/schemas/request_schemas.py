"""API request schemas"""
from datetime import datetime
from pydantic import BaseModel, Field
from typing import List, Optional

from models.message import ConversationTurn


class InterpretRequest(BaseModel):
    utterance: str = Field(..., max_length=5000)
    # Client's local time; relative dates resolve against it. Server time if omitted.
    now: Optional[datetime] = None
    recent_turns: List[ConversationTurn] = Field(default_factory=list, max_length=50)


class ChatRequest(BaseModel):
    utterance: str = Field(..., max_length=5000)
    recent_turns: List[ConversationTurn] = Field(default_factory=list, max_length=50)
