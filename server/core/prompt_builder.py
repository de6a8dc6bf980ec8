"""Prompt Builder: system instructions and user payloads for the external parser.

Everything here is a pure function of its arguments. The schema enumerations
are generated from the intent model enums so the prompt and the validator can
never disagree about which values are allowed.
"""
from datetime import datetime
from enum import Enum
from typing import Sequence, Type, Union
import json

from integrations.gemini.prompts import (
    INTENT_EXTRACTION_PROMPT,
    USER_MESSAGE_PROMPT,
    SUMMARY_SYSTEM_PROMPT,
    SUMMARY_PROMPT,
)
from models.intent import ExpenseCategory, IntentType, MemoryType, Priority
from models.message import ConversationTurn
from models.summary import DailySummaryData, WeeklySummaryData

MAX_HISTORY_TURNS = 6
ASSISTANT_NAME = "FRIDAY"


def _enum_choices(enum_cls: Type[Enum]) -> str:
    return " | ".join(f'"{member.value}"' for member in enum_cls)


def _recent(turns: Sequence[ConversationTurn], limit: int) -> list[ConversationTurn]:
    if limit <= 0:
        return []
    return list(turns)[-limit:]


def format_turns(turns: Sequence[ConversationTurn], limit: int = MAX_HISTORY_TURNS) -> str:
    """Label the last ``limit`` turns by speaker, oldest first."""
    lines = []
    for turn in _recent(turns, limit):
        speaker = "User" if turn.is_user else ASSISTANT_NAME
        lines.append(f"{speaker}: {turn.text}")
    return "\n".join(lines)


def build_system_instruction(now: datetime) -> str:
    """Schema-constrained extraction instruction grounded on the current date/time."""
    return INTENT_EXTRACTION_PROMPT.format(
        now_iso=now.isoformat(timespec="seconds"),
        weekday=now.strftime("%A"),
        intents=_enum_choices(IntentType),
        categories=_enum_choices(ExpenseCategory),
        priorities=_enum_choices(Priority),
        memory_types=_enum_choices(MemoryType),
    )


def build_user_payload(
    utterance: str,
    recent_turns: Sequence[ConversationTurn] = (),
    limit: int = MAX_HISTORY_TURNS,
) -> str:
    """The utterance itself, with recent turns prepended as context when present."""
    conversation = format_turns(recent_turns, limit)
    if not conversation:
        return utterance
    return USER_MESSAGE_PROMPT.format(conversation=conversation, utterance=utterance)


def build_chat_prompt(
    utterance: str,
    recent_turns: Sequence[ConversationTurn] = (),
    limit: int = MAX_HISTORY_TURNS,
) -> str:
    """Free-form conversational prompt (not schema constrained)."""
    conversation = format_turns(recent_turns, limit)
    if conversation:
        return (
            f"Recent conversation:\n{conversation}\n\n"
            f"User: {utterance}\n\n{ASSISTANT_NAME}:"
        )
    return f"User: {utterance}\n\n{ASSISTANT_NAME}:"


def build_summary_instruction(kind: str) -> str:
    return SUMMARY_SYSTEM_PROMPT.format(kind=kind)


def build_summary_prompt(data: Union[DailySummaryData, WeeklySummaryData]) -> str:
    payload = data.model_dump(mode="json", exclude={"kind", "currency_symbol"})
    return SUMMARY_PROMPT.format(kind=data.kind, data=json.dumps(payload, indent=2))
