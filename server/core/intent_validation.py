"""Intent validation: turns a raw payload into a well-formed intent record.

Applied uniformly to the external parser's output and to the local parser's
output. The arm is chosen by the ``intent`` tag; an unknown tag rejects the
payload. Within the arm, each field is cleaned on its own: a value that is
outside its enumeration, malformed, or not allowed for the intent is dropped
and the rest of the record is kept.
"""
from datetime import date, datetime, time
from typing import Any, Callable, Dict, Mapping, Optional, Type
from enum import Enum
import logging
import math
import re

import dateparser
from pydantic import ValidationError

from core.errors import MalformedResponse
from core.replies import confirmation_reply
from core.temporal_resolver import parse_clock
from models.intent import (
    INTENT_ARMS,
    TITLED_INTENTS,
    ExpenseCategory,
    IntentBase,
    IntentType,
    MemoryType,
    Priority,
)

logger = logging.getLogger(__name__)

MAX_TITLE_LENGTH = 200
MAX_REPLY_LENGTH = 500

_NULL_STRINGS = {"", "null", "none", "n/a"}
_HH_MM_RE = re.compile(r"^(\d{1,2}):(\d{2})(?::\d{2})?$")
_AMOUNT_RE = re.compile(r"\d+(?:\.\d+)?")

_MISSING = object()


def _is_absent(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip().lower() in _NULL_STRINGS)


def _clean_text(limit: int) -> Callable[[Any, datetime], Optional[str]]:
    def clean(value: Any, now: datetime) -> Optional[str]:
        if not isinstance(value, str):
            return None
        text = " ".join(value.split())
        return text[:limit] or None
    return clean


def _clean_amount(value: Any, now: datetime) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        match = _AMOUNT_RE.search(value.replace(",", ""))
        if not match or value.strip().startswith("-"):
            return None
        value = match.group(0)
    try:
        amount = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(amount) or amount < 0:
        return None
    return amount


def _clean_enum(enum_cls: Type[Enum]) -> Callable[[Any, datetime], Optional[Enum]]:
    by_lower = {member.value.lower(): member for member in enum_cls}

    def clean(value: Any, now: datetime) -> Optional[Enum]:
        if isinstance(value, enum_cls):
            return value
        if not isinstance(value, str):
            return None
        return by_lower.get(value.strip().lower())
    return clean


def _clean_date(value: Any, now: datetime) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        pass
    # Repair non-ISO dates ("Oct 20", "next friday") relative to now
    parsed = dateparser.parse(
        text,
        languages=["en"],
        settings={
            "RELATIVE_BASE": now.replace(tzinfo=None),
            "PREFER_DATES_FROM": "future",
            "RETURN_AS_TIMEZONE_AWARE": False,
        },
    )
    return parsed.date() if parsed else None


def _clean_time(value: Any, now: datetime) -> Optional[time]:
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0, tzinfo=None)
    if not isinstance(value, str):
        return None
    text = value.strip()
    match = _HH_MM_RE.match(text)
    if match:
        hour, minute = int(match.group(1)), int(match.group(2))
        if 0 <= hour <= 23 and 0 <= minute <= 59:
            return time(hour, minute)
        return None
    # Repair 12-hour forms such as "6pm" or "3:30 PM"
    return parse_clock(text)


_CLEANERS: Dict[str, Callable[[Any, datetime], Any]] = {
    "title": _clean_text(MAX_TITLE_LENGTH),
    "reply": _clean_text(MAX_REPLY_LENGTH),
    "amount": _clean_amount,
    "category": _clean_enum(ExpenseCategory),
    "priority": _clean_enum(Priority),
    "memory_type": _clean_enum(MemoryType),
    "date": _clean_date,
    "time": _clean_time,
}


def parse_intent_tag(value: Any) -> IntentType:
    """Map the payload's intent tag onto IntentType; unknown tags are rejected."""
    if isinstance(value, IntentType):
        return value
    if isinstance(value, str):
        try:
            return IntentType(value.strip().lower())
        except ValueError:
            pass
    raise MalformedResponse(f"Unrecognized intent tag: {value!r}", raw_text=str(value))


def default_title(utterance: str) -> str:
    return " ".join((utterance or "").split())[:MAX_TITLE_LENGTH] or "Untitled"


def sanitize_intent(
    payload: Mapping[str, Any],
    *,
    utterance: str,
    now: datetime,
) -> IntentBase:
    """
    Build a validated intent record from a raw payload.

    Raises MalformedResponse only when the intent tag itself is missing or
    unknown; every other problem is repaired or dropped field by field.
    """
    tag = parse_intent_tag(payload.get("intent"))
    arm = INTENT_ARMS[tag]

    values: Dict[str, Any] = {}
    dropped = []
    for name, field in arm.model_fields.items():
        if name == "intent":
            continue
        raw = payload.get(field.alias, _MISSING) if field.alias else _MISSING
        if raw is _MISSING:
            raw = payload.get(name)
        if _is_absent(raw):
            continue
        cleaned = _CLEANERS[name](raw, now)
        if cleaned is None:
            dropped.append(name)
            continue
        values[name] = cleaned

    ignored = sorted(
        key for key in payload
        if key != "intent" and key not in arm.model_fields
        and key not in {f.alias for f in arm.model_fields.values() if f.alias}
        and not _is_absent(payload[key])
    )
    if dropped or ignored:
        logger.info(f"Sanitized {tag.value}: dropped invalid {dropped}, ignored foreign {ignored}")

    if tag in TITLED_INTENTS and not values.get("title"):
        values["title"] = default_title(utterance)
    if not values.get("reply"):
        values["reply"] = confirmation_reply(
            tag,
            title=values.get("title"),
            amount=values.get("amount"),
            on=values.get("date"),
            at=values.get("time"),
        )

    try:
        return arm(**values)
    except ValidationError as e:
        raise MalformedResponse(f"Intent record failed validation: {e}", raw_text=str(dict(payload))) from e
