"""Temporal Resolver: maps relative date/time language onto the calendar.

Pure functions of (text, now). The vocabulary is small and
English-only:

- relative days: "today", "tomorrow", "day after tomorrow", "next week"
- weekdays, optionally qualified: "saturday", "this friday", "on monday",
  "next saturday"
- clock times: "6pm", "3:30pm", "18:00", "at 7"
- day parts: "morning", "afternoon"/"noon", "evening", "night", "midnight"

"next <weekday>" always skips the imminent occurrence when it falls within
the coming week, so on a Wednesday "this saturday" is 3 days ahead and
"next saturday" is 10 days ahead.
"""
from datetime import date, datetime, time, timedelta
from typing import Optional, Tuple
import re

from models.temporal import TemporalFragment

# Indexed like datetime.weekday(): Monday == 0
WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]

# Checked in order; the longer "day after tomorrow" must win over "tomorrow"
_RELATIVE_DAYS: list[tuple[re.Pattern, int]] = [
    (re.compile(r"\bday after tomorrow\b"), 2),
    (re.compile(r"\btoday\b"), 0),
    (re.compile(r"\btomorrow\b"), 1),
    (re.compile(r"\bnext week\b"), 7),
]

_WEEKDAY_RE = re.compile(
    r"\b(?:(?P<qualifier>next|this|on)\s+)?(?P<day>" + "|".join(WEEKDAYS) + r")\b"
)

_CLOCK_RE = re.compile(
    r"(?<![\d:])\b(?P<h>\d{1,2})(?::(?P<m>\d{2}))?\s*(?P<ampm>am|pm)?\b"
)

_AT_BEFORE_RE = re.compile(r"\bat\s*$")

# Coarse day parts, used only when no clock time is present
_DAY_PARTS: list[tuple[tuple[str, ...], time]] = [
    (("midnight",), time(0, 0)),
    (("morning",), time(9, 0)),
    (("afternoon", "noon"), time(12, 0)),
    (("evening",), time(18, 0)),
    (("night",), time(21, 0)),
]

# Phrases removed when deriving a title from an utterance
_TEMPORAL_PHRASE_RE = re.compile(
    r"\b(?:on\s+|by\s+|for\s+)?(?:the\s+)?day after tomorrow\b"
    r"|\b(?:by\s+|for\s+|until\s+)?(?:today|tomorrow|tonight)\b"
    r"|\b(?:by\s+|for\s+)?next week\b"
    r"|\b(?:(?:on|by|this|next|until)\s+)?(?:" + "|".join(WEEKDAYS) + r")\b"
    r"|\b(?:at\s+|by\s+|around\s+)?\d{1,2}(?::\d{2})?\s*(?:am|pm)\b"
    r"|\b(?:at\s+|by\s+|around\s+)?\d{1,2}:\d{2}\b"
    r"|\bat\s+\d{1,2}\b"
    r"|\b(?:in the\s+|this\s+|at\s+)?(?:midnight|morning|afternoon|noon|evening|night)\b",
    re.IGNORECASE,
)


def resolve_date(text: str, now: datetime) -> Optional[date]:
    """Resolve an explicit relative-day or weekday reference, if any."""
    lowered = (text or "").lower()
    today = now.date()

    for pattern, offset in _RELATIVE_DAYS:
        if pattern.search(lowered):
            return today + timedelta(days=offset)

    match = _WEEKDAY_RE.search(lowered)
    if not match:
        return None

    target = WEEKDAYS.index(match.group("day"))
    days_ahead = (target - today.weekday()) % 7
    if days_ahead <= 0:
        days_ahead += 7  # always a future occurrence
    if match.group("qualifier") == "next" and days_ahead < 7:
        days_ahead += 7
    return today + timedelta(days=days_ahead)


def parse_clock(text: str) -> Optional[time]:
    """
    Find the first clock expression in text and convert it to 24h time.

    A bare number only counts as a time when introduced by "at"
    ("at 7" but not "buy 2 apples").
    """
    lowered = (text or "").lower()
    for match in _CLOCK_RE.finditer(lowered):
        hour = int(match.group("h"))
        minute = int(match.group("m") or 0)
        meridiem = match.group("ampm")

        if match.group("m") is None and meridiem is None:
            if not _AT_BEFORE_RE.search(lowered[: match.start()]):
                continue
        if minute > 59:
            continue
        if meridiem:
            if not 1 <= hour <= 12:
                continue
            if meridiem == "pm" and hour < 12:
                hour += 12
            elif meridiem == "am" and hour == 12:
                hour = 0
        if hour > 23:
            continue
        return time(hour, minute)
    return None


def resolve_time(text: str) -> Optional[time]:
    """Explicit clock time first, then coarse day-part keywords."""
    explicit = parse_clock(text)
    if explicit is not None:
        return explicit

    lowered = (text or "").lower()
    for keywords, part_time in _DAY_PARTS:
        if any(keyword in lowered for keyword in keywords):
            return part_time
    return None


def resolve(text: str, now: datetime) -> TemporalFragment:
    """
    Resolve the date and time mentioned in text relative to now.

    Date and time are independent passes. When only a time is found, the
    date becomes today, or tomorrow if that time has already passed.
    """
    resolved_date = resolve_date(text, now)
    resolved_time = resolve_time(text)

    if resolved_date is None and resolved_time is not None:
        candidate = datetime.combine(now.date(), resolved_time, tzinfo=now.tzinfo)
        if candidate < now:
            resolved_date = now.date() + timedelta(days=1)
        else:
            resolved_date = now.date()

    return TemporalFragment(date=resolved_date, time=resolved_time)


def resolve_datetime(text: str, now: datetime) -> datetime:
    """Resolve text to a concrete datetime; returns now when nothing matches."""
    fragment = resolve(text, now)
    result = now
    if fragment.date is not None:
        result = result.replace(
            year=fragment.date.year, month=fragment.date.month, day=fragment.date.day
        )
    if fragment.time is not None:
        result = result.replace(
            hour=fragment.time.hour, minute=fragment.time.minute, second=0, microsecond=0
        )
    return result


def strip_temporal_phrases(text: str) -> Tuple[str, bool]:
    """Remove date/time phrases from text. Returns (remaining text, anything removed)."""
    stripped, count = _TEMPORAL_PHRASE_RE.subn(" ", text or "")
    return re.sub(r"\s{2,}", " ", stripped).strip(), count > 0
