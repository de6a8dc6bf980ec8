"""Local fallback parser: deterministic, network-free interpretation.

Used when the external parser is disabled or fails. Same input and same
``now`` always give the same payload. It never fails: an utterance with no
recognizable keyword becomes a ``general`` intent.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple
import logging
import re

from core.errors import UnsupportedUtterance
from core.replies import confirmation_reply
from core.temporal_resolver import resolve, strip_temporal_phrases
from models.intent import INTENT_ARMS, IntentType

logger = logging.getLogger(__name__)


def _compile_word_patterns(keywords: List[str]) -> re.Pattern:
    """
    Build a single compiled regex that matches any of the keywords
    on word boundaries, so "hi" does not match inside "this" and
    "task" does not match inside "multitasking".
    """
    escaped = [re.escape(kw) for kw in keywords]
    pattern = r"\b(?:" + "|".join(escaped) + r")\b"
    return re.compile(pattern, re.IGNORECASE)


# Checked in order; the first intent with a matching keyword wins.
_INTENT_KEYWORDS: List[Tuple[IntentType, List[str]]] = [
    (IntentType.SET_REMINDER, [
        "remind me", "remind", "reminder", "don't forget", "dont forget",
    ]),
    (IntentType.LOG_EXPENSE, [
        "spent", "spend", "paid", "bought", "expense", "cost", "costs",
    ]),
    (IntentType.SAVE_MEMORY, [
        "remember", "note that", "keep in mind", "my goal", "i prefer",
    ]),
    (IntentType.SHOW_WEEKLY, [
        "weekly summary", "week summary", "show weekly", "show week",
        "how was my week", "this week's summary",
    ]),
    (IntentType.SHOW_DAILY, [
        "daily summary", "today's summary", "summary", "show today",
        "how was my day", "my day",
    ]),
    (IntentType.ADD_EVENT, [
        "event", "meeting", "appointment", "schedule", "party",
        "dinner", "lunch with", "birthday", "interview", "conference",
    ]),
    (IntentType.ADD_TASK, [
        "add task", "new task", "task", "todo", "to-do", "to do",
        "need to", "have to",
    ]),
    (IntentType.HELP, [
        "help", "what can you do", "commands", "how does this work",
    ]),
    (IntentType.GREETING, [
        "hi", "hello", "hey", "good morning", "good afternoon",
        "good evening", "howdy", "greetings",
    ]),
]

_INTENT_PATTERNS = [(intent, _compile_word_patterns(words)) for intent, words in _INTENT_KEYWORDS]

# Leading command phrases removed when deriving a title
_COMMAND_PREFIX_RE = re.compile(
    r"^(?:please\s+)?(?:"
    r"remind me\s+(?:to|about|that)\b"
    r"|remind me\b"
    r"|set\s+(?:a\s+)?reminder\s+(?:to|for|about)\b"
    r"|set\s+(?:a\s+)?reminder\b"
    r"|(?:don'?t|do not) forget\s+(?:to\b)?"
    r"|add\s+(?:a\s+)?(?:new\s+)?(?:task|todo|to-do|event|meeting)\s*(?:to\b|for\b|:)?"
    r"|create\s+(?:a\s+)?(?:task|event|meeting)\s*(?:to\b|for\b|:)?"
    r"|new\s+(?:task|event)\s*:?"
    r"|schedule\s+(?:a\s+|an\s+)?"
    r"|remember\s+(?:that\s+)?"
    r"|note that\b"
    r"|keep in mind\s+(?:that\s+)?"
    r"|(?:i\s+)?(?:need|have) to\b"
    r"|todo\s*:?"
    r")\s*",
    re.IGNORECASE,
)

_NUMBER_RE = re.compile(r"\d{1,3}(?:,\d{3})+(?:\.\d+)?|\d+(?:\.\d+)?")
_CURRENCY_RE = re.compile(
    r"[$€£₹]\s*|\s*\b(?:rs\.?|inr|usd|eur|dollars?|rupees?|bucks)\b", re.IGNORECASE
)
_EXPENSE_VERB_RE = re.compile(r"^(?:i\s+)?(?:spent|spend|paid|pay|bought|buy)\s+", re.IGNORECASE)
_EXPENSE_OBJECT_RE = re.compile(r"\b(?:on|for)\s+(.+)$", re.IGNORECASE)
_DANGLING_RE = re.compile(r"(?:\s+\b(?:at|on|by|for|in|to|and)\b)+\s*$", re.IGNORECASE)
_EDGE_PUNCT_RE = re.compile(r"^[\s,.:;!?-]+|[\s,.:;!?-]+$")


def classify(utterance: str) -> IntentType:
    """Classify by keyword. Raises UnsupportedUtterance when nothing matches."""
    for intent, pattern in _INTENT_PATTERNS:
        if pattern.search(utterance or ""):
            return intent
    raise UnsupportedUtterance(utterance or "")


def extract_amount(utterance: str) -> Optional[float]:
    """First numeric token, ignoring numbers that belong to a date/time phrase."""
    remaining, _ = strip_temporal_phrases(utterance)
    for text in (remaining, utterance or ""):
        match = _NUMBER_RE.search(text)
        if match:
            return float(match.group(0).replace(",", ""))
    return None


def _tidy(text: str) -> str:
    text = " ".join(text.split())
    previous = None
    while previous != text:
        previous = text
        text = _EDGE_PUNCT_RE.sub("", text)
        text = _DANGLING_RE.sub("", text)
    return text


def extract_title(utterance: str, intent: IntentType) -> Optional[str]:
    """Strip command and temporal phrases; whatever is left is the title."""
    text, _ = strip_temporal_phrases(utterance)
    if intent == IntentType.LOG_EXPENSE:
        text = _NUMBER_RE.sub(" ", _CURRENCY_RE.sub(" ", text))
        text = " ".join(text.split())
        match = _EXPENSE_OBJECT_RE.search(text)
        if match and _tidy(match.group(1)):
            text = match.group(1)
        else:
            text = _EXPENSE_VERB_RE.sub("", text)
    else:
        text = _COMMAND_PREFIX_RE.sub("", text.strip(), count=1)
    title = _tidy(text)
    return title or None


def parse_locally(utterance: str, now: datetime) -> Dict[str, Any]:
    """Interpret an utterance without the network. Always returns a usable payload."""
    try:
        intent = classify(utterance)
    except UnsupportedUtterance as e:
        logger.debug(f"Local parser fell back to general: {e}")
        intent = IntentType.GENERAL

    arm_fields = INTENT_ARMS[intent].model_fields
    payload: Dict[str, Any] = {"intent": intent.value}

    if "title" in arm_fields:
        payload["title"] = extract_title(utterance, intent) or " ".join((utterance or "").split())
    if intent == IntentType.LOG_EXPENSE:
        payload["amount"] = extract_amount(utterance)
    if "date" in arm_fields:
        fragment = resolve(utterance or "", now)
        payload["date"] = fragment.date
        if "time" in arm_fields:
            payload["time"] = fragment.time

    payload["reply"] = confirmation_reply(
        intent,
        title=payload.get("title"),
        amount=payload.get("amount"),
        on=payload.get("date"),
        at=payload.get("time"),
    )
    return payload
