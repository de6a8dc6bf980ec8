"""Canned confirmation replies, used when no model-written reply is available."""
from datetime import date, time
from typing import Optional

from models.intent import IntentType

_TEMPLATES = {
    IntentType.ADD_TASK: "Got it! I've added the task \"{title}\"{when}.",
    IntentType.ADD_EVENT: "Done! \"{title}\" is on your calendar{when}.",
    IntentType.LOG_EXPENSE: "Logged {amount}for \"{title}\".",
    IntentType.SET_REMINDER: "Okay, I'll remind you to {title}{when}.",
    IntentType.SAVE_MEMORY: "I'll remember that: \"{title}\".",
    IntentType.SHOW_DAILY: "Here's your daily summary.",
    IntentType.SHOW_WEEKLY: "Here's your weekly summary.",
    IntentType.GREETING: "Hi there! How can I help you today?",
    IntentType.HELP: (
        "I can add tasks, schedule events, log expenses, set reminders and remember things. "
        "Try \"add task buy milk\", \"spent 20 on lunch\" or \"remind me to call mom at 6pm\"."
    ),
    IntentType.GENERAL: (
        "I'm not sure how to help with that yet. "
        "Try \"add task ...\", \"spent ... on ...\", \"remind me ...\" or \"show today\"."
    ),
}


def describe_when(on: Optional[date], at: Optional[time]) -> str:
    parts = []
    if on is not None:
        parts.append(f"on {on.strftime('%a, %b')} {on.day}")
    if at is not None:
        parts.append(f"at {at.strftime('%H:%M')}")
    return (" " + " ".join(parts)) if parts else ""


def confirmation_reply(
    intent: IntentType,
    *,
    title: Optional[str] = None,
    amount: Optional[float] = None,
    on: Optional[date] = None,
    at: Optional[time] = None,
) -> str:
    """Short generic confirmation for an interpreted intent."""
    return _TEMPLATES[intent].format(
        title=title or "that",
        amount=f"{amount:g} " if amount is not None else "an expense ",
        when=describe_when(on, at),
    )
