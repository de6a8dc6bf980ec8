"""Deterministic summary text, used when the external parser is unavailable."""
from datetime import date
from typing import Optional, Union

from models.summary import DailySummaryData, WeeklySummaryData


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'s' if count != 1 else ''}"


def compose_daily_text(data: DailySummaryData, today: Optional[date] = None) -> str:
    day = data.day or today or date.today()
    parts = [f"Here's your daily summary for {day.strftime('%A, %B')} {day.day}."]

    if data.tasks_completed > 0:
        parts.append(f"You completed {_plural(data.tasks_completed, 'task')} today. Great work! 🎉")
    if data.tasks_pending > 0:
        parts.append(f"You have {_plural(data.tasks_pending, 'task')} still pending.")
    if data.total_spent > 0:
        parts.append(f"Today's spending: {data.currency_symbol}{data.total_spent:.2f}.")
    if data.upcoming_events > 0:
        parts.append(f"{_plural(data.upcoming_events, 'upcoming event')} today.")
    if data.missed_reminders > 0:
        parts.append(f"⚠️ {_plural(data.missed_reminders, 'missed reminder')}.")

    if len(parts) == 1:
        parts.append("No major activity recorded yet today. Start by adding some tasks or logging expenses!")
    return " ".join(parts)


def compose_weekly_text(data: WeeklySummaryData) -> str:
    parts = ["Here's your week at a glance."]

    if data.total_tasks > 0:
        parts.append(
            f"You completed {data.tasks_completed} of {_plural(data.total_tasks, 'task')} this week."
        )
    if data.total_spent > 0:
        spent = f"You spent {data.currency_symbol}{data.total_spent:.2f}"
        if data.top_category:
            spent += f", mostly on {data.top_category}"
        parts.append(spent + ".")
    if data.missed_reminders > 0:
        parts.append(f"⚠️ {_plural(data.missed_reminders, 'missed reminder')} this week.")

    if len(parts) == 1:
        parts.append("It was a quiet week. Add a few tasks or goals to get going!")
    return " ".join(parts)


def compose_summary_text(data: Union[DailySummaryData, WeeklySummaryData]) -> str:
    if isinstance(data, DailySummaryData):
        return compose_daily_text(data)
    return compose_weekly_text(data)
