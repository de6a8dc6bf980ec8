"""Intent record models: the canonical output of interpreting one utterance.

An intent record is a tagged union discriminated on ``intent``. Each arm
declares exactly the fields that intent may carry, so a record can never hold
e.g. an ``amount`` on a task.
"""
import datetime as dt
from enum import Enum
from typing import Annotated, Dict, Literal, Optional, Type, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_serializer


class IntentType(str, Enum):
    ADD_TASK = "add_task"
    ADD_EVENT = "add_event"
    LOG_EXPENSE = "log_expense"
    SET_REMINDER = "set_reminder"
    SAVE_MEMORY = "save_memory"
    SHOW_DAILY = "show_daily"
    SHOW_WEEKLY = "show_weekly"
    GREETING = "greeting"
    HELP = "help"
    GENERAL = "general"


class ExpenseCategory(str, Enum):
    FOOD = "Food"
    TRAVEL = "Travel"
    RENT = "Rent"
    SHOPPING = "Shopping"
    HEALTH = "Health"
    OTHER = "Other"


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class MemoryType(str, Enum):
    GOAL = "Goal"
    PREFERENCE = "Preference"
    RULE = "Rule"
    PERSON = "Person"
    GENERAL = "General"


class IntentBase(BaseModel):
    """Fields shared by every intent arm. Records are immutable once built."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    reply: str = Field(..., min_length=1)  # user-facing confirmation


class ScheduledIntent(IntentBase):
    """Base for intents that carry a title and an optional date/time."""
    title: str = Field(..., min_length=1)
    date: Optional[dt.date] = None
    time: Optional[dt.time] = None

    @field_serializer("time")
    def _serialize_time(self, value: Optional[dt.time]) -> Optional[str]:
        return value.strftime("%H:%M") if value is not None else None


class AddTaskIntent(ScheduledIntent):
    intent: Literal["add_task"] = "add_task"
    priority: Optional[Priority] = None


class AddEventIntent(ScheduledIntent):
    intent: Literal["add_event"] = "add_event"


class SetReminderIntent(ScheduledIntent):
    intent: Literal["set_reminder"] = "set_reminder"


class LogExpenseIntent(IntentBase):
    intent: Literal["log_expense"] = "log_expense"
    title: str = Field(..., min_length=1)
    amount: Optional[float] = Field(None, ge=0)
    category: Optional[ExpenseCategory] = None
    date: Optional[dt.date] = None


class SaveMemoryIntent(IntentBase):
    intent: Literal["save_memory"] = "save_memory"
    title: str = Field(..., min_length=1)
    memory_type: Optional[MemoryType] = Field(None, alias="memoryType")


class ShowDailyIntent(IntentBase):
    intent: Literal["show_daily"] = "show_daily"


class ShowWeeklyIntent(IntentBase):
    intent: Literal["show_weekly"] = "show_weekly"


class GreetingIntent(IntentBase):
    intent: Literal["greeting"] = "greeting"


class HelpIntent(IntentBase):
    intent: Literal["help"] = "help"


class GeneralIntent(IntentBase):
    intent: Literal["general"] = "general"


IntentRecord = Annotated[
    Union[
        AddTaskIntent,
        AddEventIntent,
        LogExpenseIntent,
        SetReminderIntent,
        SaveMemoryIntent,
        ShowDailyIntent,
        ShowWeeklyIntent,
        GreetingIntent,
        HelpIntent,
        GeneralIntent,
    ],
    Field(discriminator="intent"),
]

# tag -> arm, used when validating payloads field by field
INTENT_ARMS: Dict[IntentType, Type[IntentBase]] = {
    IntentType.ADD_TASK: AddTaskIntent,
    IntentType.ADD_EVENT: AddEventIntent,
    IntentType.LOG_EXPENSE: LogExpenseIntent,
    IntentType.SET_REMINDER: SetReminderIntent,
    IntentType.SAVE_MEMORY: SaveMemoryIntent,
    IntentType.SHOW_DAILY: ShowDailyIntent,
    IntentType.SHOW_WEEKLY: ShowWeeklyIntent,
    IntentType.GREETING: GreetingIntent,
    IntentType.HELP: HelpIntent,
    IntentType.GENERAL: GeneralIntent,
}

# Intents whose record must carry a title
TITLED_INTENTS = frozenset({
    IntentType.ADD_TASK,
    IntentType.ADD_EVENT,
    IntentType.LOG_EXPENSE,
    IntentType.SET_REMINDER,
    IntentType.SAVE_MEMORY,
})

intent_record_adapter: TypeAdapter = TypeAdapter(IntentRecord)
