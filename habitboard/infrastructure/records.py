"""
Stored document schemas (camelCase JSON) and their domain conversions.

The JSON shape must stay readable by previously persisted data, so field
names and optionality follow the stored documents, not the Python names.
"""
import json
import logging
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from habitboard.domain.habit import (
    WEEKDAYS, DayOfWeek, DaysOfWeekFrequency, FrequencyType, Habit, TimesPerWeekFrequency,
    make_frequency,
)
from habitboard.domain.kanban import KanbanCard, KanbanColumn
from habitboard.domain.todo import Todo

logger = logging.getLogger(__name__)


def format_timestamp(value: datetime) -> str:
    """2024-01-01T09:30:00.000Z for aware values, plain ISO for naive ones."""
    if value.tzinfo is None:
        return value.isoformat(timespec="milliseconds")
    utc = value.astimezone(timezone.utc).replace(tzinfo=None)
    return utc.isoformat(timespec="milliseconds") + "Z"


class _Record(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_json_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# === Habits ===

class HabitRecord(_Record):
    id: str
    name: str
    description: str = ""
    frequency_type: FrequencyType = Field(alias="frequencyType")
    days_of_week: list[DayOfWeek] | None = Field(default=None, alias="daysOfWeek")
    times_per_week: int | None = Field(default=None, alias="timesPerWeek")
    created_at: datetime = Field(alias="createdAt")
    completions: dict[str, int] = Field(default_factory=dict)

    @field_validator("completions")
    @classmethod
    def drop_empty_days(cls, v: dict[str, int]) -> dict[str, int]:
        return {d: n for d, n in v.items() if n > 0}

    @field_serializer("created_at")
    def serialize_created_at(self, v: datetime) -> str:
        return format_timestamp(v)

    def to_domain(self) -> Habit:
        if self.frequency_type == FrequencyType.DAYS_OF_WEEK:
            # stored without weekdays: kept, but never due
            frequency = DaysOfWeekFrequency(frozenset(self.days_of_week or ()))
        else:
            frequency = make_frequency(self.frequency_type, self.days_of_week, self.times_per_week)
        return Habit(
            id=self.id,
            name=self.name,
            description=self.description,
            frequency=frequency,
            created_at=self.created_at,
            completions=dict(self.completions),
        )

    @classmethod
    def from_domain(cls, habit: Habit) -> "HabitRecord":
        days = None
        times = None
        if isinstance(habit.frequency, DaysOfWeekFrequency):
            days = [d for d in WEEKDAYS if d in habit.frequency.days]
        elif isinstance(habit.frequency, TimesPerWeekFrequency):
            times = habit.frequency.times
        return cls(
            id=habit.id,
            name=habit.name,
            description=habit.description,
            frequency_type=habit.frequency_type,
            days_of_week=days,
            times_per_week=times,
            created_at=habit.created_at,
            completions=dict(habit.completions),
        )


def dump_habits(habits: list[Habit]) -> str:
    return json.dumps([HabitRecord.from_domain(h).to_json_dict() for h in habits])


def load_habits(text: str) -> list[Habit]:
    """
    Parse a stored habits document.

    Raises:
        ValueError: if the text is not JSON or not a JSON array

    Individual malformed records are skipped with a warning.
    """
    data = json.loads(text)
    if not isinstance(data, list):
        raise ValueError(f"expected a JSON array of habits, got {type(data).__name__}")

    habits: list[Habit] = []
    seen: set[str] = set()
    for index, raw in enumerate(data):
        try:
            habit = HabitRecord.model_validate(raw).to_domain()
        except ValueError as e:
            # ValidationError and HabitValidationError are both ValueErrors
            logger.warning("Skipping malformed habit record #%d: %s", index, e)
            continue
        if habit.id in seen:
            logger.warning("Skipping duplicate habit id %r (record #%d)", habit.id, index)
            continue
        seen.add(habit.id)
        habits.append(habit)
    return habits


# === Todos ===

class TodoRecord(_Record):
    id: int
    text: str
    completed: bool = False


class TodoListRecord(_Record):
    todos: list[TodoRecord] = Field(default_factory=list)
    next_id: int = Field(default=1, alias="nextId")


def dump_todos(todos: list[Todo], next_id: int) -> str:
    record = TodoListRecord(
        todos=[TodoRecord(id=t.id, text=t.text, completed=t.completed) for t in todos],
        next_id=next_id,
    )
    return json.dumps(record.to_json_dict())


def load_todos(text: str) -> tuple[list[Todo], int]:
    record = TodoListRecord.model_validate_json(text)
    todos = [Todo(id=r.id, text=r.text, completed=r.completed) for r in record.todos]
    next_id = max([record.next_id] + [t.id + 1 for t in todos])
    return todos, next_id


# === Kanban ===

class KanbanColumnRecord(_Record):
    id: str
    title: str
    order: int
    color: str


class KanbanCardRecord(_Record):
    id: str
    title: str
    description: str = ""
    column_id: str = Field(alias="columnId")
    order: int
    created_at: datetime = Field(alias="createdAt")

    @field_serializer("created_at")
    def serialize_created_at(self, v: datetime) -> str:
        return format_timestamp(v)


class KanbanBoardRecord(_Record):
    columns: list[KanbanColumnRecord] = Field(default_factory=list)
    cards: list[KanbanCardRecord] = Field(default_factory=list)


def dump_board(columns: list[KanbanColumn], cards: list[KanbanCard]) -> str:
    record = KanbanBoardRecord(
        columns=[
            KanbanColumnRecord(id=c.id, title=c.title, order=c.order, color=c.color)
            for c in columns
        ],
        cards=[
            KanbanCardRecord(
                id=c.id, title=c.title, description=c.description,
                column_id=c.column_id, order=c.order, created_at=c.created_at,
            )
            for c in cards
        ],
    )
    return json.dumps(record.to_json_dict())


def load_board(text: str) -> tuple[list[KanbanColumn], list[KanbanCard]]:
    record = KanbanBoardRecord.model_validate_json(text)
    columns = [KanbanColumn(id=c.id, title=c.title, order=c.order, color=c.color) for c in record.columns]
    cards = [
        KanbanCard(
            id=c.id, title=c.title, description=c.description,
            column_id=c.column_id, order=c.order, created_at=c.created_at,
        )
        for c in record.cards
    ]
    return columns, cards


# === Counter ===

class CounterRecord(_Record):
    count: int = 0


def dump_counter(count: int) -> str:
    return json.dumps(CounterRecord(count=count).to_json_dict())


def load_counter(text: str) -> int:
    return CounterRecord.model_validate_json(text).count

