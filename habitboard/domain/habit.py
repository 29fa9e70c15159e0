"""
Habit domain: frequency rules, completion counters and the streak/week helpers.

Dates are plain calendar dates (no timezone). Completion keys are ISO strings
(YYYY-MM-DD) so the mapping serializes as-is.

Frequencies:
- daily: applicable every day
- weekly: applicable every day, done once per week
- days-of-week: applicable on the selected weekdays only
- times-per-week: applicable every day, target N completions per week
"""
import enum
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import ClassVar, Iterable, Union

STREAK_LOOKBACK_DAYS = 365


class HabitValidationError(ValueError):
    pass


class FrequencyType(str, enum.Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    DAYS_OF_WEEK = "days-of-week"
    TIMES_PER_WEEK = "times-per-week"


class DayOfWeek(str, enum.Enum):
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"


# date.weekday() order: MO=0..SU=6
WEEKDAYS = list(DayOfWeek)


@dataclass(frozen=True)
class DailyFrequency:
    type: ClassVar[FrequencyType] = FrequencyType.DAILY

    def is_applicable(self, weekday: DayOfWeek) -> bool:
        return True


@dataclass(frozen=True)
class WeeklyFrequency:
    type: ClassVar[FrequencyType] = FrequencyType.WEEKLY

    def is_applicable(self, weekday: DayOfWeek) -> bool:
        return True


@dataclass(frozen=True)
class DaysOfWeekFrequency:
    days: frozenset[DayOfWeek]
    type: ClassVar[FrequencyType] = FrequencyType.DAYS_OF_WEEK

    # an empty day set is allowed for stored habits: never applicable
    def is_applicable(self, weekday: DayOfWeek) -> bool:
        return weekday in self.days


@dataclass(frozen=True)
class TimesPerWeekFrequency:
    times: int
    type: ClassVar[FrequencyType] = FrequencyType.TIMES_PER_WEEK

    def __post_init__(self):
        if isinstance(self.times, bool) or not isinstance(self.times, int) or self.times < 1:
            raise HabitValidationError("times per week must be a positive integer")

    # Advisory only: the weekly target is not enforced on individual days
    def is_applicable(self, weekday: DayOfWeek) -> bool:
        return True


Frequency = Union[DailyFrequency, WeeklyFrequency, DaysOfWeekFrequency, TimesPerWeekFrequency]


def make_frequency(
    frequency_type: FrequencyType | str,
    days_of_week: Iterable[DayOfWeek | str] | None = None,
    times_per_week: int | None = None,
) -> Frequency:
    """Build the frequency variant for a frequency type and its optional fields."""
    try:
        frequency_type = FrequencyType(frequency_type)
    except ValueError:
        raise HabitValidationError(f"invalid frequency type: {frequency_type!r}") from None

    if frequency_type == FrequencyType.DAILY:
        return DailyFrequency()
    if frequency_type == FrequencyType.WEEKLY:
        return WeeklyFrequency()
    if frequency_type == FrequencyType.DAYS_OF_WEEK:
        if days_of_week is None:
            raise HabitValidationError("days-of-week habit requires days_of_week")
        try:
            days = frozenset(DayOfWeek(d) for d in days_of_week)
        except ValueError as e:
            raise HabitValidationError(str(e)) from None
        if not days:
            raise HabitValidationError("days-of-week habit needs at least one weekday")
        return DaysOfWeekFrequency(days)
    if times_per_week is None:
        raise HabitValidationError("times-per-week habit requires times_per_week")
    return TimesPerWeekFrequency(times_per_week)


@dataclass
class Habit:
    id: str
    name: str
    description: str
    frequency: Frequency
    created_at: datetime
    completions: dict[str, int] = field(default_factory=dict)

    def __post_init__(self):
        # zero entries are never stored
        self.completions = {d: n for d, n in self.completions.items() if n > 0}

    @property
    def frequency_type(self) -> FrequencyType:
        return self.frequency.type

    def completions_on(self, d: date) -> int:
        return self.completions.get(d.isoformat(), 0)

    def increment(self, d: date) -> None:
        key = d.isoformat()
        self.completions[key] = self.completions.get(key, 0) + 1

    def decrement(self, d: date) -> bool:
        """Decrement the count for d; drop the entry at zero. False if nothing to decrement."""
        key = d.isoformat()
        count = self.completions.get(key, 0)
        if count <= 0:
            return False
        if count == 1:
            del self.completions[key]
        else:
            self.completions[key] = count - 1
        return True


@dataclass(frozen=True)
class HabitStats:
    total_completions: int
    days_tracked: int
    current_streak: int


@dataclass(frozen=True)
class WeekProgress:
    done: int
    target: int


def day_of_week(d: date) -> DayOfWeek:
    return WEEKDAYS[d.weekday()]


def week_start(d: date) -> date:
    """Monday of the week containing d (Sunday belongs to the preceding Monday)."""
    return d - timedelta(days=d.weekday())


def week_dates(d: date) -> list[date]:
    start = week_start(d)
    return [start + timedelta(days=i) for i in range(7)]


def weekly_target(frequency: Frequency) -> int:
    if isinstance(frequency, TimesPerWeekFrequency):
        return frequency.times
    if isinstance(frequency, DaysOfWeekFrequency):
        return len(frequency.days)
    if isinstance(frequency, DailyFrequency):
        return 7
    return 1


def calculate_streak(completions: dict[str, int], today: date,
                     lookback_days: int = STREAK_LOOKBACK_DAYS) -> int:
    """
    Consecutive completed days ending today or yesterday.

    Today is exempt: an empty today does not break the run, any other empty
    day does. At most lookback_days days are examined.
    """
    streak = 0
    d = today
    for _ in range(lookback_days):
        if completions.get(d.isoformat(), 0) >= 1:
            streak += 1
        elif d != today:
            break
        d -= timedelta(days=1)
    return streak
