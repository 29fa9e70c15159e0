"""Habit store: queries, completion counters and stats over the persisted habit list"""
import logging
import uuid
from datetime import date
from typing import Callable, Iterable

from habitboard.application.persistence import ErrorCallback, PersistentStore
from habitboard.domain.habit import (
    STREAK_LOOKBACK_DAYS,
    DayOfWeek,
    FrequencyType,
    Habit,
    HabitStats,
    TimesPerWeekFrequency,
    WeekProgress,
    calculate_streak,
    day_of_week,
    make_frequency,
    week_dates,
    weekly_target,
)
from habitboard.infrastructure.records import dump_habits, load_habits
from habitboard.infrastructure.storage import KeyValueStorage
from habitboard.utils.clock import Clock, SystemClock

logger = logging.getLogger(__name__)

HABITS_STORAGE_KEY = "habit-tracker-habits"


def generate_id() -> str:
    return uuid.uuid4().hex


class HabitStore(PersistentStore):
    """
    Ordered habit collection.

    "Today" is read from the clock on every call. Unknown ids never raise:
    queries return None/0/False and mutators do nothing.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        key: str = HABITS_STORAGE_KEY,
        clock: Clock | None = None,
        on_error: ErrorCallback | None = None,
        id_factory: Callable[[], str] | None = None,
        streak_lookback_days: int = STREAK_LOOKBACK_DAYS,
    ):
        self.clock = clock or SystemClock()
        self.id_factory = id_factory or generate_id
        self.streak_lookback_days = streak_lookback_days
        self.habits: list[Habit] = []
        super().__init__(storage, key, on_error)

    # --- persistence ---

    def reset_state(self) -> None:
        self.habits = []

    def load_state(self, text: str) -> None:
        self.habits = load_habits(text)
        logger.info("Loaded %d habit(s) from %r", len(self.habits), self.key)

    def dump_state(self) -> str:
        return dump_habits(self.habits)

    # --- queries ---

    def all_habits(self) -> list[Habit]:
        return list(self.habits)

    def habit_by_id(self, habit_id: str) -> Habit | None:
        for habit in self.habits:
            if habit.id == habit_id:
                return habit
        return None

    def todays_habits(self) -> list[Habit]:
        weekday = day_of_week(self._today())
        return [h for h in self.habits if h.frequency.is_applicable(weekday)]

    def habit_completion_today(self, habit_id: str) -> int:
        habit = self.habit_by_id(habit_id)
        if not habit:
            return 0
        return habit.completions_on(self._today())

    def habit_completion_this_week(self, habit_id: str) -> int:
        habit = self.habit_by_id(habit_id)
        if not habit:
            return 0
        return sum(habit.completions_on(d) for d in week_dates(self._today()))

    def is_habit_complete_today(self, habit_id: str) -> bool:
        habit = self.habit_by_id(habit_id)
        if not habit:
            return False
        # times-per-week completeness is tracked per week (habit_week_progress)
        if isinstance(habit.frequency, TimesPerWeekFrequency):
            return False
        return habit.completions_on(self._today()) >= 1

    def habit_stats(self, habit_id: str) -> HabitStats | None:
        habit = self.habit_by_id(habit_id)
        if not habit:
            return None
        return HabitStats(
            total_completions=sum(habit.completions.values()),
            days_tracked=sum(1 for n in habit.completions.values() if n >= 1),
            current_streak=calculate_streak(habit.completions, self._today(), self.streak_lookback_days),
        )

    def habit_week_progress(self, habit_id: str) -> WeekProgress | None:
        habit = self.habit_by_id(habit_id)
        if not habit:
            return None
        return WeekProgress(
            done=self.habit_completion_this_week(habit_id),
            target=weekly_target(habit.frequency),
        )

    # --- mutators ---

    def add_habit(
        self,
        name: str,
        description: str,
        frequency_type: FrequencyType | str,
        days_of_week: Iterable[DayOfWeek | str] | None = None,
        times_per_week: int | None = None,
    ) -> Habit:
        """
        Raises:
            HabitValidationError: unknown frequency type or missing/invalid
                days_of_week / times_per_week for it
        """
        frequency = make_frequency(frequency_type, days_of_week, times_per_week)
        habit = Habit(
            id=self.id_factory(),
            name=name,
            description=description,
            frequency=frequency,
            created_at=self.clock.now(),
            completions={},
        )
        self.habits.append(habit)
        self.save()
        logger.debug("Habit %s added (%s)", habit.id, frequency.type.value)
        return habit

    def update_habit(self, habit: Habit) -> None:
        for index, existing in enumerate(self.habits):
            if existing.id == habit.id:
                self.habits[index] = habit
                self.save()
                return

    def delete_habit(self, habit_id: str) -> None:
        remaining = [h for h in self.habits if h.id != habit_id]
        if len(remaining) == len(self.habits):
            return
        self.habits = remaining
        self.save()

    def complete_habit(self, habit_id: str) -> None:
        habit = self.habit_by_id(habit_id)
        if not habit:
            return
        habit.increment(self._today())
        self.save()

    def uncomplete_habit(self, habit_id: str) -> None:
        habit = self.habit_by_id(habit_id)
        if habit and habit.decrement(self._today()):
            self.save()

    def set_habits(self, habits: list[Habit]) -> None:
        """Replace the whole collection (restore/import)."""
        self.habits = list(habits)
        self.save()

    def _today(self) -> date:
        return self.clock.today()
