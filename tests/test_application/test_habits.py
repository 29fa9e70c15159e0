"""
Tests for the habit store: today filter, completion counters, week sums, stats, mutators
"""
import json
import pytest
from dataclasses import replace
from datetime import date, timedelta

from habitboard.application.habits import HabitStore
from habitboard.domain.habit import (
    DayOfWeek,
    FrequencyType,
    HabitStats,
    HabitValidationError,
    TimesPerWeekFrequency,
    WeekProgress,
)


# --- Fixtures ---

@pytest.fixture
def store(storage, clock):
    ids = iter(f"h{i}" for i in range(1, 100))
    return HabitStore(storage, clock=clock, id_factory=lambda: next(ids))


@pytest.fixture
def daily_habit(store):
    return store.add_habit("Зарядка", "10 минут", FrequencyType.DAILY)


@pytest.fixture
def mon_wed_habit(store):
    return store.add_habit("Бег", "", "days-of-week",
                           days_of_week=[DayOfWeek.MONDAY, DayOfWeek.WEDNESDAY])


@pytest.fixture
def three_times_habit(store):
    return store.add_habit("Чтение", "", "times-per-week", times_per_week=3)


# --- add / lookup ---

class TestAddHabit:
    def test_add_assigns_id_and_timestamp(self, store, clock):
        habit = store.add_habit("Зарядка", "10 минут", "daily")
        assert habit.id == "h1"
        assert habit.created_at == clock.now()
        assert habit.completions == {}
        assert store.all_habits() == [habit]

    def test_add_keeps_insertion_order(self, store):
        a = store.add_habit("A", "", "daily")
        b = store.add_habit("B", "", "weekly")
        assert [h.id for h in store.all_habits()] == [a.id, b.id]

    def test_default_ids_are_unique(self, storage, clock):
        store = HabitStore(storage, clock=clock)
        ids = {store.add_habit(f"H{i}", "", "daily").id for i in range(20)}
        assert len(ids) == 20

    def test_add_persists(self, store, storage):
        store.add_habit("Зарядка", "", "daily")
        stored = json.loads(storage.get("habit-tracker-habits"))
        assert stored[0]["name"] == "Зарядка"

    def test_invalid_frequency_rejected_and_not_stored(self, store, storage):
        with pytest.raises(HabitValidationError):
            store.add_habit("Бег", "", "days-of-week")
        assert store.all_habits() == []
        assert storage.get("habit-tracker-habits") is None

    def test_habit_by_id(self, store, daily_habit):
        assert store.habit_by_id(daily_habit.id) is daily_habit
        assert store.habit_by_id("missing") is None


# --- todays_habits ---

class TestTodaysHabits:
    def test_days_of_week_on_selected_day(self, store, clock, mon_wed_habit):
        clock.set(date(2024, 1, 1))  # Monday
        assert store.todays_habits() == [mon_wed_habit]
        clock.set(date(2024, 1, 3))  # Wednesday
        assert store.todays_habits() == [mon_wed_habit]

    @pytest.mark.parametrize("day", [2, 4, 5, 6, 7])
    def test_days_of_week_other_days(self, store, clock, mon_wed_habit, day):
        clock.set(date(2024, 1, day))
        assert store.todays_habits() == []

    def test_daily_weekly_times_per_week_always(self, store, clock):
        daily = store.add_habit("A", "", "daily")
        weekly = store.add_habit("B", "", "weekly")
        tpw = store.add_habit("C", "", "times-per-week", times_per_week=2)
        for day in range(1, 8):
            clock.set(date(2024, 1, day))
            assert store.todays_habits() == [daily, weekly, tpw]


# --- completion counters ---

class TestCompletions:
    def test_completion_today_counts_calls(self, store, daily_habit):
        for _ in range(4):
            store.complete_habit(daily_habit.id)
        assert store.habit_completion_today(daily_habit.id) == 4

    def test_completion_today_zero_initially(self, store, daily_habit):
        assert store.habit_completion_today(daily_habit.id) == 0

    def test_completion_today_unknown_habit(self, store):
        assert store.habit_completion_today("missing") == 0

    def test_complete_then_uncomplete_restores(self, store, daily_habit):
        store.complete_habit(daily_habit.id)
        store.complete_habit(daily_habit.id)
        before = dict(daily_habit.completions)

        store.complete_habit(daily_habit.id)
        store.uncomplete_habit(daily_habit.id)
        assert daily_habit.completions == before

    def test_complete_then_uncomplete_from_zero_removes_entry(self, store, daily_habit):
        store.complete_habit(daily_habit.id)
        store.uncomplete_habit(daily_habit.id)
        assert daily_habit.completions == {}

    def test_uncomplete_without_completion_is_noop(self, store, daily_habit, storage):
        saved = storage.get("habit-tracker-habits")
        store.uncomplete_habit(daily_habit.id)
        assert daily_habit.completions == {}
        assert storage.get("habit-tracker-habits") == saved

    def test_uncomplete_only_touches_today(self, store, clock, daily_habit):
        daily_habit.completions["2024-01-02"] = 1
        store.uncomplete_habit(daily_habit.id)
        assert daily_habit.completions == {"2024-01-02": 1}

    def test_unknown_ids_ignored(self, store, daily_habit):
        store.complete_habit("missing")
        store.uncomplete_habit("missing")
        assert daily_habit.completions == {}

    def test_uses_clock_date(self, store, clock, daily_habit):
        store.complete_habit(daily_habit.id)
        assert daily_habit.completions == {"2024-01-03": 1}


class TestCompleteToday:
    def test_daily(self, store, daily_habit):
        assert store.is_habit_complete_today(daily_habit.id) is False
        store.complete_habit(daily_habit.id)
        assert store.is_habit_complete_today(daily_habit.id) is True

    def test_weekly_and_days_of_week(self, store, mon_wed_habit):
        weekly = store.add_habit("Уборка", "", "weekly")
        store.complete_habit(weekly.id)
        store.complete_habit(mon_wed_habit.id)
        assert store.is_habit_complete_today(weekly.id) is True
        assert store.is_habit_complete_today(mon_wed_habit.id) is True

    def test_times_per_week_never_complete(self, store, three_times_habit):
        for _ in range(5):
            store.complete_habit(three_times_habit.id)
        assert store.is_habit_complete_today(three_times_habit.id) is False

    def test_unknown_habit(self, store):
        assert store.is_habit_complete_today("missing") is False


class TestCompletionThisWeek:
    def test_sums_monday_to_sunday(self, store, clock, daily_habit):
        daily_habit.completions.update({"2024-01-01": 2, "2024-01-03": 1, "2024-01-08": 5})
        assert store.habit_completion_this_week(daily_habit.id) == 3

    def test_previous_week_excluded(self, store, clock, daily_habit):
        daily_habit.completions.update({"2023-12-31": 4, "2024-01-07": 1})
        assert store.habit_completion_this_week(daily_habit.id) == 1

    def test_sunday_belongs_to_week_started_monday(self, store, clock, daily_habit):
        daily_habit.completions.update({"2024-01-01": 2, "2024-01-07": 1, "2024-01-08": 9})
        clock.set(date(2024, 1, 7))
        assert store.habit_completion_this_week(daily_habit.id) == 3

    def test_unknown_habit(self, store):
        assert store.habit_completion_this_week("missing") == 0


class TestWeekProgress:
    def test_times_per_week(self, store, three_times_habit):
        store.complete_habit(three_times_habit.id)
        store.complete_habit(three_times_habit.id)
        assert store.habit_week_progress(three_times_habit.id) == WeekProgress(done=2, target=3)

    def test_days_of_week_target(self, store, mon_wed_habit):
        assert store.habit_week_progress(mon_wed_habit.id) == WeekProgress(done=0, target=2)

    def test_unknown_habit(self, store):
        assert store.habit_week_progress("missing") is None


# --- stats ---

class TestHabitStats:
    def test_totals_and_streak(self, store, clock, daily_habit):
        today = clock.today()
        for offset, count in ((0, 2), (1, 1), (2, 3), (5, 1)):
            daily_habit.completions[(today - timedelta(days=offset)).isoformat()] = count

        stats = store.habit_stats(daily_habit.id)
        assert stats == HabitStats(total_completions=7, days_tracked=4, current_streak=3)

    def test_streak_with_today_open(self, store, clock, daily_habit):
        today = clock.today()
        for offset in (1, 2):
            daily_habit.completions[(today - timedelta(days=offset)).isoformat()] = 1
        assert store.habit_stats(daily_habit.id).current_streak == 2

    def test_empty_habit(self, store, daily_habit):
        assert store.habit_stats(daily_habit.id) == HabitStats(0, 0, 0)

    def test_unknown_habit(self, store):
        assert store.habit_stats("missing") is None

    def test_lookback_is_configurable(self, storage, clock):
        store = HabitStore(storage, clock=clock, streak_lookback_days=5)
        habit = store.add_habit("A", "", "daily")
        for offset in range(10):
            habit.completions[(clock.today() - timedelta(days=offset)).isoformat()] = 1
        assert store.habit_stats(habit.id).current_streak == 5


# --- update / delete ---

class TestUpdateDelete:
    def test_update_replaces(self, store, daily_habit):
        daily_habit_copy = store.habit_by_id(daily_habit.id)
        daily_habit_copy.name = "Зарядка утром"
        daily_habit_copy.frequency = TimesPerWeekFrequency(4)
        store.update_habit(daily_habit_copy)

        habit = store.habit_by_id(daily_habit.id)
        assert habit.name == "Зарядка утром"
        assert habit.frequency_type == FrequencyType.TIMES_PER_WEEK

    def test_update_unknown_is_noop(self, store, daily_habit, storage):
        saved = storage.get("habit-tracker-habits")
        store.update_habit(replace(daily_habit, id="missing", name="Другое"))
        assert [h.id for h in store.all_habits()] == [daily_habit.id]
        assert storage.get("habit-tracker-habits") == saved

    def test_delete(self, store, daily_habit, mon_wed_habit):
        store.delete_habit(daily_habit.id)
        assert store.all_habits() == [mon_wed_habit]
        assert store.habit_by_id(daily_habit.id) is None

    def test_delete_is_idempotent(self, store, daily_habit):
        store.delete_habit(daily_habit.id)
        store.delete_habit(daily_habit.id)
        assert store.all_habits() == []

    def test_set_habits_replaces_collection(self, store, daily_habit, storage):
        store.set_habits([])
        assert store.all_habits() == []
        assert json.loads(storage.get("habit-tracker-habits")) == []
