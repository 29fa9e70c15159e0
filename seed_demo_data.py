"""
Seed demo data into the configured storage (habits, todos, kanban cards).
Run:  python seed_demo_data.py
"""
import sys
from datetime import timedelta

from habitboard.bootstrap import configure_logging, create_workspace
from habitboard.domain.habit import DayOfWeek, FrequencyType

configure_logging()
ws = create_workspace()

if ws.habits.all_habits():
    print(f"Habits exist ({len(ws.habits.all_habits())}). Nothing to seed.")
    sys.exit(0)

# ── habits ───────────────────────────────────────────────────────
exercise = ws.habits.add_habit("Зарядка", "10 минут утром", FrequencyType.DAILY)
ws.habits.add_habit("Бег", "", FrequencyType.DAYS_OF_WEEK,
                    days_of_week=[DayOfWeek.MONDAY, DayOfWeek.WEDNESDAY, DayOfWeek.FRIDAY])
ws.habits.add_habit("Чтение", "30 страниц", FrequencyType.TIMES_PER_WEEK, times_per_week=3)
ws.habits.add_habit("Уборка", "", FrequencyType.WEEKLY)

# backfill the last week so the streak is visible
today = ws.habits.clock.today()
for i in range(1, 8):
    exercise.completions[(today - timedelta(days=i)).isoformat()] = 1
ws.habits.update_habit(exercise)

# ── todos & kanban ───────────────────────────────────────────────
for text in ("Купить продукты", "Позвонить маме", "Оплатить интернет"):
    ws.todos.add_todo(text)

ws.kanban.add_card("Настроить бэкап", "SQLite файл в облако", "todo")
ws.kanban.add_card("Разобрать почту", "", "in-progress")

stats = ws.habits.habit_stats(exercise.id)
print(f"✓ Habits: {len(ws.habits.all_habits())}, streak '{exercise.name}': {stats.current_streak}")
print(f"✓ Todos: {ws.todos.todos_count()}")
print(f"✓ Cards: {len(ws.kanban.all_cards())}")
