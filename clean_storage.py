"""
Удалить сохранённые документы (habits, kanban, todos, counter) из хранилища
"""
from habitboard.bootstrap import build_storage, configure_logging
from habitboard.config import get_settings

configure_logging()
settings = get_settings()
storage = build_storage(settings)

print("=== ОЧИСТКА ХРАНИЛИЩА ===")

for key in (
    settings.HABITS_STORAGE_KEY,
    settings.KANBAN_STORAGE_KEY,
    settings.TODOS_STORAGE_KEY,
    settings.COUNTER_STORAGE_KEY,
):
    storage.delete(key)
    print(f"✓ Удалён ключ: {key}")

print("\n✓ Хранилище очищено!")
