"""
Workspace factory - builds the storage backend from settings and wires the stores
"""
import logging
from dataclasses import dataclass

from habitboard.application.counter import CounterStore
from habitboard.application.habits import HabitStore
from habitboard.application.kanban import KanbanStore
from habitboard.application.persistence import ErrorCallback
from habitboard.application.todos import TodoStore
from habitboard.config import Settings, get_settings
from habitboard.infrastructure.storage import InMemoryStorage, KeyValueStorage, SqlKeyValueStorage
from habitboard.utils.clock import Clock, SystemClock

logger = logging.getLogger(__name__)


@dataclass
class Workspace:
    habits: HabitStore
    todos: TodoStore
    kanban: KanbanStore
    counter: CounterStore
    storage: KeyValueStorage


def configure_logging(settings: Settings | None = None) -> None:
    settings = settings or get_settings()
    level = logging.DEBUG if settings.DEBUG else settings.LOG_LEVEL.upper()
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def build_storage(settings: Settings | None = None) -> KeyValueStorage:
    """
    Raises:
        sqlalchemy.exc.OperationalError: SQL backend configured but unreachable
    """
    settings = settings or get_settings()
    if settings.STORAGE_BACKEND == "memory":
        logger.info("Using in-memory storage; nothing will be persisted")
        return InMemoryStorage()

    from habitboard.infrastructure.db.session import (
        check_db_connection, create_db_engine, create_session_factory, init_db,
    )

    engine = create_db_engine(settings)
    check_db_connection(engine)
    init_db(engine)
    logger.info("Using SQL storage at %s", engine.url.render_as_string(hide_password=True))
    return SqlKeyValueStorage(create_session_factory(engine))


def create_workspace(
    settings: Settings | None = None,
    storage: KeyValueStorage | None = None,
    clock: Clock | None = None,
    on_error: ErrorCallback | None = None,
) -> Workspace:
    """
    Build all stores over one storage backend.

    Args:
        settings: defaults to get_settings()
        storage: overrides the configured backend
        clock: defaults to the local wall clock
        on_error: storage failure callback shared by all stores
    """
    settings = settings or get_settings()
    storage = storage if storage is not None else build_storage(settings)
    clock = clock or SystemClock()

    return Workspace(
        habits=HabitStore(
            storage,
            key=settings.HABITS_STORAGE_KEY,
            clock=clock,
            on_error=on_error,
            streak_lookback_days=settings.STREAK_LOOKBACK_DAYS,
        ),
        todos=TodoStore(storage, key=settings.TODOS_STORAGE_KEY, on_error=on_error),
        kanban=KanbanStore(storage, key=settings.KANBAN_STORAGE_KEY, clock=clock, on_error=on_error),
        counter=CounterStore(storage, key=settings.COUNTER_STORAGE_KEY, on_error=on_error),
        storage=storage,
    )
