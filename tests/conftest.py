"""
Pytest fixtures for testing
"""
from datetime import date, datetime, time, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from habitboard.infrastructure.db.session import Base
from habitboard.infrastructure.db import models  # noqa: F401
from habitboard.infrastructure.storage import InMemoryStorage, SqlKeyValueStorage


class FixedClock:
    """Clock pinned to a given day; tests move it with set()."""

    def __init__(self, today: date):
        self.current = today

    def set(self, today: date) -> None:
        self.current = today

    def today(self) -> date:
        return self.current

    def now(self) -> datetime:
        return datetime.combine(self.current, time(9, 30), tzinfo=timezone.utc)


@pytest.fixture
def db_engine():
    """In-memory SQLite engine shared by all sessions of a test."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(bind=db_engine, autoflush=False, autocommit=False)


@pytest.fixture
def sql_storage(session_factory) -> SqlKeyValueStorage:
    return SqlKeyValueStorage(session_factory)


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def clock() -> FixedClock:
    # 2024-01-03 is a Wednesday
    return FixedClock(date(2024, 1, 3))


@pytest.fixture
def errors() -> list:
    """Collects (operation, exception) pairs passed to on_error."""
    return []
