"""
Key-value storage backends for persisted documents.

Every store keeps its whole state as one JSON text under a fixed key.
Backends only move strings; parsing belongs to the stores.
"""
import logging
from typing import Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from habitboard.infrastructure.db.models import KeyValueEntry

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised by a backend when a read or write cannot be completed."""


class KeyValueStorage(Protocol):
    def get(self, key: str) -> str | None:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def delete(self, key: str) -> None:
        ...


class InMemoryStorage:
    """Dict-backed storage. Nothing survives the process."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self._data)


class SqlKeyValueStorage:
    """
    Storage backed by the key_value_store table.

    A short-lived session is opened per call; SQLAlchemy errors are
    re-raised as StorageError.
    """

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def get(self, key: str) -> str | None:
        try:
            with self.session_factory() as db:
                entry = db.get(KeyValueEntry, key)
                return entry.value if entry else None
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to read key {key!r}") from e

    def set(self, key: str, value: str) -> None:
        try:
            with self.session_factory() as db:
                self._upsert(db, key, value)
                db.commit()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to write key {key!r}") from e
        logger.debug("Stored %d chars under key %r", len(value), key)

    def delete(self, key: str) -> None:
        try:
            with self.session_factory() as db:
                db.query(KeyValueEntry).filter(KeyValueEntry.key == key).delete()
                db.commit()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to delete key {key!r}") from e

    @staticmethod
    def _upsert(db: Session, key: str, value: str) -> None:
        entry = db.get(KeyValueEntry, key)
        if entry:
            entry.value = value
        else:
            db.add(KeyValueEntry(key=key, value=value))
