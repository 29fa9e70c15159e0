"""
PersistentStore - base class for the in-memory stores backed by a key-value document

Each store:
1. Loads its document once at construction (reload)
2. Answers queries from memory
3. Re-serializes the whole state after every mutation (save)

Storage failures never propagate: a failed load leaves the default state,
a failed save leaves memory ahead of storage until the next successful save.
Both are logged and passed to the optional on_error callback.
"""
import logging
from abc import ABC, abstractmethod
from typing import Callable

from habitboard.infrastructure.storage import KeyValueStorage, StorageError

logger = logging.getLogger(__name__)

ErrorCallback = Callable[[str, Exception], None]


class PersistentStore(ABC):
    def __init__(self, storage: KeyValueStorage, key: str, on_error: ErrorCallback | None = None):
        """
        Args:
            storage: key-value backend
            key: document key under which the whole state is stored
            on_error: called as on_error("load" | "save", exc) after a failure is logged
        """
        self.storage = storage
        self.key = key
        self.on_error = on_error
        self.reload()

    @abstractmethod
    def reset_state(self) -> None:
        """Set the state used when nothing (or nothing readable) is stored."""

    @abstractmethod
    def load_state(self, text: str) -> None:
        """
        Replace the state from a stored document.

        Raises:
            ValueError: if the document cannot be parsed
        """

    @abstractmethod
    def dump_state(self) -> str:
        """Serialize the whole state."""

    def reload(self) -> None:
        try:
            text = self.storage.get(self.key)
            if text is None:
                self.reset_state()
            else:
                self.load_state(text)
        except (StorageError, ValueError) as e:
            logger.exception("Error loading %r from storage", self.key)
            self.reset_state()
            self._report("load", e)

    def save(self) -> None:
        try:
            self.storage.set(self.key, self.dump_state())
        except StorageError as e:
            logger.exception("Error saving %r to storage", self.key)
            self._report("save", e)

    def _report(self, operation: str, error: Exception) -> None:
        if self.on_error is not None:
            self.on_error(operation, error)
