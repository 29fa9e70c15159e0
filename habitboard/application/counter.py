"""Counter store"""
from habitboard.application.persistence import ErrorCallback, PersistentStore
from habitboard.infrastructure.records import dump_counter, load_counter
from habitboard.infrastructure.storage import KeyValueStorage

COUNTER_STORAGE_KEY = "habit-tracker-counter"


class CounterStore(PersistentStore):
    def __init__(self, storage: KeyValueStorage, key: str = COUNTER_STORAGE_KEY,
                 on_error: ErrorCallback | None = None):
        self.count = 0
        super().__init__(storage, key, on_error)

    def reset_state(self) -> None:
        self.count = 0

    def load_state(self, text: str) -> None:
        self.count = load_counter(text)

    def dump_state(self) -> str:
        return dump_counter(self.count)

    def double_count(self) -> int:
        return self.count * 2

    def increment(self) -> None:
        self.count += 1
        self.save()

    def decrement(self) -> None:
        self.count -= 1
        self.save()

    def reset(self) -> None:
        self.count = 0
        self.save()

    def set_count(self, value: int) -> None:
        self.count = value
        self.save()
