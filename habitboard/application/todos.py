"""Todo list store"""
from habitboard.application.persistence import ErrorCallback, PersistentStore
from habitboard.domain.todo import Todo
from habitboard.infrastructure.records import dump_todos, load_todos
from habitboard.infrastructure.storage import KeyValueStorage

TODOS_STORAGE_KEY = "habit-tracker-todos"


class TodoStore(PersistentStore):
    def __init__(self, storage: KeyValueStorage, key: str = TODOS_STORAGE_KEY,
                 on_error: ErrorCallback | None = None):
        self.todos: list[Todo] = []
        self.next_id = 1
        super().__init__(storage, key, on_error)

    def reset_state(self) -> None:
        self.todos = []
        self.next_id = 1

    def load_state(self, text: str) -> None:
        self.todos, self.next_id = load_todos(text)

    def dump_state(self) -> str:
        return dump_todos(self.todos, self.next_id)

    # --- queries ---

    def all_todos(self) -> list[Todo]:
        return list(self.todos)

    def completed_todos(self) -> list[Todo]:
        return [t for t in self.todos if t.completed]

    def active_todos(self) -> list[Todo]:
        return [t for t in self.todos if not t.completed]

    def todos_count(self) -> int:
        return len(self.todos)

    def completed_count(self) -> int:
        return len(self.completed_todos())

    # --- mutators ---

    def add_todo(self, text: str) -> Todo | None:
        """Add a todo with stripped text; blank text is ignored and returns None."""
        text = text.strip()
        if not text:
            return None
        todo = Todo(id=self.next_id, text=text, completed=False)
        self.next_id += 1
        self.todos.append(todo)
        self.save()
        return todo

    def toggle_todo(self, todo_id: int) -> None:
        for todo in self.todos:
            if todo.id == todo_id:
                todo.completed = not todo.completed
                self.save()
                return

    def remove_todo(self, todo_id: int) -> None:
        remaining = [t for t in self.todos if t.id != todo_id]
        if len(remaining) != len(self.todos):
            self.todos = remaining
            self.save()

    def clear_completed(self) -> None:
        active = self.active_todos()
        if len(active) == len(self.todos):
            return
        self.todos = active
        self.save()
