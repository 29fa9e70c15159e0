from dataclasses import dataclass


@dataclass
class Todo:
    id: int
    text: str
    completed: bool = False
