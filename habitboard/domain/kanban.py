"""Kanban board entities"""
from dataclasses import dataclass
from datetime import datetime


@dataclass
class KanbanColumn:
    id: str
    title: str
    order: int
    color: str


@dataclass
class KanbanCard:
    id: str
    title: str
    description: str
    column_id: str
    order: int
    created_at: datetime


def default_columns() -> list[KanbanColumn]:
    return [
        KanbanColumn(id="todo", title="To Do", order=0, color="#e74c3c"),
        KanbanColumn(id="in-progress", title="In Progress", order=1, color="#f39c12"),
        KanbanColumn(id="done", title="Done", order=2, color="#27ae60"),
    ]


def reorder_after_move(cards: list[KanbanCard], card: KanbanCard,
                       new_column_id: str, new_order: int) -> None:
    """
    Move card to new_column_id at position new_order, in place.

    Cards of the target column shift up by one from new_order onwards;
    the source column (if different) is compacted to 0..n-1.
    """
    old_column_id = card.column_id
    card.column_id = new_column_id
    card.order = new_order

    others = sorted(
        (c for c in cards if c.column_id == new_column_id and c.id != card.id),
        key=lambda c: c.order,
    )
    for index, c in enumerate(others):
        c.order = index + 1 if index >= new_order else index

    if old_column_id != new_column_id:
        remaining = sorted((c for c in cards if c.column_id == old_column_id), key=lambda c: c.order)
        for index, c in enumerate(remaining):
            c.order = index
