"""Kanban board store: columns, cards and card moves"""
import logging
import uuid
from typing import Callable

from habitboard.application.persistence import ErrorCallback, PersistentStore
from habitboard.domain.kanban import KanbanCard, KanbanColumn, default_columns, reorder_after_move
from habitboard.infrastructure.records import dump_board, load_board
from habitboard.infrastructure.storage import KeyValueStorage
from habitboard.utils.clock import Clock, SystemClock

logger = logging.getLogger(__name__)

KANBAN_STORAGE_KEY = "habit-tracker-kanban"


class KanbanStore(PersistentStore):
    """Board state: columns plus cards; a board with nothing stored starts with the default columns."""

    def __init__(
        self,
        storage: KeyValueStorage,
        key: str = KANBAN_STORAGE_KEY,
        clock: Clock | None = None,
        on_error: ErrorCallback | None = None,
        id_factory: Callable[[], str] | None = None,
    ):
        self.clock = clock or SystemClock()
        self.id_factory = id_factory or (lambda: uuid.uuid4().hex)
        self.board_columns: list[KanbanColumn] = []
        self.cards: list[KanbanCard] = []
        super().__init__(storage, key, on_error)

    def reset_state(self) -> None:
        self.board_columns = default_columns()
        self.cards = []

    def load_state(self, text: str) -> None:
        self.board_columns, self.cards = load_board(text)

    def dump_state(self) -> str:
        return dump_board(self.board_columns, self.cards)

    # --- queries ---

    def columns(self) -> list[KanbanColumn]:
        return sorted(self.board_columns, key=lambda c: c.order)

    def cards_by_column(self, column_id: str) -> list[KanbanCard]:
        return sorted((c for c in self.cards if c.column_id == column_id), key=lambda c: c.order)

    def all_cards(self) -> list[KanbanCard]:
        return list(self.cards)

    def card_by_id(self, card_id: str) -> KanbanCard | None:
        return next((c for c in self.cards if c.id == card_id), None)

    # --- cards ---

    def add_card(self, title: str, description: str, column_id: str) -> KanbanCard:
        order = sum(1 for c in self.cards if c.column_id == column_id)
        card = KanbanCard(
            id=self.id_factory(),
            title=title,
            description=description,
            column_id=column_id,
            order=order,
            created_at=self.clock.now(),
        )
        self.cards.append(card)
        self.save()
        return card

    def update_card(self, card: KanbanCard) -> None:
        for index, existing in enumerate(self.cards):
            if existing.id == card.id:
                self.cards[index] = card
                self.save()
                return

    def delete_card(self, card_id: str) -> None:
        remaining = [c for c in self.cards if c.id != card_id]
        if len(remaining) != len(self.cards):
            self.cards = remaining
            self.save()

    def move_card(self, card_id: str, new_column_id: str, new_order: int) -> None:
        card = self.card_by_id(card_id)
        if not card:
            return
        reorder_after_move(self.cards, card, new_column_id, new_order)
        self.save()
        logger.debug("Card %s moved to %s at %d", card_id, new_column_id, new_order)

    # --- columns ---

    def add_column(self, title: str, color: str) -> KanbanColumn:
        column = KanbanColumn(
            id=self.id_factory(),
            title=title,
            order=len(self.board_columns),
            color=color,
        )
        self.board_columns.append(column)
        self.save()
        return column

    def update_column(self, column: KanbanColumn) -> None:
        for index, existing in enumerate(self.board_columns):
            if existing.id == column.id:
                self.board_columns[index] = column
                self.save()
                return

    def delete_column(self, column_id: str) -> None:
        """Remove the column and every card in it."""
        if not any(c.id == column_id for c in self.board_columns):
            return
        self.board_columns = [c for c in self.board_columns if c.id != column_id]
        self.cards = [c for c in self.cards if c.column_id != column_id]
        self.save()
