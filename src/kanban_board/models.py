"""Data models for the kanban board."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable

STATUSES: tuple[str, ...] = ("backlog", "doing", "review", "done")

COLUMN_TITLES: dict[str, str] = {
    "backlog": "Backlog",
    "doing": "Doing",
    "review": "Review",
    "done": "Done",
}


@dataclass(frozen=True)
class Assignee:
    """Person a card is assigned to."""

    id: str
    name: str


@dataclass(frozen=True)
class Card:
    """A task card. Its status always names the column holding it."""

    id: str
    title: str
    description: str
    status: str
    created_at: datetime
    updated_at: datetime
    assignee: Assignee | None = None


@dataclass(frozen=True)
class Column:
    """One of the four fixed columns with its ordered cards."""

    id: str
    title: str
    status: str
    cards: tuple[Card, ...] = ()

    @classmethod
    def for_status(cls, status: str, cards: Iterable[Card] = ()) -> "Column":
        return cls(id=status, title=COLUMN_TITLES[status], status=status, cards=tuple(cards))

    def index_of(self, card_id: str) -> int:
        """Position of a card in this column, or -1."""
        for index, card in enumerate(self.cards):
            if card.id == card_id:
                return index
        return -1


@dataclass(frozen=True)
class Board:
    """Immutable snapshot of the whole board."""

    columns: tuple[Column, ...] = field(default_factory=lambda: tuple(Column.for_status(s) for s in STATUSES))
    is_loading: bool = False
    error: str | None = None

    @classmethod
    def empty(cls, is_loading: bool = False) -> "Board":
        return cls(is_loading=is_loading)

    @classmethod
    def from_cards(cls, cards: Iterable[Card]) -> "Board":
        """Group cards into the fixed columns by status, keeping their order.

        Raises:
            ValueError: If a card carries an unknown status
        """
        grouped: dict[str, list[Card]] = {status: [] for status in STATUSES}
        for card in cards:
            if card.status not in grouped:
                raise ValueError(f"Unknown status {card.status!r} on card {card.id}")
            grouped[card.status].append(card)
        return cls(columns=tuple(Column.for_status(s, grouped[s]) for s in STATUSES))

    def column(self, column_id: str) -> Column | None:
        for column in self.columns:
            if column.id == column_id:
                return column
        return None

    def cards(self) -> list[Card]:
        """All cards in board order."""
        return [card for column in self.columns for card in column.cards]

    def card_ids(self) -> list[str]:
        return [card.id for card in self.cards()]

    def locate(self, card_id: str) -> tuple[int, int] | None:
        """Return (column index, position) of a card, or None."""
        for column_index, column in enumerate(self.columns):
            position = column.index_of(card_id)
            if position != -1:
                return column_index, position
        return None

    def find_card(self, card_id: str) -> Card | None:
        location = self.locate(card_id)
        if location is None:
            return None
        column_index, position = location
        return self.columns[column_index].cards[position]
