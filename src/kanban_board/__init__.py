"""Kanban board with ordered columns and drag reordering."""

from kanban_board.errors import InvariantViolation, KanbanError, NotFoundError, ValidationError
from kanban_board.models import Assignee, Board, Card, Column
from kanban_board.store import BoardStore

__all__ = [
    "Assignee",
    "Board",
    "BoardStore",
    "Card",
    "Column",
    "InvariantViolation",
    "KanbanError",
    "NotFoundError",
    "ValidationError",
]
