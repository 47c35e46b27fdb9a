"""Persistence collaborator interface for the board store."""

from abc import ABC, abstractmethod

from kanban_board.models import Board, Card


class Backend(ABC):
    """Abstract base class for board backends.

    Failures raised from these methods never abort a board operation; the
    store records them on the board's ``error`` field instead.
    """

    @abstractmethod
    def load_board(self) -> Board:
        """Load the cards to show when the board starts."""
        pass

    @abstractmethod
    def save_card(self, card: Card) -> None:
        """Store a created or changed card."""
        pass

    @abstractmethod
    def remove_card(self, card_id: str) -> None:
        """Forget a deleted card."""
        pass
