"""Process-memory backend seeded with demo cards."""

import uuid
from datetime import datetime, timezone

import structlog

from kanban_board.backend import Backend
from kanban_board.models import Board, Card

logger = structlog.get_logger()

SEED_CARDS: tuple[tuple[str, str, str], ...] = (
    ("Implement login page", "Create login form with validation", "backlog"),
    ("Design database schema", "Plan the initial database structure", "backlog"),
    ("Create board component", "Implement drag and drop functionality", "doing"),
    ("User profile page", "Needs design review before deployment", "review"),
    ("Setup project", "Initialize the project skeleton", "done"),
)


class MemoryBackend(Backend):
    """Keeps cards in a dict for the lifetime of the process."""

    def __init__(self, seed: bool = True) -> None:
        """Initialize memory backend.

        Args:
            seed: If True, start with the demo cards
        """
        self.cards: dict[str, Card] = {}
        if seed:
            now = datetime.now(timezone.utc)
            for title, description, status in SEED_CARDS:
                card = Card(
                    id=str(uuid.uuid4()),
                    title=title,
                    description=description,
                    status=status,
                    created_at=now,
                    updated_at=now,
                )
                self.cards[card.id] = card
        logger.debug("Memory backend initialized", seed=seed, count=len(self.cards))

    def load_board(self) -> Board:
        """Build a board from the stored cards."""
        return Board.from_cards(self.cards.values())

    def save_card(self, card: Card) -> None:
        """Store a card, replacing an earlier version."""
        logger.debug("Saving card", card_id=card.id)
        self.cards[card.id] = card

    def remove_card(self, card_id: str) -> None:
        """Remove a card if it is stored."""
        logger.debug("Removing card", card_id=card_id)
        self.cards.pop(card_id, None)
