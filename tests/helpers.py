"""Builders shared by the board tests."""

from datetime import datetime, timezone

from kanban_board.models import Card

EPOCH = datetime(2024, 1, 1, tzinfo=timezone.utc)


def make_card(card_id: str, status: str = "backlog", title: str | None = None) -> Card:
    """Build a card with a readable id and fixed timestamps."""
    return Card(
        id=card_id,
        title=title or f"Card {card_id}",
        description=f"Description of {card_id}",
        status=status,
        created_at=EPOCH,
        updated_at=EPOCH,
    )


def payload(title: str = "Task", description: str = "Something to do", status: str = "backlog") -> dict[str, str]:
    """Build form-style input for create/update calls."""
    return {"title": title, "description": description, "status": status}
