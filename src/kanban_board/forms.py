"""Form controller for the create/edit card dialog."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import structlog

from kanban_board.cards import validate_payload
from kanban_board.errors import NotFoundError, ValidationError
from kanban_board.models import Card
from kanban_board.store import BoardStore

logger = structlog.get_logger()

DEFAULT_STATUS = "backlog"


@dataclass
class FormResult:
    """Outcome of a dialog action."""

    card: Card | None = None
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors


def normalize(data: Mapping[str, Any]) -> dict[str, Any]:
    """Trim text fields and lower-case the status."""
    normalized = dict(data)
    for name in ("title", "description"):
        value = normalized.get(name)
        if isinstance(value, str):
            normalized[name] = value.strip()
    status = normalized.get("status")
    if isinstance(status, str):
        normalized["status"] = status.strip().lower()
    return normalized


class FormController:
    """Tracks the open dialog and its selected card, and submits its input to the store."""

    def __init__(self, store: BoardStore) -> None:
        self.store = store
        self.is_open = False
        self.selected_card: Card | None = None

    def open_new(self) -> None:
        self.selected_card = None
        self.is_open = True

    def open_edit(self, card_id: str) -> Card:
        """Open the dialog on an existing card.

        Raises:
            NotFoundError: If no card has this id
        """
        card = self.store.find_card(card_id)
        if card is None:
            raise NotFoundError(card_id)
        self.selected_card = card
        self.is_open = True
        return card

    def close(self) -> None:
        self.is_open = False
        self.selected_card = None

    def defaults(self) -> dict[str, str]:
        """Initial field values for the dialog."""
        card = self.selected_card
        if card is None:
            return {"title": "", "description": "", "status": DEFAULT_STATUS}
        return {"title": card.title, "description": card.description, "status": card.status}

    def submit(self, data: Mapping[str, Any]) -> FormResult:
        """Create or update a card from dialog input.

        Validation happens before the store is touched; on failure the
        dialog stays open and the result carries one message per field.
        """
        normalized = normalize(data)
        try:
            payload = validate_payload(normalized)
        except ValidationError as e:
            logger.info("Card form rejected", errors=e.errors)
            return FormResult(errors=e.errors)

        try:
            if self.selected_card is None:
                card = self.store.create_card(payload)
            else:
                card = self.store.update_card(self.selected_card.id, payload)
        except NotFoundError as e:
            logger.warning("Card form target vanished", card_id=e.card_id)
            return FormResult(errors={"card": str(e)})

        self.close()
        return FormResult(card=card)

    def delete(self) -> FormResult:
        """Delete the card the dialog is open on."""
        if self.selected_card is None:
            return FormResult(errors={"card": "No card selected"})
        try:
            card = self.store.delete_card(self.selected_card.id)
        except NotFoundError as e:
            logger.warning("Card to delete vanished", card_id=e.card_id)
            self.close()
            return FormResult(errors={"card": str(e)})
        self.close()
        return FormResult(card=card)
