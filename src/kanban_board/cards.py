"""Card entity model: payload validation and card construction."""

import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any, Mapping

import structlog

from kanban_board.errors import ValidationError
from kanban_board.models import STATUSES, Assignee, Card

logger = structlog.get_logger()

MAX_TITLE_LENGTH = 255


@dataclass(frozen=True)
class CardPayload:
    """Validated fields of a create or update request."""

    title: str
    description: str
    status: str
    assignee: Assignee | None = None


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _parse_assignee(value: Any) -> Assignee:
    if isinstance(value, Assignee):
        return value
    if isinstance(value, Mapping) and value.get("id") and value.get("name"):
        return Assignee(id=str(value["id"]), name=str(value["name"]))
    raise ValueError("assignee needs an id and a name")


def validate_payload(data: Mapping[str, Any]) -> CardPayload:
    """Validate a candidate payload.

    Args:
        data: Mapping with title, description, status and an optional assignee

    Returns:
        The validated payload

    Raises:
        ValidationError: With one message per failing field
    """
    errors: dict[str, str] = {}

    title = data.get("title")
    if not isinstance(title, str) or not title.strip():
        errors["title"] = "Title is required"
    elif len(title) > MAX_TITLE_LENGTH:
        errors["title"] = f"Title must be at most {MAX_TITLE_LENGTH} characters"

    description = data.get("description")
    if not isinstance(description, str) or not description.strip():
        errors["description"] = "Description is required"

    status = data.get("status")
    if status is None or status == "":
        errors["status"] = "Status is required"
    elif status not in STATUSES:
        errors["status"] = f"Status must be one of: {', '.join(STATUSES)}"

    assignee = None
    if data.get("assignee") is not None:
        try:
            assignee = _parse_assignee(data["assignee"])
        except ValueError as e:
            errors["assignee"] = str(e)

    if errors:
        logger.debug("Card payload rejected", fields=sorted(errors))
        raise ValidationError(errors)

    return CardPayload(title=title, description=description, status=status, assignee=assignee)


def new_card(payload: CardPayload, now: datetime | None = None) -> Card:
    """Build a card with a fresh id and matching created/updated timestamps."""
    now = now or utcnow()
    return Card(
        id=str(uuid.uuid4()),
        title=payload.title,
        description=payload.description,
        status=payload.status,
        created_at=now,
        updated_at=now,
        assignee=payload.assignee,
    )


def merge_card(card: Card, payload: CardPayload, now: datetime | None = None) -> Card:
    """Apply payload fields to a card, keeping its id and creation time."""
    return replace(
        card,
        title=payload.title,
        description=payload.description,
        status=payload.status,
        assignee=payload.assignee if payload.assignee is not None else card.assignee,
        updated_at=now or utcnow(),
    )
