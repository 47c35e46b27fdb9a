"""Tests for card payload validation and construction."""

from datetime import datetime, timezone

import pytest

from kanban_board.cards import CardPayload, merge_card, new_card, validate_payload
from kanban_board.errors import ValidationError
from kanban_board.models import Assignee


def test_validate_payload_accepts_complete_input() -> None:
    """Test a well-formed payload passes."""
    payload = validate_payload({"title": "Write docs", "description": "Usage guide", "status": "review"})
    assert payload == CardPayload(title="Write docs", description="Usage guide", status="review")


@pytest.mark.parametrize(
    ("data", "field", "message"),
    [
        ({"title": "", "description": "x", "status": "doing"}, "title", "Title is required"),
        ({"title": "   ", "description": "x", "status": "doing"}, "title", "Title is required"),
        ({"title": "t", "description": "", "status": "doing"}, "description", "Description is required"),
        ({"title": "t", "description": "x"}, "status", "Status is required"),
        (
            {"title": "t", "description": "x", "status": "archived"},
            "status",
            "Status must be one of: backlog, doing, review, done",
        ),
        ({"title": "t" * 256, "description": "x", "status": "done"}, "title", "Title must be at most 255 characters"),
    ],
)
def test_validate_payload_reports_field(data: dict, field: str, message: str) -> None:
    """Test each malformed field gets its own message."""
    with pytest.raises(ValidationError) as exc_info:
        validate_payload(data)
    assert exc_info.value.errors[field] == message


def test_validate_payload_collects_all_errors() -> None:
    """Test all failing fields are reported together."""
    with pytest.raises(ValidationError) as exc_info:
        validate_payload({})
    assert set(exc_info.value.errors) == {"title", "description", "status"}


def test_validate_payload_assignee() -> None:
    """Test assignee mappings are parsed and bad ones rejected."""
    payload = validate_payload(
        {"title": "t", "description": "x", "status": "doing", "assignee": {"id": "u1", "name": "Ana"}}
    )
    assert payload.assignee == Assignee(id="u1", name="Ana")

    with pytest.raises(ValidationError) as exc_info:
        validate_payload({"title": "t", "description": "x", "status": "doing", "assignee": {"id": "u1"}})
    assert "assignee" in exc_info.value.errors


def test_new_card_sets_id_and_timestamps() -> None:
    """Test fresh cards get unique ids and equal timestamps."""
    now = datetime(2024, 5, 1, tzinfo=timezone.utc)
    payload = CardPayload(title="t", description="x", status="doing")
    first = new_card(payload, now)
    second = new_card(payload, now)
    assert first.id != second.id
    assert first.created_at == first.updated_at == now
    assert first.status == "doing"
    assert first.assignee is None


def test_merge_card_preserves_identity() -> None:
    """Test merging keeps id, created_at and an unspecified assignee."""
    created = datetime(2024, 5, 1, tzinfo=timezone.utc)
    later = datetime(2024, 5, 2, tzinfo=timezone.utc)
    card = new_card(CardPayload("t", "x", "backlog", Assignee("u1", "Ana")), created)

    merged = merge_card(card, CardPayload("New", "y", "done"), later)
    assert merged.id == card.id
    assert merged.created_at == created
    assert merged.updated_at == later
    assert (merged.title, merged.description, merged.status) == ("New", "y", "done")
    assert merged.assignee == Assignee("u1", "Ana")
    assert card.title == "t"
