"""Reorder engine: pure functions computing new board snapshots from drag drops."""

from collections.abc import Iterable
from dataclasses import replace
from datetime import datetime

import structlog

from kanban_board.cards import utcnow
from kanban_board.errors import InvariantViolation, NotFoundError
from kanban_board.models import STATUSES, Board, Column

logger = structlog.get_logger()


def move_card(board: Board, card_id: str, target_id: str | None) -> Board:
    """Move a card next to a drop target.

    The target is either another card (the moved card is inserted at the
    target's position, ahead of it) or a column id (the card is appended to
    that column). The moved card is not modified; callers fix its status
    afterwards with :func:`sync_status`.

    Args:
        board: Current snapshot
        card_id: Dragged card
        target_id: Card or column the card was dropped on

    Returns:
        A new snapshot, or ``board`` itself when the drop changes nothing

    Raises:
        NotFoundError: If ``card_id`` is not on the board
    """
    location = board.locate(card_id)
    if location is None:
        raise NotFoundError(card_id)
    if not target_id or card_id == target_id:
        return board
    source_index, source_position = location

    source = board.columns[source_index]
    card = source.cards[source_position]
    remaining = source.cards[:source_position] + source.cards[source_position + 1 :]
    columns = list(board.columns)
    columns[source_index] = replace(source, cards=remaining)

    destination_index = None
    insert_at = -1
    for index, column in enumerate(columns):
        position = column.index_of(target_id)
        if position != -1:
            destination_index, insert_at = index, position
            break
    if destination_index is None:
        for index, column in enumerate(columns):
            if column.id == target_id:
                destination_index = index
                break
    if destination_index is None:
        logger.debug("Drop target not on board", card_id=card_id, target_id=target_id)
        return board

    destination = columns[destination_index]
    if insert_at == -1:
        insert_at = len(destination.cards)

    if destination_index == source_index and insert_at == source_position:
        return board

    columns[destination_index] = replace(
        destination,
        cards=destination.cards[:insert_at] + (card,) + destination.cards[insert_at:],
    )
    logger.debug(
        "Card reordered",
        card_id=card_id,
        source=source.id,
        destination=destination.id,
        position=insert_at,
    )
    return replace(board, columns=tuple(columns))


def sync_status(board: Board, card_id: str, now: datetime | None = None) -> Board:
    """Set a card's status to the id of the column holding it."""
    location = board.locate(card_id)
    if location is None:
        raise NotFoundError(card_id)
    column_index, position = location
    column = board.columns[column_index]
    card = column.cards[position]
    if card.status == column.status:
        return board

    moved = replace(card, status=column.status, updated_at=now or utcnow())
    cards = column.cards[:position] + (moved,) + column.cards[position + 1 :]
    columns = list(board.columns)
    columns[column_index] = replace(column, cards=cards)
    return replace(board, columns=tuple(columns))


def check_invariants(board: Board, expected_ids: Iterable[str] | None = None) -> None:
    """Verify the column layout and that every card sits in exactly one matching column.

    Args:
        board: Snapshot to check
        expected_ids: Card ids that must be on the board, no more and no fewer

    Raises:
        InvariantViolation: On the first broken rule
    """
    column_ids = tuple(column.id for column in board.columns)
    if column_ids != STATUSES:
        raise InvariantViolation(f"Unexpected columns {column_ids}")

    seen: set[str] = set()
    for column in board.columns:
        if column.status != column.id:
            raise InvariantViolation(f"Column {column.id} has status {column.status}")
        for card in column.cards:
            if card.id in seen:
                raise InvariantViolation(f"Card {card.id} appears more than once")
            seen.add(card.id)
            if card.status != column.id:
                raise InvariantViolation(f"Card {card.id} has status {card.status} but sits in {column.id}")

    if expected_ids is not None:
        expected = set(expected_ids)
        if seen != expected:
            lost = sorted(expected - seen)
            stray = sorted(seen - expected)
            raise InvariantViolation(f"Card set mismatch (lost={lost}, stray={stray})")
