"""Board state store: owns the canonical board snapshot and its mutations."""

from collections.abc import Callable, Iterable, Mapping
from dataclasses import asdict, replace
from typing import Any

import structlog

from kanban_board import reorder
from kanban_board.backend import Backend
from kanban_board.cards import CardPayload, merge_card, new_card, utcnow, validate_payload
from kanban_board.errors import InvariantViolation, NotFoundError
from kanban_board.models import Board, Card

logger = structlog.get_logger()

Listener = Callable[[Board], None]


class BoardStore:
    """Single owner of the board.

    Each mutation computes a candidate snapshot, checks it, and only then
    swaps it in, so a failing operation leaves the previous snapshot as is.
    """

    def __init__(self, backend: Backend | None = None) -> None:
        """Initialize the store.

        Args:
            backend: Optional collaborator notified after each committed change
        """
        self.backend = backend
        self._board = Board.empty(is_loading=True)
        self._ids: set[str] = set()
        self._listeners: list[Listener] = []

    @property
    def board(self) -> Board:
        """Current snapshot."""
        return self._board

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with every new snapshot. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def initialize(self) -> Board:
        """Populate the four columns from the backend and finish loading."""
        loaded = Board.empty()
        error = None
        if self.backend is not None:
            try:
                candidate = self.backend.load_board()
                reorder.check_invariants(candidate)
                loaded = candidate
            except Exception as e:
                logger.warning("Failed to load board", error=str(e))
                error = f"Failed to load board: {e}"

        board = replace(loaded, is_loading=False, error=error)
        self._commit(board, board.card_ids())
        logger.info("Board initialized", cards=len(self._ids), error=error)
        self._notify()
        return self._board

    def find_card(self, card_id: str) -> Card | None:
        """Return the card with this id, or None."""
        card = self._board.find_card(card_id)
        logger.debug("Looking up card", card_id=card_id, found=card is not None)
        return card

    def create_card(self, payload: Mapping[str, Any] | CardPayload) -> Card:
        """Validate a payload and append the new card to its status column."""
        validated = validate_payload(self._as_mapping(payload))
        card = new_card(validated)

        board = self._board
        columns = tuple(
            replace(column, cards=column.cards + (card,)) if column.id == card.status else column
            for column in board.columns
        )
        self._commit(replace(board, columns=columns), self._ids | {card.id})
        logger.info("Card created", card_id=card.id, status=card.status)

        self._persist("save card", self._save, card)
        self._notify()
        return card

    def update_card(self, card_id: str, payload: Mapping[str, Any] | CardPayload) -> Card:
        """Merge a payload into a card.

        A card whose status changes moves to the end of its new column;
        otherwise it keeps its position.

        Raises:
            NotFoundError: If no card has this id
            ValidationError: If the payload is malformed
        """
        board = self._board
        location = board.locate(card_id)
        if location is None:
            logger.warning("Cannot update missing card", card_id=card_id)
            raise NotFoundError(card_id)

        validated = validate_payload(self._as_mapping(payload))
        column_index, position = location
        source = board.columns[column_index]
        current = source.cards[position]
        updated = merge_card(current, validated)

        columns = list(board.columns)
        if updated.status == current.status:
            columns[column_index] = replace(
                source, cards=source.cards[:position] + (updated,) + source.cards[position + 1 :]
            )
        else:
            columns[column_index] = replace(source, cards=source.cards[:position] + source.cards[position + 1 :])
            columns = [
                replace(column, cards=column.cards + (updated,)) if column.id == updated.status else column
                for column in columns
            ]

        self._commit(replace(board, columns=tuple(columns)), self._ids)
        logger.info("Card updated", card_id=card_id, status=updated.status, moved=updated.status != current.status)

        self._persist("save card", self._save, updated)
        self._notify()
        return updated

    def delete_card(self, card_id: str) -> Card:
        """Remove a card from whichever column holds it.

        Raises:
            NotFoundError: If no card has this id
        """
        board = self._board
        location = board.locate(card_id)
        if location is None:
            logger.warning("Cannot delete missing card", card_id=card_id)
            raise NotFoundError(card_id)

        column_index, position = location
        column = board.columns[column_index]
        card = column.cards[position]
        columns = list(board.columns)
        columns[column_index] = replace(column, cards=column.cards[:position] + column.cards[position + 1 :])

        self._commit(replace(board, columns=tuple(columns)), self._ids - {card_id})
        logger.info("Card deleted", card_id=card_id, status=card.status)

        self._persist("remove card", self._remove, card_id)
        self._notify()
        return card

    def move_card(self, card_id: str, target_id: str | None) -> Board:
        """Drop a card on another card or on a column.

        The moved card takes the status of the column it lands in.

        Raises:
            NotFoundError: If the dragged card is not on the board
        """
        board = self._board
        try:
            moved = reorder.move_card(board, card_id, target_id)
        except NotFoundError:
            logger.warning("Cannot move missing card", card_id=card_id, target_id=target_id)
            raise
        if moved is board:
            logger.debug("Drop changed nothing", card_id=card_id, target_id=target_id)
            return board

        before = board.find_card(card_id)
        moved = reorder.sync_status(moved, card_id, utcnow())
        self._commit(moved, self._ids)

        after = self._board.find_card(card_id)
        logger.info("Card moved", card_id=card_id, target_id=target_id, status=after.status)
        if after.status != before.status:
            self._persist("save card", self._save, after)
        self._notify()
        return self._board

    def _as_mapping(self, payload: Mapping[str, Any] | CardPayload) -> Mapping[str, Any]:
        if isinstance(payload, CardPayload):
            return asdict(payload)
        return payload

    def _commit(self, candidate: Board, expected_ids: Iterable[str]) -> None:
        expected = set(expected_ids)
        try:
            reorder.check_invariants(candidate, expected)
        except InvariantViolation as e:
            logger.error("Rejected board change", error=str(e))
            raise
        self._ids = expected
        self._board = candidate

    def _notify(self) -> None:
        """Hand the current snapshot to every listener; a failing listener is logged and skipped."""
        for listener in list(self._listeners):
            try:
                listener(self._board)
            except Exception as e:
                logger.warning("Listener failed", error=str(e))

    def _save(self, card: Card) -> None:
        if self.backend is not None:
            self.backend.save_card(card)

    def _remove(self, card_id: str) -> None:
        if self.backend is not None:
            self.backend.remove_card(card_id)

    def _persist(self, action: str, call: Callable[..., None], *args: Any) -> None:
        """Run a backend call; failures land on the board's error field."""
        try:
            call(*args)
        except Exception as e:
            logger.warning("Backend call failed", action=action, error=str(e))
            self._board = replace(self._board, error=f"Failed to {action}: {e}")
            return
        if self._board.error is not None:
            self._board = replace(self._board, error=None)
