"""Text rendering of the board and forwarding of user gestures."""

import structlog

from kanban_board.errors import NotFoundError
from kanban_board.forms import FormController
from kanban_board.models import Board, Card
from kanban_board.store import BoardStore

logger = structlog.get_logger()

SHORT_ID_LENGTH = 8
DEFAULT_DESCRIPTION_WIDTH = 100


def truncate(text: str, max_length: int) -> str:
    return f"{text[:max_length]}..." if len(text) > max_length else text


def short_id(card: Card) -> str:
    return card.id[:SHORT_ID_LENGTH]


def render_card(card: Card, description_width: int = DEFAULT_DESCRIPTION_WIDTH) -> list[str]:
    lines = [f"  [{short_id(card)}] {card.title}"]
    if card.description:
        lines.append(f"      {truncate(card.description, description_width)}")
    if card.assignee:
        lines.append(f"      Assignee: {card.assignee.name}")
    return lines


def render_board(board: Board, description_width: int = DEFAULT_DESCRIPTION_WIDTH) -> str:
    """Render a snapshot as plain text. Same snapshot, same output."""
    if board.is_loading:
        return "Loading..."

    lines = ["Kanban Board"]
    if board.error:
        lines.append(f"Error: {board.error}")
    for column in board.columns:
        lines.append("")
        lines.append(f"{column.title} ({len(column.cards)})")
        lines.append("-" * (len(column.title) + len(str(len(column.cards))) + 3))
        if not column.cards:
            lines.append("  (empty)")
        for card in column.cards:
            lines.extend(render_card(card, description_width))
    return "\n".join(lines)


class BoardView:
    """Reads snapshots from the store and forwards clicks and drops back into it."""

    def __init__(
        self,
        store: BoardStore,
        form: FormController | None = None,
        description_width: int = DEFAULT_DESCRIPTION_WIDTH,
    ) -> None:
        self.store = store
        self.form = form or FormController(store)
        self.description_width = description_width

    def render(self) -> str:
        return render_board(self.store.board, self.description_width)

    def resolve(self, ref: str) -> str | None:
        """Map a card id or unique id prefix to the full card id."""
        ref = ref.strip()
        if not ref:
            return None
        matches = [card.id for card in self.store.board.cards() if card.id.startswith(ref)]
        if ref in matches:
            return ref
        if len(matches) == 1:
            return matches[0]
        logger.debug("Card reference not resolved", ref=ref, matches=len(matches))
        return None

    def click(self, card_id: str) -> Card | None:
        """Open the edit dialog on a card."""
        try:
            return self.form.open_edit(card_id)
        except NotFoundError:
            logger.warning("Clicked card not found", card_id=card_id)
            return None

    def drag_end(self, card_id: str, target_id: str | None) -> Board:
        """Commit a finished drag; a missing card leaves the board as it was."""
        try:
            return self.store.move_card(card_id, target_id)
        except NotFoundError:
            return self.store.board
