"""Error types raised by the board core."""


class KanbanError(Exception):
    """Base class for board errors."""


class ValidationError(KanbanError, ValueError):
    """Malformed card payload.

    Attributes:
        errors: Field name to message mapping
    """

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = dict(errors)
        summary = "; ".join(f"{name}: {message}" for name, message in self.errors.items())
        super().__init__(f"Invalid card payload ({summary})")


class NotFoundError(KanbanError, LookupError):
    """Operation referenced a card that is not on the board."""

    def __init__(self, card_id: str) -> None:
        self.card_id = card_id
        super().__init__(f"Card not found: {card_id}")


class InvariantViolation(KanbanError):
    """A snapshot broke the one-card-one-column rule."""
