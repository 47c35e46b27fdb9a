"""Backend implementations."""

from kanban_board.backends.memory import MemoryBackend

__all__ = ["MemoryBackend"]
