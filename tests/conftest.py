"""Shared fixtures for board tests."""

import pytest

from kanban_board.store import BoardStore


@pytest.fixture
def store() -> BoardStore:
    """An initialized store without a backend."""
    board_store = BoardStore()
    board_store.initialize()
    return board_store
