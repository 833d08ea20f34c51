from __future__ import annotations

import numpy as np
import pytest

from block_blast.game import GameState, History
from block_blast.game.history import undo


def test_snapshot_is_a_frozen_copy() -> None:
    history = History()
    board = np.zeros((10, 10), dtype=np.int8)
    entry = history.record_before_placement(board, 12, 1)
    board[0, 0] = 1
    assert entry.board[0, 0] == 0
    with pytest.raises(ValueError):
        entry.board[0, 0] = 1
    assert (entry.score, entry.slot) == (12, 1)


def test_entries_pop_last_in_first_out() -> None:
    history = History()
    board = np.zeros((10, 10), dtype=np.int8)
    history.record_before_placement(board, 0, 0)
    history.record_before_placement(board, 3, 2)
    assert len(history) == 2
    assert history.peek().slot == 2
    assert history.pop().slot == 2
    assert history.pop().slot == 0
    assert history.pop() is None


def test_undo_restores_board_score_and_slot_only() -> None:
    state = GameState.empty()
    state.tray = [4, 5, 6]
    state.used = [False, False, False]
    state.history.record_before_placement(state.board.grid, 0, 1)
    state.board.grid[2, 2] = 1
    state.score = 7
    state.best = 7
    state.used[1] = True

    assert undo(state) is True
    assert state.board.filled_count() == 0
    assert state.score == 0
    assert state.best == 7
    assert state.used == [False, False, False]
    assert state.tray == [4, 5, 6]
    assert undo(state) is False
