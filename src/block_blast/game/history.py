from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, List, Optional

import numpy as np

if TYPE_CHECKING:
    from .state import GameState


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HistoryEntry:
    """Board and score as they were right before a placement into `slot`."""

    board: np.ndarray
    score: int
    slot: int


class History:
    """LIFO stack of pre-placement snapshots used for undo."""

    def __init__(self, entries: Optional[List[HistoryEntry]] = None) -> None:
        self._entries: List[HistoryEntry] = list(entries or [])

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[HistoryEntry]:
        return iter(self._entries)

    def record_before_placement(self, board: np.ndarray, score: int, slot: int) -> HistoryEntry:
        snapshot = np.array(board, dtype=np.int8, copy=True)
        snapshot.setflags(write=False)
        entry = HistoryEntry(board=snapshot, score=int(score), slot=int(slot))
        self._entries.append(entry)
        return entry

    def pop(self) -> Optional[HistoryEntry]:
        if not self._entries:
            return None
        return self._entries.pop()

    def peek(self) -> Optional[HistoryEntry]:
        return self._entries[-1] if self._entries else None

    def clear(self) -> None:
        self._entries.clear()


def undo(state: "GameState") -> bool:
    """Roll `state` back one placement.

    Restores the board and score from the most recent snapshot and makes the
    recorded tray slot available again; the shape in that slot is left as is.
    Returns False when there is nothing to undo.
    """
    entry = state.history.pop()
    if entry is None:
        return False
    state.board.restore(entry.board)
    state.score = entry.score
    state.used[entry.slot] = False
    logger.debug("undo: slot %d available again, score back to %d", entry.slot, entry.score)
    return True
