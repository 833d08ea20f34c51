"""Save and load a game as a single JSON record.

Record layout::

    {
      "board":   [[0, 1, ...], ...],        # N x N of 0/1
      "bag":     [3, 17, ...],              # pending shape ids, drawn from the end
      "tray":    [4, 0, 0],                 # shape id per slot
      "used":    [false, true, false],
      "score":   42,
      "best":    310,
      "history": [{"board": [[...]], "score": 30, "slot": 1}, ...]
    }

Loading never fails because of bad content: every field that is missing or
does not validate falls back to a default and the rest of the record is kept.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np

from .grid import GameGrid
from .history import History, HistoryEntry
from .shapes import is_valid_shape_id
from .state import GameState


logger = logging.getLogger(__name__)


def state_to_record(state: GameState) -> Dict[str, Any]:
    return {
        "board": state.board.grid.astype(int).tolist(),
        "bag": list(state.bag),
        "tray": list(state.tray),
        "used": [bool(u) for u in state.used],
        "score": int(state.score),
        "best": int(state.best),
        "history": [
            {"board": entry.board.astype(int).tolist(), "score": entry.score, "slot": entry.slot}
            for entry in state.history
        ],
    }


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not value.is_integer():
        return None
    return int(value)


def _is_cell(value: Any) -> bool:
    return type(value) is int and value in (0, 1)


def _parse_board(value: Any, grid_size: int) -> Optional[np.ndarray]:
    """The board as an int8 array, or None if any row or cell is not an integer 0 or 1."""
    if not isinstance(value, list) or len(value) != grid_size:
        return None
    for row in value:
        if not isinstance(row, list) or len(row) != grid_size:
            return None
        if not all(_is_cell(cell) for cell in row):
            return None
    return np.array(value, dtype=np.int8)


def _parse_history(value: Any, grid_size: int, tray_size: int) -> Optional[History]:
    if not isinstance(value, list):
        return None
    entries: List[HistoryEntry] = []
    for raw in value:
        if not isinstance(raw, dict):
            return None
        board = _parse_board(raw.get("board"), grid_size)
        score = _as_int(raw.get("score"))
        slot = _as_int(raw.get("slot"))
        if board is None or score is None or score < 0 or slot is None or not 0 <= slot < tray_size:
            return None
        board.setflags(write=False)
        entries.append(HistoryEntry(board=board, score=score, slot=slot))
    return History(entries)


def state_from_record(record: Any, grid_size: int = 10, tray_size: int = 3) -> GameState:
    """Build a GameState from a decoded record, defaulting every corrupt field.

    A tray or used list that fails validation leaves the tray exhausted so the
    game refills it on resume.
    """
    state = GameState.empty(grid_size, tray_size)
    if not isinstance(record, dict):
        logger.warning("saved game is not an object; starting fresh")
        return state

    board = _parse_board(record.get("board"), grid_size)
    if board is None:
        logger.warning("saved board is missing or corrupt; using an empty board")
    else:
        state.board = GameGrid.from_array(board)

    bag = record.get("bag")
    if isinstance(bag, list) and all(is_valid_shape_id(s) for s in bag):
        state.bag = list(bag)
    else:
        logger.warning("saved bag is missing or corrupt; starting with an empty bag")

    tray = record.get("tray")
    used = record.get("used")
    tray_ok = (
        isinstance(tray, list) and len(tray) == tray_size
        and all(is_valid_shape_id(s) for s in tray)
    )
    used_ok = (
        isinstance(used, list) and len(used) == tray_size
        and all(isinstance(u, bool) for u in used)
    )
    if tray_ok and used_ok:
        state.tray = list(tray)
        state.used = list(used)
    else:
        logger.warning("saved tray is missing or corrupt; a new tray will be dealt")

    score = _as_int(record.get("score"))
    if score is None or score < 0:
        score = 0
    best = _as_int(record.get("best"))
    if best is None or best < 0:
        best = 0
    state.score = score
    state.best = max(best, score, 0)

    history = _parse_history(record.get("history", []), grid_size, tray_size)
    if history is None:
        logger.warning("saved history is corrupt; undo history dropped")
    else:
        state.history = history
    return state


class GameStore:
    """Whole-record JSON file store for a single saved game."""

    def __init__(self, path: str | os.PathLike[str], grid_size: int = 10, tray_size: int = 3) -> None:
        self.path = Path(path)
        self.grid_size = grid_size
        self.tray_size = tray_size

    def load(self) -> Optional[GameState]:
        """Saved game, or None when nothing readable is on disk."""
        try:
            with self.path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except FileNotFoundError:
            return None
        except (OSError, json.JSONDecodeError, UnicodeDecodeError) as exc:
            logger.warning("could not read saved game %s: %s", self.path, exc)
            return None
        return state_from_record(payload, self.grid_size, self.tray_size)

    def save(self, state: GameState) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=self.path.name, suffix=".tmp", dir=self.path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(state_to_record(state), handle)
            os.replace(tmp_name, self.path)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise

    def clear(self) -> None:
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass
