from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from . import history
from .dispenser import Dispenser
from .errors import InvalidPlacement
from .oracle import Move, find_first_valid_move, has_any_valid_move
from .rules import ScoringRules
from .shapes import Shape, get_shape
from .state import GameState


logger = logging.getLogger(__name__)


@dataclass
class GameConfig:
    grid_size: int = 10
    tray_size: int = 3
    weight_ceiling: int = 8
    bag_min: int = 10
    random_seed: Optional[int] = None


@dataclass
class PlacementResult:
    slot: int
    shape_id: int
    row: int
    col: int
    cells_placed: int
    rows_cleared: List[int] = field(default_factory=list)
    cols_cleared: List[int] = field(default_factory=list)
    gained: int = 0
    tray_refilled: bool = False
    game_over: bool = False

    @property
    def lines_cleared(self) -> int:
        return len(self.rows_cleared) + len(self.cols_cleared)


class BlockBlastGame:
    """Rule engine for one game: board, tray, score and undo history.

    All mutable data lives in `self.state`; passing an existing GameState in
    (for example one loaded from disk) resumes that game.
    """

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None,
                 state: Optional[GameState] = None) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = random.Random(self.config.random_seed)
        self.dispenser = Dispenser(
            self.rng,
            weight_ceiling=self.config.weight_ceiling,
            bag_min=self.config.bag_min,
        )
        if state is None:
            self.state = GameState.empty(self.config.grid_size, self.config.tray_size)
            self.new_game()
        else:
            if state.board.size != self.config.grid_size or len(state.tray) != self.config.tray_size:
                raise ValueError("state does not match the game configuration")
            self.state = state
            if self.state.tray_exhausted:
                self.dispenser.refill_tray(self.state)

    # Commands

    def new_game(self) -> None:
        s = self.state
        s.board.reset()
        s.score = 0
        s.bag.clear()
        s.history.clear()
        self.dispenser.refill_tray(s)
        logger.info("new game started (best %d)", s.best)

    def place(self, slot: int, row: int, col: int) -> PlacementResult:
        """Place the shape from tray `slot` with its origin at (row, col).

        Records an undo snapshot, clears every row and column that is full
        after the placement (no cascades), scores, and refills the tray once
        all slots are used. Raises InvalidPlacement without touching the state
        if the slot is unavailable or the shape does not fit.
        """
        s = self.state
        if not 0 <= slot < len(s.tray):
            raise InvalidPlacement(f"tray slot {slot} does not exist", slot, row, col)
        shape_id = s.tray[slot]
        if s.used[slot] or shape_id is None:
            raise InvalidPlacement(f"tray slot {slot} was already used", slot, row, col)
        shape = get_shape(shape_id)
        if not s.board.can_place(shape, row, col):
            raise InvalidPlacement(
                f"{shape.name} does not fit at row {row}, col {col}", slot, row, col
            )

        s.history.record_before_placement(s.board.grid, s.score, slot)

        cells_placed = s.board.place_cells(shape, row, col)
        rows, cols = s.board.find_full_lines()
        if rows or cols:
            s.board.clear_lines(rows, cols)
        gained = self.rules.score_for_placement(cells_placed, len(rows) + len(cols))
        s.score += gained
        s.best = max(s.best, s.score)

        s.used[slot] = True
        refilled = False
        if s.tray_exhausted:
            self.dispenser.refill_tray(s)
            refilled = True

        result = PlacementResult(
            slot=slot,
            shape_id=shape_id,
            row=row,
            col=col,
            cells_placed=cells_placed,
            rows_cleared=rows,
            cols_cleared=cols,
            gained=gained,
            tray_refilled=refilled,
            game_over=self.is_game_over(),
        )
        logger.debug(
            "placed %s from slot %d at (%d, %d): +%d, %d line(s)",
            shape.name, slot, row, col, gained, result.lines_cleared,
        )
        if result.game_over:
            logger.info("game over with score %d (best %d)", s.score, s.best)
        return result

    def undo(self) -> bool:
        return history.undo(self.state)

    # Queries

    def can_place(self, shape: Shape, row: int, col: int) -> bool:
        return self.state.board.can_place(shape, row, col)

    def hint(self) -> Optional[Move]:
        s = self.state
        return find_first_valid_move(s.board, s.tray, s.used)

    def is_game_over(self) -> bool:
        s = self.state
        return not has_any_valid_move(s.board, s.tray, s.used)

    def tray_shapes(self) -> List[Optional[Shape]]:
        """Shapes still on offer, None for used slots."""
        s = self.state
        return [
            get_shape(shape_id) if shape_id is not None and not used else None
            for shape_id, used in zip(s.tray, s.used)
        ]

    def get_state(self) -> Dict[str, Any]:
        s = self.state
        board = s.board.clone_state()
        board.setflags(write=False)
        return {
            "board": board,
            "tray": list(s.tray),
            "used": list(s.used),
            "score": s.score,
            "best": s.best,
            "game_over": self.is_game_over(),
            "history_size": len(s.history),
        }
