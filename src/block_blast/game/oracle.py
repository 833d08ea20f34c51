from __future__ import annotations

from typing import Iterator, NamedTuple, Optional, Sequence

from .grid import GameGrid
from .shapes import ShapeId, get_shape


class Move(NamedTuple):
    slot: int
    shape_id: ShapeId
    row: int
    col: int


def iter_valid_moves(board: GameGrid, tray: Sequence[Optional[ShapeId]],
                     used: Sequence[bool]) -> Iterator[Move]:
    """Yield every valid placement, slot-major, then row-major, then column-major."""
    for slot, shape_id in enumerate(tray):
        if used[slot] or shape_id is None:
            continue
        shape = get_shape(shape_id)
        for row in range(board.size):
            for col in range(board.size):
                if board.can_place(shape, row, col):
                    yield Move(slot, shape_id, row, col)


def find_first_valid_move(board: GameGrid, tray: Sequence[Optional[ShapeId]],
                          used: Sequence[bool]) -> Optional[Move]:
    return next(iter_valid_moves(board, tray, used), None)


def has_any_valid_move(board: GameGrid, tray: Sequence[Optional[ShapeId]],
                       used: Sequence[bool]) -> bool:
    return find_first_valid_move(board, tray, used) is not None
