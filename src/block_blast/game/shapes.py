from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

import numpy as np


Offset = Tuple[int, int]  # (x, y) = (column delta, row delta)
ShapeId = int


@dataclass(frozen=True)
class Shape:
    """A fixed polyomino: a set of (x, y) offsets normalized to the origin."""

    name: str
    cells: Tuple[Offset, ...]
    width: int = field(init=False)
    height: int = field(init=False)

    def __post_init__(self) -> None:
        if not self.cells:
            raise ValueError(f"shape {self.name!r} has no cells")
        if len(set(self.cells)) != len(self.cells):
            raise ValueError(f"shape {self.name!r} repeats a cell")
        xs = [x for x, _ in self.cells]
        ys = [y for _, y in self.cells]
        if min(xs) != 0 or min(ys) != 0:
            raise ValueError(f"shape {self.name!r} is not normalized to the origin")
        object.__setattr__(self, "width", max(xs) + 1)
        object.__setattr__(self, "height", max(ys) + 1)

    @property
    def size(self) -> int:
        """Number of cells, which is also the base score for placing it."""
        return len(self.cells)

    def mask(self) -> np.ndarray:
        """(height, width) occupancy array, for shells that draw the piece."""
        out = np.zeros((self.height, self.width), dtype=np.int8)
        for x, y in self.cells:
            out[y, x] = 1
        return out

    def cells_at(self, row: int, col: int) -> List[Tuple[int, int]]:
        """Absolute (row, col) board cells covered when anchored at (row, col)."""
        return [(row + y, col + x) for x, y in self.cells]


def _shape(name: str, *cells: Offset) -> Shape:
    return Shape(name, tuple(cells))


# Ids are indices into this tuple and end up in saved games; only append.
CATALOG: Tuple[Shape, ...] = (
    # Singles & lines
    _shape("single", (0, 0)),
    _shape("line2_h", (0, 0), (1, 0)),
    _shape("line3_h", (0, 0), (1, 0), (2, 0)),
    _shape("line4_h", (0, 0), (1, 0), (2, 0), (3, 0)),
    _shape("line5_h", (0, 0), (1, 0), (2, 0), (3, 0), (4, 0)),
    _shape("line2_v", (0, 0), (0, 1)),
    _shape("line3_v", (0, 0), (0, 1), (0, 2)),
    _shape("line4_v", (0, 0), (0, 1), (0, 2), (0, 3)),
    _shape("line5_v", (0, 0), (0, 1), (0, 2), (0, 3), (0, 4)),
    # Squares and blocks
    _shape("square2", (0, 0), (1, 0), (0, 1), (1, 1)),
    _shape("block3x2", (0, 0), (1, 0), (2, 0), (0, 1), (1, 1), (2, 1)),
    _shape("block2x3", (0, 0), (1, 0), (0, 1), (1, 1), (0, 2), (1, 2)),
    _shape("square3", (0, 0), (1, 0), (2, 0), (0, 1), (1, 1), (2, 1), (0, 2), (1, 2), (2, 2)),
    # Corners
    _shape("corner_bl", (0, 0), (0, 1), (1, 1)),
    _shape("corner_br", (1, 0), (0, 1), (1, 1)),
    _shape("corner_tr", (0, 0), (1, 0), (1, 1)),
    _shape("corner_tl", (0, 0), (1, 0), (0, 1)),
    # T
    _shape("t_down", (0, 0), (1, 0), (2, 0), (1, 1)),
    _shape("t_up", (1, 0), (0, 1), (1, 1), (2, 1)),
    # Tall L / J
    _shape("l_tall", (0, 0), (0, 1), (0, 2), (1, 2)),
    _shape("j_tall", (1, 0), (1, 1), (1, 2), (0, 2)),
    # Plus and stair
    _shape("plus", (1, 0), (0, 1), (1, 1), (2, 1), (1, 2)),
    _shape("stair", (0, 0), (1, 0), (1, 1), (2, 1)),
)

_IDS_BY_NAME: Dict[str, ShapeId] = {shape.name: idx for idx, shape in enumerate(CATALOG)}


def list_shapes() -> Sequence[Shape]:
    return CATALOG


def get_shape(shape_id: ShapeId) -> Shape:
    return CATALOG[shape_id]


def shape_id(name: str) -> ShapeId:
    """Catalog id for a shape name; raises KeyError for unknown names."""
    return _IDS_BY_NAME[name]


def is_valid_shape_id(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value < len(CATALOG)
