from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .grid import GameGrid
from .history import History
from .shapes import ShapeId


@dataclass
class GameState:
    """Everything that makes up one game; owned by a single BlockBlastGame."""

    board: GameGrid
    tray: List[Optional[ShapeId]]
    used: List[bool]
    bag: List[ShapeId] = field(default_factory=list)
    score: int = 0
    best: int = 0
    history: History = field(default_factory=History)

    @classmethod
    def empty(cls, grid_size: int = 10, tray_size: int = 3) -> "GameState":
        """Empty board and an unfilled tray (every slot used, no shape)."""
        return cls(
            board=GameGrid(grid_size),
            tray=[None] * tray_size,
            used=[True] * tray_size,
        )

    @property
    def tray_exhausted(self) -> bool:
        return all(self.used)

    def unused_slots(self) -> List[int]:
        return [slot for slot, used in enumerate(self.used) if not used]
