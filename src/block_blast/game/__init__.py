"""Block Blast (10x10) rule engine.

Exports the engine and its supporting pieces:
- Shape / list_shapes: the fixed polyomino catalog
- GameGrid: binary board with placement checks and line clearing
- Dispenser: weighted bag and tray refills
- ScoringRules: placement and line-clear scoring
- History: undo snapshots
- BlockBlastGame: game facade (place, undo, hint, game over)
- GameStore: JSON save/load with per-field fallbacks
"""

from .errors import BlockBlastError, InvalidPlacement
from .shapes import CATALOG, Shape, ShapeId, get_shape, list_shapes, shape_id
from .grid import GameGrid
from .rules import ScoringRules
from .history import History, HistoryEntry
from .state import GameState
from .dispenser import Dispenser
from .oracle import Move, find_first_valid_move, has_any_valid_move, iter_valid_moves
from .core import BlockBlastGame, GameConfig, PlacementResult
from .persistence import GameStore, state_from_record, state_to_record

__all__ = [
    "BlockBlastError",
    "InvalidPlacement",
    "CATALOG",
    "Shape",
    "ShapeId",
    "get_shape",
    "list_shapes",
    "shape_id",
    "GameGrid",
    "ScoringRules",
    "History",
    "HistoryEntry",
    "GameState",
    "Dispenser",
    "Move",
    "find_first_valid_move",
    "has_any_valid_move",
    "iter_valid_moves",
    "BlockBlastGame",
    "GameConfig",
    "PlacementResult",
    "GameStore",
    "state_from_record",
    "state_to_record",
]
