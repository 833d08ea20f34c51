from __future__ import annotations

from typing import Iterable, Optional, Sequence

import numpy as np

from block_blast.game import BlockBlastGame, GameConfig, shape_id


def make_game(seed: int = 0) -> BlockBlastGame:
    return BlockBlastGame(GameConfig(random_seed=seed))


def set_tray(game: BlockBlastGame, names: Sequence[str], used: Optional[Iterable[bool]] = None) -> None:
    """Put the named catalog shapes in the tray, all unused unless `used` says otherwise."""
    game.state.tray = [shape_id(name) for name in names]
    game.state.used = list(used) if used is not None else [False] * len(names)


def set_board(game: BlockBlastGame, cells: np.ndarray) -> None:
    game.state.board.grid = np.array(cells, dtype=np.int8)
