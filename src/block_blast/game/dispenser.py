from __future__ import annotations

import logging
import random
from typing import List, Optional

from .shapes import CATALOG, Shape, ShapeId
from .state import GameState


logger = logging.getLogger(__name__)


def shape_weight(shape: Shape, weight_ceiling: int = 8) -> int:
    """More cells => lower weight, never below 1."""
    return max(1, weight_ceiling - shape.size)


class Dispenser:
    """Weighted stream of catalog shape ids feeding the tray through a shuffled bag.

    The bag lives on the GameState so it survives save/load; the dispenser
    only holds the random generator and the weighting parameters.
    """

    def __init__(self, rng: Optional[random.Random] = None, weight_ceiling: int = 8,
                 bag_min: int = 10) -> None:
        self.rng = rng or random.Random()
        self.weight_ceiling = weight_ceiling
        self.bag_min = bag_min

    def weighted_batch(self) -> List[ShapeId]:
        batch: List[ShapeId] = []
        for idx, shape in enumerate(CATALOG):
            batch.extend([idx] * shape_weight(shape, self.weight_ceiling))
        return batch

    def refill_bag(self, state: GameState) -> None:
        batch = self.weighted_batch()
        self.rng.shuffle(batch)
        state.bag.extend(batch)
        logger.debug("bag refilled with %d shapes (now %d)", len(batch), len(state.bag))

    def draw(self, state: GameState) -> ShapeId:
        if len(state.bag) < self.bag_min:
            self.refill_bag(state)
        return state.bag.pop()

    def refill_tray(self, state: GameState) -> None:
        """Replace every tray slot with a fresh shape and mark all of them unused."""
        for slot in range(len(state.tray)):
            state.tray[slot] = self.draw(state)
            state.used[slot] = False
        logger.debug("tray refilled: %s", [CATALOG[s].name for s in state.tray])
