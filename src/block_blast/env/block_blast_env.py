from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from block_blast.game import CATALOG, BlockBlastGame, GameConfig, InvalidPlacement, iter_valid_moves


logger = logging.getLogger(__name__)


def _compute_action_mask(game: BlockBlastGame) -> np.ndarray:
    s = game.state
    size = s.board.size
    mask = np.zeros((len(s.tray), size, size), dtype=np.bool_)
    for move in iter_valid_moves(s.board, s.tray, s.used):
        mask[move.slot, move.row, move.col] = True
    return mask


class BlockBlastEnv(gym.Env):
    """Place tray pieces on the board; one step is one (slot, row, col) placement.

    Invalid actions leave the game untouched and earn `invalid_action_penalty`.
    The episode terminates when no tray piece fits anywhere.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 reward_weights: Optional[Dict[str, float]] = None,
                 invalid_action_penalty: float = -0.1,
                 step_penalty: float = 0.0,
                 terminal_penalty: float = 0.0,
                 max_episode_steps: int = 10000) -> None:
        super().__init__()
        self.game = BlockBlastGame(config)
        self.render_mode = render_mode

        # Reward shaping parameters
        self.invalid_action_penalty = float(invalid_action_penalty)
        self.step_penalty = float(step_penalty)
        self.terminal_penalty = float(terminal_penalty)
        self.max_episode_steps = int(max_episode_steps)
        self.reward_weights: Dict[str, float] = {
            "points": 1.0,   # engine score gained (cells + clear bonus)
            "lines": 0.0,    # extra per line cleared
        }
        if reward_weights:
            self.reward_weights.update({k: float(v) for k, v in reward_weights.items()})

        size = self.game.config.grid_size
        k = self.game.config.tray_size

        # Observation space: grid (0/1) and tray shape ids (-1 for used slots)
        self.observation_space = spaces.Dict(
            {
                "grid": spaces.Box(low=0, high=1, shape=(size, size), dtype=np.int8),
                "tray": spaces.Box(low=-1, high=len(CATALOG) - 1, shape=(k,), dtype=np.int8),
                "pieces_remaining": spaces.Discrete(k + 1),
            }
        )

        # Action: (slot, row, col)
        self.action_space = spaces.MultiDiscrete((k, size, size))

        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        s = self.game.state
        tray = np.full((len(s.tray),), -1, dtype=np.int8)
        for slot, (shape_id, used) in enumerate(zip(s.tray, s.used)):
            if shape_id is not None and not used:
                tray[slot] = shape_id
        return {
            "grid": s.board.grid.astype(np.int8),
            "tray": tray,
            "pieces_remaining": len(s.unused_slots()),
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "action_mask": _compute_action_mask(self.game),
            "score": self.game.state.score,
            "best": self.game.state.best,
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None,
              options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.game.rng.seed(seed)
        self.game.new_game()
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: np.ndarray | Tuple[int, int, int]):
        slot, row, col = map(int, action)

        reward_components: Dict[str, float] = {}
        gained = 0
        try:
            result = self.game.place(slot, row, col)
        except InvalidPlacement as exc:
            logger.debug("invalid action %s: %s", (slot, row, col), exc)
            reward_components["invalid"] = self.invalid_action_penalty
            result = None
        else:
            gained = result.gained
            reward_components["points"] = self.reward_weights["points"] * float(result.gained)
            reward_components["lines"] = self.reward_weights["lines"] * float(result.lines_cleared)

        reward_components["step"] = self.step_penalty
        self._steps += 1
        terminated = self.game.is_game_over() if result is None else result.game_over
        truncated = self._steps >= self.max_episode_steps
        if terminated:
            reward_components["terminal"] = self.terminal_penalty

        reward = float(sum(reward_components.values()))
        info = self._get_info()
        info["reward_components"] = reward_components
        info["engine_score_delta"] = float(gained)
        info["valid_action"] = result is not None
        return self._get_obs(), reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            grid = self.game.state.board.grid
            cell = 12
            h, w = grid.shape
            img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
            for y in range(h):
                for x in range(w):
                    color = (70, 200, 120) if grid[y, x] else (30, 30, 36)
                    img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
            return img
        return None

    def close(self) -> None:
        pass
