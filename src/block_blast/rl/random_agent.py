from __future__ import annotations

import argparse
import logging
import random
from typing import Dict, List, Optional

import gymnasium as gym
import numpy as np

import block_blast.env  # noqa: F401  ensure registration
from block_blast.env import ENV_ID


logger = logging.getLogger(__name__)


def run_random(episodes: int = 5, seed: Optional[int] = None, greedy_hint: bool = False,
               max_steps: int = 10000) -> List[Dict[str, float]]:
    """Play whole episodes with a random (or hint-following) agent.

    The random agent picks uniformly among valid placements from the action
    mask; with `greedy_hint` it always plays the engine's hint instead.
    """
    rng = random.Random(seed)
    env = gym.make(ENV_ID)
    results: List[Dict[str, float]] = []
    try:
        for ep in range(episodes):
            obs, info = env.reset(seed=None if seed is None else seed + ep)
            total_reward = 0.0
            steps = 0
            done = False
            while not done and steps < max_steps:
                if greedy_hint:
                    move = env.unwrapped.game.hint()
                    if move is None:
                        break
                    action = (move.slot, move.row, move.col)
                else:
                    valid = np.argwhere(info["action_mask"])
                    if valid.size == 0:
                        break
                    action = tuple(int(v) for v in valid[rng.randrange(len(valid))])
                obs, reward, terminated, truncated, info = env.step(action)
                total_reward += float(reward)
                steps += 1
                done = terminated or truncated
            results.append({"episode": ep, "reward": total_reward, "steps": steps, "score": info["score"]})
            logger.info("episode %d: score=%d steps=%d reward=%.1f", ep, info["score"], steps, total_reward)
    finally:
        env.close()
    return results


def main() -> None:
    p = argparse.ArgumentParser()
    p.add_argument("--episodes", type=int, default=5)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--hint", action="store_true", help="Follow the engine hint instead of playing randomly")
    p.add_argument("--log-level", type=str, default="INFO")
    args = p.parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO), format="%(message)s")

    results = run_random(args.episodes, args.seed, greedy_hint=args.hint)
    mean_score = sum(r["score"] for r in results) / max(1, len(results))
    print(f"Mean score over {len(results)} episodes: {mean_score:.1f}")


if __name__ == "__main__":  # pragma: no cover
    main()
