"""Gymnasium environments for Block Blast."""

from __future__ import annotations

from gymnasium.envs.registration import register

from .block_blast_env import BlockBlastEnv

register(
    id="BlockBlast-10x10-v0",
    entry_point="block_blast.env.block_blast_env:BlockBlastEnv",
)

ENV_ID = "BlockBlast-10x10-v0"

__all__ = ["BlockBlastEnv", "ENV_ID"]
