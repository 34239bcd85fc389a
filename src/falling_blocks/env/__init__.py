"""Gymnasium environments for falling-blocks."""

from __future__ import annotations

from gymnasium.envs.registration import register

register(
    id="FallingBlocks-20x10-v0",
    entry_point="falling_blocks.env.falling_blocks_env:FallingBlocksEnv",
)

__all__ = ["FallingBlocks-20x10-v0"]
