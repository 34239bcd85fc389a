from __future__ import annotations

import random
from enum import IntEnum
from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from falling_blocks.game import (
    Command,
    GameConfig,
    GameState,
    PieceType,
    handle_input,
    handle_tick,
    new_game,
)


class EnvAction(IntEnum):
    LEFT = 0
    RIGHT = 1
    SOFT_DROP = 2
    ROTATE = 3
    NONE = 4


ACTION_TO_COMMAND: Dict[EnvAction, Command] = {
    EnvAction.LEFT: Command.MOVE_LEFT,
    EnvAction.RIGHT: Command.MOVE_RIGHT,
    EnvAction.SOFT_DROP: Command.SOFT_DROP,
    EnvAction.ROTATE: Command.ROTATE,
}


class FallingBlocksEnv(gym.Env):
    """One env step = the chosen command followed by one gravity tick."""

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 max_episode_steps: int = 5000,
                 step_reward: float = 0.01,
                 terminal_penalty: float = -1.0) -> None:
        super().__init__()
        self.config = config or GameConfig()
        self.render_mode = render_mode
        self.max_episode_steps = int(max_episode_steps)
        self.step_reward = float(step_reward)
        self.terminal_penalty = float(terminal_penalty)

        top = int(max(PieceType))
        self.observation_space = spaces.Box(
            low=-top, high=top, shape=(self.config.height, self.config.width), dtype=np.int8
        )
        self.action_space = spaces.Discrete(len(EnvAction))

        self.state: GameState = new_game(self.config, random.Random(self.config.random_seed))
        self._steps = 0

    def _get_info(self) -> Dict[str, Any]:
        player = self.state.player
        return {
            "piece": player.kind.name,
            "position": (player.x, player.y),
            "has_landed": player.has_landed,
            "merged_cells": self.state.stage.merged_count(),
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is None:
            seed = int(self.np_random.integers(0, 2**31 - 1))
        self.state = new_game(self.config, random.Random(seed))
        self._steps = 0
        return self.state.observation(), self._get_info()

    def step(self, action: int):
        action = EnvAction(int(action))
        command = ACTION_TO_COMMAND.get(action)
        if command is not None:
            self.state = handle_input(self.state, command)
        self.state = handle_tick(self.state)
        self._steps += 1

        terminated = bool(self.state.is_over)
        truncated = self._steps >= self.max_episode_steps and not terminated
        reward = self.terminal_penalty if terminated else self.step_reward
        return self.state.observation(), float(reward), terminated, truncated, self._get_info()

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            from falling_blocks.visualization.renderer import observation_to_rgb

            return observation_to_rgb(self.state.observation(), cell=12)
        # human rendering delegated to external UI; noop
        return None

    def close(self) -> None:
        pass
