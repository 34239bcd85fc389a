from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field, replace
from enum import IntEnum
from typing import Optional

import numpy as np

from .collision import collides, is_blocked
from .grid import STAGE_HEIGHT, STAGE_WIDTH, Stage, create_stage, merge_piece
from .pieces import random_piece
from .player import Player, spawn_player
from .rotation import rotate_player

logger = logging.getLogger(__name__)

# Tallest catalog shape (I) spans four rows and the widest spans four columns.
_MAX_SHAPE_SPAN = 4


class Command(IntEnum):
    MOVE_LEFT = 0
    MOVE_RIGHT = 1
    SOFT_DROP = 2
    ROTATE = 3


@dataclass
class GameConfig:
    width: int = STAGE_WIDTH
    height: int = STAGE_HEIGHT
    spawn_y: int = 0
    tick_interval_ms: int = 1000
    random_seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.width < _MAX_SHAPE_SPAN:
            raise ValueError(f"width must be at least {_MAX_SHAPE_SPAN}, got {self.width}")
        if self.spawn_y < 0:
            raise ValueError(f"spawn_y must be non-negative, got {self.spawn_y}")
        if self.height < self.spawn_y + _MAX_SHAPE_SPAN:
            raise ValueError(
                f"height {self.height} leaves no room to spawn at row {self.spawn_y}"
            )
        if self.tick_interval_ms <= 0:
            raise ValueError(f"tick_interval_ms must be positive, got {self.tick_interval_ms}")


@dataclass(frozen=True, eq=False)
class GameState:
    """Everything a session needs: stage, falling piece and the terminal flag.

    Transitions never modify a state; they return a new one, or the same
    object when nothing changes.
    """

    stage: Stage
    player: Player
    is_over: bool = False
    config: GameConfig = field(default_factory=GameConfig)
    rng: random.Random = field(default_factory=random.Random, repr=False)

    def observation(self) -> np.ndarray:
        # Merged values, with the falling piece overlaid as negative values
        obs = self.stage.clone_state()
        if not self.is_over:
            for x, y, value in self.player.cells():
                if self.stage.is_inside(x, y):
                    obs[y, x] = -value
        return obs


def _spawn(config: GameConfig, rng: random.Random) -> Player:
    kind = random_piece(rng)
    logger.debug("Spawning %s", kind.name)
    return spawn_player(kind, config.width, config.spawn_y)


def new_game(config: Optional[GameConfig] = None, rng: Optional[random.Random] = None) -> GameState:
    config = config or GameConfig()
    rng = rng or random.Random(config.random_seed)
    stage = create_stage(config.width, config.height)
    return GameState(stage=stage, player=_spawn(config, rng), config=config, rng=rng)


def _move(state: GameState, dx: int) -> GameState:
    if collides(state.player, state.stage, dx, 0):
        return state
    return replace(state, player=state.player.moved(dx, 0))


def _soft_drop(state: GameState) -> GameState:
    if collides(state.player, state.stage, 0, 1):
        if state.player.has_landed:
            return state
        return replace(state, player=state.player.landed())
    return replace(state, player=state.player.moved(0, 1))


def _rotate(state: GameState) -> GameState:
    rotated = rotate_player(state.player, state.stage)
    if rotated is state.player:
        return state
    return replace(state, player=rotated)


def _lock_and_spawn(state: GameState) -> GameState:
    merged = merge_piece(state.stage, state.player)
    logger.debug(
        "Locked %s at (%d, %d)", state.player.kind.name, state.player.x, state.player.y
    )
    candidate = _spawn(state.config, state.rng)
    if is_blocked(candidate, merged):
        logger.info("Game over: %s cannot spawn", candidate.kind.name)
        return replace(state, stage=merged, is_over=True)
    return replace(state, stage=merged, player=candidate)


def handle_input(state: GameState, command: Command) -> GameState:
    """Apply one player command; a no-op once the game is over."""
    command = Command(command)
    if state.is_over:
        return state
    if command == Command.MOVE_LEFT:
        return _move(state, -1)
    if command == Command.MOVE_RIGHT:
        return _move(state, 1)
    if command == Command.SOFT_DROP:
        return _soft_drop(state)
    return _rotate(state)


def handle_tick(state: GameState) -> GameState:
    """Gravity step: move down one row, or lock the piece and spawn the next."""
    if state.is_over:
        return state
    if not collides(state.player, state.stage, 0, 1):
        return replace(state, player=state.player.moved(0, 1))
    return _lock_and_spawn(state)
