from __future__ import annotations

import random
from typing import List, Optional

import pytest

from falling_blocks.game import (
    CellStatus,
    GameConfig,
    GameState,
    PieceType,
    Player,
    Stage,
    create_stage,
    spawn_player,
)


class FakeTimer:
    def __init__(self) -> None:
        self.calls: List[tuple] = []

    def arm(self, interval_ms: int) -> None:
        self.calls.append(("arm", interval_ms))

    def cancel(self) -> None:
        self.calls.append(("cancel",))

    @property
    def cancels(self) -> int:
        return sum(1 for call in self.calls if call[0] == "cancel")


def fill(stage: Stage, x: int, y: int, value: int = 9) -> None:
    stage.values[y, x] = value
    stage.status[y, x] = CellStatus.MERGED


def make_state(kind: PieceType, x: Optional[int] = None, y: int = 0,
               stage: Optional[Stage] = None, seed: int = 0) -> GameState:
    config = GameConfig()
    stage = stage if stage is not None else create_stage(config.width, config.height)
    player = spawn_player(kind, config.width)
    if x is not None:
        player = Player(kind=player.kind, shape=player.shape, x=x, y=y)
    elif y:
        player = Player(kind=player.kind, shape=player.shape, x=player.x, y=y)
    return GameState(stage=stage, player=player, config=config, rng=random.Random(seed))


@pytest.fixture
def timer() -> FakeTimer:
    return FakeTimer()
