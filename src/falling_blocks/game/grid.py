from __future__ import annotations

from enum import IntEnum
from typing import Tuple

import numpy as np

from .player import Player


STAGE_WIDTH = 10
STAGE_HEIGHT = 20


class CellStatus(IntEnum):
    CLEAR = 0
    MERGED = 1


class Stage:
    """Fixed-size grid of (value, status) cells.

    `values` holds the piece identifier of each cell (0 for empty) and
    `status` holds a CellStatus per cell. Row 0 is the top of the stage.
    """

    def __init__(self, width: int = STAGE_WIDTH, height: int = STAGE_HEIGHT) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"stage dimensions must be positive, got {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        self.values = np.zeros((self.height, self.width), dtype=np.int8)
        self.status = np.full((self.height, self.width), CellStatus.CLEAR, dtype=np.int8)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_clear(self, x: int, y: int) -> bool:
        return self.status[y, x] == CellStatus.CLEAR

    def cell(self, x: int, y: int) -> Tuple[int, CellStatus]:
        return int(self.values[y, x]), CellStatus(int(self.status[y, x]))

    def merged_mask(self) -> np.ndarray:
        return self.status == CellStatus.MERGED

    def merged_count(self) -> int:
        return int(np.count_nonzero(self.merged_mask()))

    def clone_state(self) -> np.ndarray:
        # Values of locked cells only; clear cells read as 0.
        return np.where(self.merged_mask(), self.values, 0).astype(np.int8)

    def copy(self) -> "Stage":
        new_stage = Stage(self.width, self.height)
        new_stage.values = self.values.copy()
        new_stage.status = self.status.copy()
        return new_stage

    def __repr__(self) -> str:
        return f"Stage({self.width}x{self.height}, merged={self.merged_count()})"


def create_stage(width: int = STAGE_WIDTH, height: int = STAGE_HEIGHT) -> Stage:
    return Stage(width, height)


def merge_piece(stage: Stage, player: Player) -> Stage:
    """Return a copy of `stage` with the player's filled cells locked in.

    No collision check happens here: callers must have confirmed the
    placement with `collides` first, otherwise locked cells get overwritten.
    """
    merged = stage.copy()
    for x, y, value in player.cells():
        merged.values[y, x] = value
        merged.status[y, x] = CellStatus.MERGED
    return merged
