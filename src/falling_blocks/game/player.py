from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterator, Tuple

from .pieces import PieceType, Shape, shape_of


Cell = Tuple[int, int, int]


@dataclass(frozen=True, eq=False)
class Player:
    """The falling piece: its shape anchored at (x, y) on the stage.

    `x` and `y` are the shape matrix's top-left corner, so `x` may go
    negative while the filled cells stay in bounds.
    """

    kind: PieceType
    shape: Shape
    x: int
    y: int
    has_landed: bool = False

    def cells(self, dx: int = 0, dy: int = 0) -> Iterator[Cell]:
        """Yield (x, y, value) for every filled shape cell, shifted by (dx, dy)."""
        rows, cols = self.shape.shape
        for sy in range(rows):
            for sx in range(cols):
                value = int(self.shape[sy, sx])
                if value:
                    yield self.x + sx + dx, self.y + sy + dy, value

    def moved(self, dx: int, dy: int) -> "Player":
        return replace(self, x=self.x + dx, y=self.y + dy, has_landed=False)

    def landed(self) -> "Player":
        return replace(self, has_landed=True)


def spawn_x(stage_width: int) -> int:
    return stage_width // 2 - 2


def spawn_player(kind: PieceType, stage_width: int, spawn_y: int = 0) -> Player:
    return Player(kind=PieceType(kind), shape=shape_of(kind), x=spawn_x(stage_width), y=spawn_y)
