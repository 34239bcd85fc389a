from __future__ import annotations

from .grid import Stage
from .player import Player


def collides(player: Player, stage: Stage, dx: int = 0, dy: int = 0) -> bool:
    """True if the player's shape shifted by (dx, dy) leaves the stage or hits a merged cell."""
    for x, y, _ in player.cells(dx, dy):
        if not 0 <= y < stage.height:
            return True
        if not 0 <= x < stage.width:
            return True
        if not stage.is_clear(x, y):
            return True
    return False


def is_blocked(candidate: Player, stage: Stage) -> bool:
    """True if a freshly spawned piece already overlaps the stage.

    Cells outside the stage count as blocked too.
    """
    for x, y, _ in candidate.cells():
        if not stage.is_inside(x, y) or not stage.is_clear(x, y):
            return True
    return False
