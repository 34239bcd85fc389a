from __future__ import annotations

from dataclasses import replace
from typing import Iterator

import numpy as np

from .collision import collides
from .grid import Stage
from .pieces import Shape
from .player import Player


def rotate_shape(shape: Shape) -> Shape:
    """Clockwise quarter turn; returns a new matrix."""
    return np.rot90(shape, k=1, axes=(1, 0)).copy()


def kick_offsets(limit: int) -> Iterator[int]:
    """Horizontal displacements to probe after a rotation.

    Starts at 0, then walks the zig-zag steps +1, -2, +3, -4, ... applied
    cumulatively (0, 1, -1, 2, -2, ...). Stops once the next step is
    positive and larger than `limit`.
    """
    yield 0
    shift, step = 0, 1
    while True:
        shift += step
        step = -(step + (1 if step > 0 else -1))
        if step > limit:
            return
        yield shift


def rotate_player(player: Player, stage: Stage) -> Player:
    """Rotate the player, kicking it sideways if needed.

    Returns `player` itself when no probed displacement gives a legal
    placement.
    """
    rotated = replace(player, shape=rotate_shape(player.shape), has_landed=False)
    width = rotated.shape.shape[1]
    for shift in kick_offsets(width):
        candidate = replace(rotated, x=player.x + shift)
        if not collides(candidate, stage):
            return candidate
    return player
