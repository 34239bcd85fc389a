from __future__ import annotations

import random
from enum import IntEnum
from typing import Dict, Optional, Tuple

import numpy as np


class PieceType(IntEnum):
    EMPTY = 0  # placeholder, never spawned
    I = 1
    O = 2
    L = 3
    S = 4
    T = 5


Shape = np.ndarray

SPAWNABLE = (PieceType.I, PieceType.O, PieceType.L, PieceType.S, PieceType.T)

_I, _O, _L, _S, _T = (int(t) for t in SPAWNABLE)

BASE_SHAPES: Dict[PieceType, Shape] = {
    PieceType.EMPTY: np.array([[0]], dtype=np.int8),
    PieceType.I: np.array(
        [
            [0, _I, 0, 0],
            [0, _I, 0, 0],
            [0, _I, 0, 0],
            [0, _I, 0, 0],
        ],
        dtype=np.int8,
    ),
    PieceType.O: np.array([[_O, _O], [_O, _O]], dtype=np.int8),
    PieceType.L: np.array([[0, 0, 0], [_L, _L, _L], [0, 0, _L]], dtype=np.int8),
    PieceType.S: np.array([[0, _S, _S], [_S, _S, 0], [0, 0, 0]], dtype=np.int8),
    PieceType.T: np.array([[0, 0, 0], [_T, _T, _T], [0, _T, 0]], dtype=np.int8),
}

# Display colours; the engine never looks at these.
PIECE_COLORS: Dict[PieceType, Tuple[int, int, int]] = {
    PieceType.EMPTY: (0, 0, 0),
    PieceType.I: (80, 227, 230),
    PieceType.O: (223, 173, 36),
    PieceType.L: (223, 173, 36),
    PieceType.S: (48, 211, 56),
    PieceType.T: (132, 61, 198),
}


def validate_shape(kind: PieceType, shape: Shape) -> None:
    """Raise ValueError unless `shape` is a usable matrix for `kind`.

    A usable shape is two-dimensional, has at least one filled cell and only
    holds 0 or the piece's own identifier.
    """
    if shape.ndim != 2 or shape.size == 0:
        raise ValueError(f"{kind.name}: shape must be a non-empty 2D matrix")
    values = set(np.unique(shape).tolist())
    if values <= {0}:
        raise ValueError(f"{kind.name}: shape has no filled cells")
    if not values <= {0, int(kind)}:
        raise ValueError(f"{kind.name}: shape holds foreign values {sorted(values - {0, int(kind)})}")


def _freeze_catalog() -> None:
    for kind in SPAWNABLE:
        validate_shape(kind, BASE_SHAPES[kind])
    for shape in BASE_SHAPES.values():
        shape.flags.writeable = False


_freeze_catalog()


def shape_of(kind: PieceType) -> Shape:
    """Canonical (read-only) matrix for `kind`."""
    return BASE_SHAPES[PieceType(kind)]


def random_piece(rng: Optional[random.Random] = None) -> PieceType:
    rng = rng or random.Random()
    return rng.choice(SPAWNABLE)


def shape_from_rows(rows) -> Shape:
    """Build a shape from nested lists, rejecting ragged rows."""
    widths = {len(row) for row in rows}
    if len(widths) != 1:
        raise ValueError("shape rows must all have the same length")
    return np.array(rows, dtype=np.int8)
