import random

import numpy as np
import pytest

from falling_blocks.game import PieceType, random_piece, shape_of
from falling_blocks.game.pieces import SPAWNABLE, shape_from_rows, validate_shape


def test_random_piece_covers_all_types_and_never_empty():
    rng = random.Random(1234)
    drawn = [random_piece(rng) for _ in range(500)]
    assert PieceType.EMPTY not in drawn
    assert set(drawn) == set(SPAWNABLE)


def test_random_piece_is_reproducible_with_seed():
    a = [random_piece(random.Random(7)) for _ in range(3)]
    b = [random_piece(random.Random(7)) for _ in range(3)]
    assert a == b


def test_catalog_shapes_hold_their_own_identifier():
    for kind in SPAWNABLE:
        shape = shape_of(kind)
        assert set(np.unique(shape).tolist()) <= {0, int(kind)}
        assert np.count_nonzero(shape) == 4
    assert shape_of(PieceType.I).shape == (4, 4)
    assert shape_of(PieceType.O).shape == (2, 2)
    assert shape_of(PieceType.T).shape == (3, 3)


def test_catalog_shapes_are_read_only():
    with pytest.raises(ValueError):
        shape_of(PieceType.T)[0, 0] = 5


def test_validate_shape_rejects_malformed_shapes():
    with pytest.raises(ValueError):
        validate_shape(PieceType.T, np.zeros((3, 3), dtype=np.int8))
    with pytest.raises(ValueError):
        validate_shape(PieceType.T, np.array([[int(PieceType.I)]], dtype=np.int8))
    with pytest.raises(ValueError):
        shape_from_rows([[0, 1], [1]])
