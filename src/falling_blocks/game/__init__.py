"""Game module for falling-blocks.

Exports the state engine and its supporting pieces:
- PieceType, shape_of, random_piece: the piece catalog
- Stage, CellStatus, create_stage, merge_piece: the stage grid
- Player: the falling piece
- collides, is_blocked: placement legality and game-over checks
- rotate_shape, rotate_player: rotation with sideways kicks
- GameState, new_game, handle_input, handle_tick: turn transitions
- GameController: session owner tying transitions to a tick timer
"""

from .pieces import PieceType, PIECE_COLORS, shape_of, random_piece
from .grid import Stage, CellStatus, create_stage, merge_piece
from .player import Player, spawn_player
from .collision import collides, is_blocked
from .rotation import rotate_shape, rotate_player, kick_offsets
from .core import Command, GameConfig, GameState, new_game, handle_input, handle_tick
from .controller import GameController, TickTimer

__all__ = [
    "PieceType",
    "PIECE_COLORS",
    "shape_of",
    "random_piece",
    "Stage",
    "CellStatus",
    "create_stage",
    "merge_piece",
    "Player",
    "spawn_player",
    "collides",
    "is_blocked",
    "rotate_shape",
    "rotate_player",
    "kick_offsets",
    "Command",
    "GameConfig",
    "GameState",
    "new_game",
    "handle_input",
    "handle_tick",
    "GameController",
    "TickTimer",
]
