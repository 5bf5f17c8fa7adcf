"""Game module for blockfall.

Exports the core game engine and supporting classes:
- Tetromino / TetrominoType: the seven pieces and their rotation
- board helpers: placement test, merge and row clearing
- ScoringRules: points per cleared row
- GameState / update_state / play: the pure state transition and its fold
- GameSession: keeps the latest state for an interactive loop
"""

from .pieces import Tetromino, TetrominoType, deep_copy, random_tetromino, rotate, tetromino
from .grid import (
    GRID_HEIGHT,
    GRID_WIDTH,
    FallingBlock,
    can_place_tetromino,
    clear_rows,
    create_empty_board,
    merge_tetromino,
)
from .rules import ScoringRules
from .core import Action, GameConfig, GameState, initial_state, play, spawn_block, update_state
from .controls import action_for_key
from .session import GameSession

__all__ = [
    "Tetromino",
    "TetrominoType",
    "deep_copy",
    "random_tetromino",
    "rotate",
    "tetromino",
    "GRID_HEIGHT",
    "GRID_WIDTH",
    "FallingBlock",
    "can_place_tetromino",
    "clear_rows",
    "create_empty_board",
    "merge_tetromino",
    "ScoringRules",
    "Action",
    "GameConfig",
    "GameState",
    "initial_state",
    "play",
    "spawn_block",
    "update_state",
    "action_for_key",
    "GameSession",
]
