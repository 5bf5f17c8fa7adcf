from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

from .pieces import Tetromino


GRID_WIDTH = 10
GRID_HEIGHT = 20

Board = np.ndarray
Coordinate = Tuple[int, int]


def freeze(array: np.ndarray) -> np.ndarray:
    """Mark ``array`` read-only in place and return it."""
    array.flags.writeable = False
    return array


@dataclass(frozen=True)
class FallingBlock:
    """The piece under control: a tetromino whose top-left corner sits at (x, y)."""

    tetromino: Tetromino
    x: int
    y: int

    def __post_init__(self) -> None:
        # Shapes held by a block are read-only.
        freeze(self.tetromino.shape)

    def moved(self, dx: int = 0, dy: int = 0) -> "FallingBlock":
        return FallingBlock(self.tetromino, self.x + dx, self.y + dy)


@dataclass(frozen=True, eq=False)
class ClearResult:
    board: Board
    rows_cleared: int


def create_empty_board(width: int = GRID_WIDTH, height: int = GRID_HEIGHT) -> Board:
    """Board of ``height`` rows and ``width`` columns.

    0 marks an empty cell, positive integers are the color tags of landed
    blocks (the tetromino kind they came from).
    """
    return np.zeros((int(height), int(width)), dtype=np.int8)


def is_inside(board: Board, x: int, y: int) -> bool:
    height, width = board.shape
    return 0 <= x < width and 0 <= y < height


def can_place_tetromino(board: Board, tetromino: Tetromino, pos_x: int, pos_y: int) -> bool:
    shape = tetromino.shape
    h, w = shape.shape
    for row in range(h):
        for col in range(w):
            if not shape[row, col]:
                continue
            x = pos_x + col
            y = pos_y + row
            if not is_inside(board, x, y):
                return False
            if board[y, x] != 0:
                return False
    return True


def cells_of(block: FallingBlock) -> List[Coordinate]:
    """Absolute (x, y) coordinates covered by the block's occupied cells."""
    rows, cols = np.nonzero(block.tetromino.shape)
    return [(block.x + int(c), block.y + int(r)) for r, c in zip(rows, cols)]


def merge_tetromino(board: Board, block: FallingBlock) -> Board:
    """Lock ``block`` into a copy of ``board``; cells outside the board are skipped."""
    merged = board.copy()
    tag = block.tetromino.tag
    for x, y in cells_of(block):
        if is_inside(merged, x, y):
            merged[y, x] = tag
    return merged


def clear_rows(board: Board) -> ClearResult:
    """Drop every full row and pad the top with as many empty rows."""
    height, width = board.shape
    remaining = board[np.any(board == 0, axis=1)]
    rows_cleared = height - remaining.shape[0]
    new_rows = np.zeros((rows_cleared, width), dtype=board.dtype)
    return ClearResult(board=np.vstack((new_rows, remaining)), rows_cleared=int(rows_cleared))
