from __future__ import annotations

import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Optional

import numpy as np


class TetrominoType(IntEnum):
    I = 1
    O = 2
    T = 3
    S = 4
    Z = 5
    J = 6
    L = 7


Shape = np.ndarray


# Canonical shapes live in square bounding boxes so four rotations round-trip.
BASE_SHAPES: Dict[TetrominoType, Shape] = {
    TetrominoType.I: np.array([[0, 0, 0, 0], [1, 1, 1, 1], [0, 0, 0, 0], [0, 0, 0, 0]], dtype=np.int8),
    TetrominoType.O: np.array([[1, 1], [1, 1]], dtype=np.int8),
    TetrominoType.T: np.array([[0, 1, 0], [1, 1, 1], [0, 0, 0]], dtype=np.int8),
    TetrominoType.S: np.array([[0, 1, 1], [1, 1, 0], [0, 0, 0]], dtype=np.int8),
    TetrominoType.Z: np.array([[1, 1, 0], [0, 1, 1], [0, 0, 0]], dtype=np.int8),
    TetrominoType.J: np.array([[1, 0, 0], [1, 1, 1], [0, 0, 0]], dtype=np.int8),
    TetrominoType.L: np.array([[0, 0, 1], [1, 1, 1], [0, 0, 0]], dtype=np.int8),
}

for _shape in BASE_SHAPES.values():
    _shape.flags.writeable = False

COLORS: Dict[TetrominoType, str] = {
    TetrominoType.I: "cyan",
    TetrominoType.O: "yellow",
    TetrominoType.T: "purple",
    TetrominoType.S: "green",
    TetrominoType.Z: "red",
    TetrominoType.J: "blue",
    TetrominoType.L: "orange",
}


def deep_copy(matrix) -> Shape:
    """Return a copy of a 2D 0/1 matrix that shares no storage with it."""
    return np.array(matrix, dtype=np.int8, copy=True)


def rotate(matrix) -> Shape:
    """Rotate an N x M matrix 90 degrees clockwise into an M x N matrix.

    ``rotated[j][N - 1 - i] == matrix[i][j]``. The input is left untouched.
    """
    # rot90 returns a view; copy so the result owns its storage
    return np.rot90(np.asarray(matrix, dtype=np.int8), k=1, axes=(1, 0)).copy()


def color_for(tag: int) -> Optional[str]:
    """Color name of a board cell tag, ``None`` for an empty cell."""
    if tag == 0:
        return None
    return COLORS[TetrominoType(abs(int(tag)))]


@dataclass(frozen=True, eq=False)
class Tetromino:
    kind: TetrominoType
    shape: Shape

    @property
    def color(self) -> str:
        return COLORS[self.kind]

    @property
    def tag(self) -> int:
        return int(self.kind)

    @property
    def height(self) -> int:
        return int(self.shape.shape[0])

    @property
    def width(self) -> int:
        return int(self.shape.shape[1])

    def rotated(self) -> "Tetromino":
        return Tetromino(self.kind, rotate(self.shape))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tetromino):
            return NotImplemented
        return self.kind == other.kind and np.array_equal(self.shape, other.shape)

    def __hash__(self) -> int:
        return hash((self.kind, self.shape.shape, self.shape.tobytes()))

    def __repr__(self) -> str:
        rows = "/".join("".join(str(int(v)) for v in row) for row in self.shape)
        return f"Tetromino({self.kind.name}, {rows})"


def tetromino(kind: TetrominoType) -> Tetromino:
    """Fresh catalog copy of ``kind``."""
    kind = TetrominoType(kind)
    return Tetromino(kind=kind, shape=deep_copy(BASE_SHAPES[kind]))


def random_tetromino(rng: Optional[random.Random] = None) -> Tetromino:
    """Uniformly pick a catalog entry; every call returns an independent copy."""
    chooser = rng if rng is not None else random
    return tetromino(chooser.choice(list(TetrominoType)))
