import numpy as np
import pytest

from blockfall.game.grid import (
    GRID_HEIGHT,
    GRID_WIDTH,
    FallingBlock,
    can_place_tetromino,
    cells_of,
    clear_rows,
    create_empty_board,
    merge_tetromino,
)
from blockfall.game.pieces import TetrominoType, tetromino


def test_create_empty_board():
    board = create_empty_board()
    assert board.shape == (GRID_HEIGHT, GRID_WIDTH) == (20, 10)
    assert not board.any()

    other = create_empty_board()
    board[0, 0] = 1
    assert other[0, 0] == 0


def test_can_place_respects_walls_and_floor():
    board = create_empty_board()
    o_piece = tetromino(TetrominoType.O)
    assert can_place_tetromino(board, o_piece, 0, 0)
    assert can_place_tetromino(board, o_piece, 8, 18)
    assert not can_place_tetromino(board, o_piece, -1, 0)
    assert not can_place_tetromino(board, o_piece, 9, 0)
    assert not can_place_tetromino(board, o_piece, 0, 19)
    assert not can_place_tetromino(board, o_piece, 0, -1)


def test_can_place_ignores_empty_shape_cells():
    board = create_empty_board()
    i_piece = tetromino(TetrominoType.I)
    # Only row 1 of the I box is occupied.
    assert can_place_tetromino(board, i_piece, 0, -1)
    assert can_place_tetromino(board, i_piece, 6, 18)
    assert not can_place_tetromino(board, i_piece, 7, 18)
    assert not can_place_tetromino(board, i_piece, 0, 19)


def test_can_place_detects_overlap():
    board = create_empty_board()
    board[19, 5] = 3
    o_piece = tetromino(TetrominoType.O)
    assert not can_place_tetromino(board, o_piece, 4, 18)
    assert not can_place_tetromino(board, o_piece, 5, 18)
    assert can_place_tetromino(board, o_piece, 6, 18)
    assert can_place_tetromino(board, o_piece, 4, 17)


@pytest.mark.parametrize("kind", list(TetrominoType))
def test_can_place_false_whenever_a_cell_is_outside(kind):
    board = create_empty_board()
    piece = tetromino(kind)
    for _ in range(4):
        for y in range(-4, GRID_HEIGHT + 2):
            for x in range(-4, GRID_WIDTH + 2):
                cells = cells_of(FallingBlock(piece, x, y))
                outside = any(not (0 <= cx < GRID_WIDTH and 0 <= cy < GRID_HEIGHT) for cx, cy in cells)
                assert can_place_tetromino(board, piece, x, y) is not outside
        piece = piece.rotated()


def test_cells_of():
    block = FallingBlock(tetromino(TetrominoType.T), 3, 5)
    assert sorted(cells_of(block)) == [(3, 6), (4, 5), (4, 6), (5, 6)]


def test_merge_writes_only_block_cells():
    board = create_empty_board()
    board[19, 0] = 7
    before = board.copy()
    block = FallingBlock(tetromino(TetrominoType.S), 2, 17)

    merged = merge_tetromino(board, block)

    assert np.array_equal(board, before)
    assert merged is not board
    changed = {(int(x), int(y)) for y, x in zip(*np.nonzero(merged != before))}
    assert changed == set(cells_of(block))
    for x, y in changed:
        assert merged[y, x] == int(TetrominoType.S)
    assert merged[19, 0] == 7


def test_merge_skips_cells_outside_board():
    board = create_empty_board()
    block = FallingBlock(tetromino(TetrominoType.O), -1, 0)
    merged = merge_tetromino(board, block)
    assert merged[0, 0] == merged[1, 0] == int(TetrominoType.O)
    assert int(np.count_nonzero(merged)) == 2


def test_merge_accepts_read_only_board():
    board = create_empty_board()
    board.flags.writeable = False
    merged = merge_tetromino(board, FallingBlock(tetromino(TetrominoType.O), 0, 0))
    assert merged.flags.writeable
    assert int(np.count_nonzero(merged)) == 4


def test_clear_rows_removes_full_rows_and_keeps_height():
    board = create_empty_board()
    board[19, :] = 1
    board[17, :] = 2
    board[18, 3] = 5
    board[16, 0] = 4

    result = clear_rows(board)

    assert result.rows_cleared == 2
    assert result.board.shape == (GRID_HEIGHT, GRID_WIDTH)
    assert not result.board[:2].any()
    # Remaining rows keep their relative order.
    assert result.board[19, 3] == 5
    assert result.board[18, 0] == 4
    assert int(np.count_nonzero(result.board)) == 2


def test_clear_rows_without_full_rows():
    board = create_empty_board()
    board[19, :9] = 1
    result = clear_rows(board)
    assert result.rows_cleared == 0
    assert np.array_equal(result.board, board)


def test_clear_rows_full_board():
    board = np.ones((GRID_HEIGHT, GRID_WIDTH), dtype=np.int8)
    result = clear_rows(board)
    assert result.rows_cleared == GRID_HEIGHT
    assert result.board.shape == (GRID_HEIGHT, GRID_WIDTH)
    assert not result.board.any()
