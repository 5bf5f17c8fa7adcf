from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
import pygame

from blockfall.game import GameState, Tetromino
from blockfall.game.pieces import color_for


Color = Tuple[int, int, int]

EMPTY: Color = (20, 20, 26)

PALETTE = {
    "cyan": (0, 240, 240),
    "yellow": (240, 240, 0),
    "purple": (160, 0, 240),
    "green": (0, 240, 0),
    "red": (240, 0, 0),
    "blue": (0, 0, 240),
    "orange": (240, 160, 0),
}


def rgb(color: Optional[str]) -> Color:
    if color is None:
        return EMPTY
    return PALETTE.get(color, (200, 200, 200))


def _color_for_value(v: int) -> Color:
    return rgb(color_for(v))


def to_rgb_array(grid: np.ndarray, cell: int = 12) -> np.ndarray:
    """Paint a tag grid (as produced by ``GameState.to_array``) into an RGB image."""
    h, w = grid.shape
    img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
    for y in range(h):
        for x in range(w):
            img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = _color_for_value(int(grid[y, x]))
    return img


class Renderer:
    def __init__(self, cell_size: int = 30, margin: int = 20, preview_cells: int = 5) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.preview_cells = preview_cells
        self._font: Optional[pygame.font.Font] = None

    def window_size(self, width: int, height: int) -> Tuple[int, int]:
        board_w = width * self.cell_size
        side_w = self.preview_cells * self.cell_size
        return (board_w + side_w + self.margin * 3, height * self.cell_size + self.margin * 2)

    def _cell_rect(self, x0: int, y0: int, col: int, row: int) -> pygame.Rect:
        return pygame.Rect(
            x0 + col * self.cell_size,
            y0 + row * self.cell_size,
            self.cell_size - 1,
            self.cell_size - 1,
        )

    def _grid_surface(self, state: GameState) -> pygame.Surface:
        grid = state.board
        h, w = grid.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill((30, 30, 36))
        for y in range(h):
            for x in range(w):
                pygame.draw.rect(surf, _color_for_value(int(grid[y, x])), self._cell_rect(0, 0, x, y))
        block = state.current_block
        color = rgb(block.tetromino.color)
        shape = block.tetromino.shape
        for row in range(shape.shape[0]):
            for col in range(shape.shape[1]):
                if shape[row, col] and 0 <= block.y + row < h and 0 <= block.x + col < w:
                    pygame.draw.rect(surf, color, self._cell_rect(0, 0, block.x + col, block.y + row))
        return surf

    def _draw_preview(self, screen: pygame.Surface, tetromino: Tetromino, x0: int, y0: int) -> None:
        box = self.preview_cells * self.cell_size
        pygame.draw.rect(screen, (30, 30, 36), pygame.Rect(x0, y0, box, box))
        # Center the piece's matrix inside the preview box.
        off_x = x0 + (box - tetromino.width * self.cell_size) // 2
        off_y = y0 + (box - tetromino.height * self.cell_size) // 2
        color = rgb(tetromino.color)
        for row in range(tetromino.height):
            for col in range(tetromino.width):
                if tetromino.shape[row, col]:
                    pygame.draw.rect(screen, color, self._cell_rect(off_x, off_y, col, row))

    def draw(self, screen: pygame.Surface, state: GameState) -> None:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 28)
        screen.fill((10, 10, 14))
        grid_surf = self._grid_surface(state)
        screen.blit(grid_surf, (self.margin, self.margin))

        side_x = self.margin * 2 + grid_surf.get_width()
        self._draw_preview(screen, state.next_tetromino, side_x, self.margin)
        text_y = self.margin * 2 + self.preview_cells * self.cell_size
        score = self._font.render(f"Score: {state.score}", True, (230, 230, 230))
        screen.blit(score, (side_x, text_y))
        rows = self._font.render(f"Rows: {state.rows_cleared}", True, (230, 230, 230))
        screen.blit(rows, (side_x, text_y + 28))

        if state.game_over:
            text = self._font.render("Game Over - R to restart, ESC to quit", True, (255, 100, 100))
            rect = text.get_rect(center=(screen.get_width() // 2, self.margin // 2 + 4))
            screen.blit(text, rect)
        pygame.display.flip()
