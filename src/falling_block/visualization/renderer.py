from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
import pygame

from falling_block.game import ActivePiece
from falling_block.game.shapes import color_for


def _rgb(hex_color: str) -> Tuple[int, int, int]:
    h = hex_color.lstrip("#")
    return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)


def _color_for_value(v: int) -> Tuple[int, int, int]:
    if v == 0:
        return (20, 20, 26)
    return _rgb(color_for(abs(v)))


class Renderer:
    def __init__(self, cell_size: int = 30, margin: int = 20) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.screen: Optional[pygame.Surface] = None

    def window_size(self, cols: int, rows: int) -> Tuple[int, int]:
        return cols * self.cell_size + self.margin * 2, rows * self.cell_size + self.margin * 2

    def _cell_rect(self, x: int, y: int) -> pygame.Rect:
        return pygame.Rect(x * self.cell_size, y * self.cell_size, self.cell_size - 2, self.cell_size - 2)

    def _grid_surface(self, board: np.ndarray, piece: Optional[ActivePiece]) -> pygame.Surface:
        h, w = board.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill((30, 30, 36))
        for y in range(h):
            for x in range(w):
                pygame.draw.rect(surf, _color_for_value(int(board[y, x])), self._cell_rect(x, y))
        if piece is not None:
            color = _rgb(piece.color)
            for x, y in piece.cells():
                if 0 <= y < h:
                    pygame.draw.rect(surf, color, self._cell_rect(x, y))
                    pygame.draw.rect(surf, (255, 255, 255), self._cell_rect(x, y), 1)
        return surf

    def draw(self, board: np.ndarray, piece: Optional[ActivePiece]) -> None:
        """Render callback: draws the settled board and the falling piece, never mutating either."""
        if self.screen is None:
            return
        self.screen.fill((10, 10, 14))
        self.screen.blit(self._grid_surface(board, piece), (self.margin, self.margin))

    def draw_banner(self, text: str, font: pygame.font.Font) -> None:
        if self.screen is None:
            return
        img = font.render(text, True, (255, 255, 255))
        rect = img.get_rect(center=(self.screen.get_width() // 2, self.margin // 2 + 2))
        self.screen.blit(img, rect)
