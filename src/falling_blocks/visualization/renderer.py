from __future__ import annotations

from typing import Tuple

import numpy as np
import pygame

from falling_blocks.game import PIECE_COLORS, PieceType

EMPTY_COLOR = (20, 20, 26)


def _color_for_value(v: int) -> Tuple[int, int, int]:
    if v == 0:
        return EMPTY_COLOR
    try:
        return PIECE_COLORS[PieceType(abs(v))]
    except ValueError:
        return (200, 200, 200)


def observation_to_rgb(obs: np.ndarray, cell: int = 12) -> np.ndarray:
    h, w = obs.shape
    img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
    for y in range(h):
        for x in range(w):
            img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = _color_for_value(int(obs[y, x]))
    return img


class Renderer:
    def __init__(self, cell_size: int = 30, margin: int = 20) -> None:
        self.cell_size = cell_size
        self.margin = margin

    def window_size(self, width: int, height: int) -> Tuple[int, int]:
        return width * self.cell_size + self.margin * 2, height * self.cell_size + self.margin * 2

    def _grid_surface(self, obs: np.ndarray) -> pygame.Surface:
        h, w = obs.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill((30, 30, 36))
        for y in range(h):
            for x in range(w):
                rect = pygame.Rect(
                    x * self.cell_size,
                    y * self.cell_size,
                    self.cell_size - 1,
                    self.cell_size - 1,
                )
                pygame.draw.rect(surf, _color_for_value(int(obs[y, x])), rect)
        return surf

    def draw(self, screen: pygame.Surface, obs: np.ndarray) -> None:
        screen.fill((10, 10, 14))
        screen.blit(self._grid_surface(obs), (self.margin, self.margin))
