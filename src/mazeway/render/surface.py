# src/mazeway/render/surface.py
from __future__ import annotations

from typing import Optional, Sequence

import pygame

from .. import config
from ..config import DebugFlags
from ..grid import DoorGrid, GridPosition
from .overlay import FLOOR_COLOR, GOAL_COLOR, PATH_COLOR, START_COLOR, WALL_COLOR, wall_segments


def surface_size(doors: DoorGrid, cell_px: int):
    return doors.cols * cell_px + 1, doors.rows * cell_px + 1


def draw_maze(
    surface: pygame.Surface,
    doors: DoorGrid,
    path: Sequence[GridPosition] = (),
    cell_px: int = 16,
    flags: Optional[DebugFlags] = None,
) -> None:
    """Draw floor, start/goal, the hint path (when show_way) and walls.

    Works on any Surface; no display has to be open.
    """
    flags = flags or config.FLAGS
    surface.fill(FLOOR_COLOR)

    def fill_cell(p: GridPosition, color, inset: int = 0) -> None:
        rect = pygame.Rect(p.col * cell_px + inset, p.row * cell_px + inset,
                           cell_px - 2 * inset, cell_px - 2 * inset)
        pygame.draw.rect(surface, color, rect)

    if doors.rows and doors.cols:
        fill_cell(GridPosition(0, 0), START_COLOR)
        fill_cell(GridPosition(doors.rows - 1, doors.cols - 1), GOAL_COLOR)

    if flags.show_way:
        inset = max(1, cell_px // 4)
        for p in path:
            fill_cell(p, PATH_COLOR, inset)

    for x0, y0, x1, y1 in wall_segments(doors, cell_px):
        pygame.draw.line(surface, WALL_COLOR, (x0, y0), (x1, y1), 1)
