# src/mazeway/render/overlay.py
# Debug pictures of a maze: Pillow images and plain-text drawings.

from __future__ import annotations

import os
from typing import List, Optional, Sequence, Set, Tuple

from PIL import Image, ImageDraw

from .. import config
from ..config import DebugFlags
from ..grid import LEFT, UP, DoorGrid, GridPosition

FLOOR_COLOR = (220, 220, 220, 255)
WALL_COLOR = (80, 80, 80, 255)
START_COLOR = (0, 220, 0, 255)
GOAL_COLOR = (255, 220, 0, 255)
PATH_COLOR = (220, 30, 30, 255)

RGBA = Tuple[int, int, int, int]


def wall_segments(doors: DoorGrid, cell_px: int) -> List[Tuple[int, int, int, int]]:
    """Pixel line segments (x0, y0, x1, y1) for every wall; x follows columns."""
    segs = []
    for pos in doors.positions():
        x, y = pos.col * cell_px, pos.row * cell_px
        if not doors.is_open(pos, UP):
            segs.append((x, y, x + cell_px, y))
        if not doors.is_open(pos, LEFT):
            segs.append((x, y, x, y + cell_px))
    w, h = doors.cols * cell_px, doors.rows * cell_px
    segs.append((w, 0, w, h))
    segs.append((0, h, w, h))
    return segs


def render_maze(
    doors: DoorGrid,
    path: Sequence[GridPosition] = (),
    cell_px: int = 16,
    flags: Optional[DebugFlags] = None,
) -> Image.Image:
    flags = flags or config.FLAGS
    w, h = doors.cols * cell_px + 1, doors.rows * cell_px + 1
    img = Image.new("RGBA", (w, h), FLOOR_COLOR)
    draw = ImageDraw.Draw(img)

    def fill_cell(p: GridPosition, color: RGBA, inset: int = 0) -> None:
        bx, by = p.col * cell_px, p.row * cell_px
        # inclusive corners, same pixels as a pygame Rect of side cell_px - 2*inset
        draw.rectangle((bx + inset, by + inset, bx + cell_px - inset - 1, by + cell_px - inset - 1), fill=color)

    if doors.rows and doors.cols:
        fill_cell(GridPosition(0, 0), START_COLOR)
        fill_cell(GridPosition(doors.rows - 1, doors.cols - 1), GOAL_COLOR)

    if flags.show_way and path:
        inset = max(1, cell_px // 4)
        for p in path:
            fill_cell(p, PATH_COLOR, inset)

    for seg in wall_segments(doors, cell_px):
        draw.line(seg, fill=WALL_COLOR, width=1)
    return img


def save_png(img: Image.Image, out_png: str) -> None:
    parent = os.path.dirname(out_png)
    if parent:
        os.makedirs(parent, exist_ok=True)
    img.save(out_png)


def ascii_maze(doors: DoorGrid, path: Sequence[GridPosition] = ()) -> str:
    on_path: Set[GridPosition] = set(path)
    lines = []
    for r in range(doors.rows):
        top, mid = [], []
        for c in range(doors.cols):
            p = GridPosition(r, c)
            top.append("+" + ("   " if doors.is_open(p, UP) else "---"))
            mid.append((" " if doors.is_open(p, LEFT) else "|") + (" * " if p in on_path else "   "))
        lines.append("".join(top) + "+")
        lines.append("".join(mid) + "|")
    lines.append("+---" * doors.cols + "+")
    return "\n".join(lines)
