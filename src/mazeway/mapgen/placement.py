# src/mazeway/mapgen/placement.py
# Grid-space -> world-space placement for everything a maze level spawns.
#
# World frame: x grows with row, y grows with column, z = 0 on the floor.
# With cell size s, cell (r, c) is centred at (x0 + s/2 + s*r, y0 + s*c) where
#   x0 = -s - s*(R-1)/2,   y0 = -s*(C-1)/2.
# Walls sit on a (2C+1)-stride lattice per row of cells:
#   k in [0, C)     horizontal wall on the top edge of row r, column k
#   k in [C, 2C]    vertical wall on the left edge of column k-C (k == 2C is
#                   the right boundary)
# and row R holds the bottom boundary.

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, NamedTuple, Sequence, Tuple

from ..config import MazeConfig
from ..grid import LEFT, UP, DoorGrid, GridPosition

ROLE_PLAYER = "player"
ROLE_GROUND = "ground"
ROLE_WALL = "wall"
ROLE_HINT = "hint"


class Vector3(NamedTuple):
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


class Quaternion(NamedTuple):
    w: float = 1.0
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def from_angle_axis(cls, degrees: float, axis: Tuple[float, float, float]) -> "Quaternion":
        ax, ay, az = axis
        norm = math.sqrt(ax * ax + ay * ay + az * az)
        half = math.radians(degrees) / 2.0
        s = math.sin(half) / norm
        return cls(math.cos(half), ax * s, ay * s, az * s)


IDENTITY = Quaternion()
QUARTER_TURN_Z = Quaternion.from_angle_axis(90.0, (0.0, 0.0, 1.0))


@dataclass(frozen=True)
class PlacementRequest:
    role: str
    index: int
    name: str
    definition: str
    position: Vector3
    rotation: Quaternion = IDENTITY
    labels: Tuple[str, ...] = ()


def origin(rows: int, cols: int, s: float) -> Tuple[float, float]:
    return (-s - s * (rows - 1) / 2.0, -s * (cols - 1) / 2.0)


def cell_center(pos: GridPosition, rows: int, cols: int, s: float) -> Vector3:
    x0, y0 = origin(rows, cols, s)
    return Vector3(x0 + s / 2.0 + s * pos.row, y0 + s * pos.col, 0.0)


# ---------- Player ----------

def player_request(cfg: MazeConfig, start: GridPosition = GridPosition(0, 0)) -> PlacementRequest:
    return PlacementRequest(
        role=ROLE_PLAYER,
        index=0,
        name="Player",
        definition=cfg.player_definition,
        position=cell_center(start, cfg.rows, cfg.cols, cfg.cell_size),
    )


# ---------- Ground ----------

def ground_tile_counts(cfg: MazeConfig) -> Tuple[int, int]:
    width = cfg.rows * cfg.cell_size
    length = cfg.cols * cfg.cell_size
    return int(width / cfg.ground_tile_width) + 1, int(length / cfg.ground_tile_length) + 1


def ground_requests(cfg: MazeConfig) -> List[PlacementRequest]:
    s = cfg.cell_size
    gw, gl = cfg.ground_tile_width, cfg.ground_tile_length
    width, length = cfg.rows * s, cfg.cols * s
    tw, tl = ground_tile_counts(cfg)
    cx, cy = -s - s * (cfg.rows - 1) / 2.0, -s * (cfg.cols - 1) / 2.0 - s / 2.0
    out = []
    for i in range(tw * tl):
        wi, li = i % tw, i // tw
        x = cx + gw / 2.0 + gw * wi - (tw * gw - width) / 2.0
        y = cy + gl / 2.0 + gl * li - (tl * gl - length) / 2.0
        out.append(PlacementRequest(ROLE_GROUND, i, f"Ground_{i}", cfg.ground_definition, Vector3(x, y, 0.0)))
    return out


# ---------- Walls ----------

def wall_indices(doors: DoorGrid) -> List[int]:
    """Lattice index of every wall: closed Up/Left doors plus the bottom/right rim.

    A closed Right or Down door is the neighbor's closed Left or Up slot, so it
    is not listed twice.
    """
    rows, cols = doors.rows, doors.cols
    stride = 2 * cols + 1
    out = []
    for pos in doors.positions():
        i, j = pos.row, pos.col
        if not doors.is_open(pos, UP):
            out.append(i * stride + j)
        if not doors.is_open(pos, LEFT):
            out.append(i * stride + j + cols)
        if j == cols - 1:
            out.append(i * stride + j + cols + 1)
        if i == rows - 1:
            out.append(i * stride + j + stride)
    return out


def wall_request(n: int, cfg: MazeConfig) -> PlacementRequest:
    s, rows, cols = cfg.cell_size, cfg.rows, cfg.cols
    stride = 2 * cols + 1
    r, k = divmod(n, stride)
    x0, y0 = origin(rows, cols, s)
    if k < cols:
        pos, rot = Vector3(x0 + s * r, y0 + s * k, 0.0), IDENTITY
    else:
        c = k - cols
        pos, rot = Vector3(x0 + s / 2.0 + s * r, y0 - s / 2.0 + s * c, 0.0), QUARTER_TURN_Z
    return PlacementRequest(ROLE_WALL, n, f"Wall_{n}", cfg.wall_definition, pos, rot)


def wall_requests(doors: DoorGrid, cfg: MazeConfig) -> List[PlacementRequest]:
    return [wall_request(n, cfg) for n in wall_indices(doors)]


# ---------- Hints ----------

def hint_requests(path: Sequence[GridPosition], cfg: MazeConfig) -> List[PlacementRequest]:
    return [
        PlacementRequest(
            ROLE_HINT,
            i,
            f"Hint_{i}",
            cfg.hint_definition,
            cell_center(p, cfg.rows, cfg.cols, cfg.cell_size),
            labels=("hint", f"step:{i}"),
        )
        for i, p in enumerate(path)
    ]


def derive_requests(doors: DoorGrid, path: Sequence[GridPosition], cfg: MazeConfig) -> List[PlacementRequest]:
    """Order: player, ground, hints, walls."""
    out = [player_request(cfg, path[0] if path else GridPosition(0, 0))]
    out.extend(ground_requests(cfg))
    if cfg.emit_hints:
        out.extend(hint_requests(path, cfg))
    out.extend(wall_requests(doors, cfg))
    return out


__all__ = [
    "ROLE_PLAYER", "ROLE_GROUND", "ROLE_WALL", "ROLE_HINT",
    "Vector3", "Quaternion", "IDENTITY", "QUARTER_TURN_Z",
    "PlacementRequest", "origin", "cell_center",
    "player_request", "ground_tile_counts", "ground_requests",
    "wall_indices", "wall_request", "wall_requests",
    "hint_requests", "derive_requests",
]
