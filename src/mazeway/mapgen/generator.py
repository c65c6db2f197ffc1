# src/mazeway/mapgen/generator.py
# Pure maze pipeline: carve -> solve corner to corner -> derive placements.
# No level interaction; the orchestrator emits what this returns.

from dataclasses import dataclass, field
from typing import List, Optional

from ..config import MazeConfig
from ..grid import DoorGrid, GridPosition
from .carve import GridTopologyBuilder
from .placement import PlacementRequest, derive_requests
from .solve import PathSolver


@dataclass
class MazeLayout:
    config: MazeConfig
    doors: DoorGrid
    path: List[GridPosition]
    requests: List[PlacementRequest] = field(default_factory=list)

    @property
    def start(self) -> GridPosition:
        return GridPosition(0, 0)

    @property
    def goal(self) -> GridPosition:
        return GridPosition(self.config.rows - 1, self.config.cols - 1)


def generate_layout(cfg: MazeConfig, rng=None, ticker=None) -> MazeLayout:
    cfg.validate()
    start, goal = GridPosition(0, 0), GridPosition(cfg.rows - 1, cfg.cols - 1)

    doors = GridTopologyBuilder(rng, max_cells=cfg.max_cells).build(cfg.rows, cfg.cols)
    _tick(ticker, "build")
    path = PathSolver().solve(doors, start, goal)
    _tick(ticker, "solve")
    requests = derive_requests(doors, path, cfg)
    _tick(ticker, "derive")
    return MazeLayout(cfg, doors, path, requests)


def _tick(ticker: Optional[object], label: str) -> None:
    if ticker is not None:
        ticker.tick(label)
