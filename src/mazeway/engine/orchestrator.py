# src/mazeway/engine/orchestrator.py
# MazeOrchestrator: owns the maze size, runs carve -> solve -> placement and
# pushes the result into a level.
#
# Ordering inside generate():
#   1) validate size            (fatal; nothing touched yet)
#   2) build + solve + derive   (pure; a failure here leaves the level as it was)
#   3) clear removable entities
#   4) create/position every placement (creation failures are skipped)
# Phases 2-4 are timed with PhaseTicker and summarised in the log.

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional

from ..config import MazeConfig, validate_size
from ..errors import EntityCreationFailure
from ..grid import DoorGrid, GridPosition
from ..mapgen.generator import MazeLayout, generate_layout
from ..mapgen.placement import ROLE_PLAYER, PlacementRequest
from ..rng import PMRandom
from .level import Handle, Level
from .timing import PhaseTicker

logger = logging.getLogger(__name__)


@dataclass
class GenerationReport:
    layout: MazeLayout
    created: Dict[str, Handle] = field(default_factory=dict)
    skipped: List[str] = field(default_factory=list)
    removed: int = 0
    phase_ms: Dict[str, float] = field(default_factory=dict)


class MazeOrchestrator:
    """Drives one maze (re)generation into an explicitly passed level.

    The random state is created once per orchestrator (clock-seeded unless one
    is injected), so repeated ``generate`` calls yield different mazes while a
    seeded PMRandom reproduces them exactly.
    """

    def __init__(self, config: Optional[MazeConfig] = None, rng=None) -> None:
        self._config = config if config is not None else MazeConfig()
        self.rng = rng if rng is not None else PMRandom.from_time()
        self._layout: Optional[MazeLayout] = None

    # ---- Configuration ----
    @property
    def config(self) -> MazeConfig:
        return self._config

    @property
    def rows(self) -> int:
        return self._config.rows

    @property
    def cols(self) -> int:
        return self._config.cols

    def configure(self, rows: int, cols: int) -> None:
        validate_size(rows, cols, self._config.max_cells)
        self._config = replace(self._config, rows=rows, cols=cols)

    # ---- Last result ----
    @property
    def doors(self) -> Optional[DoorGrid]:
        return self._layout.doors if self._layout else None

    @property
    def path(self) -> List[GridPosition]:
        return list(self._layout.path) if self._layout else []

    # ---- Generation ----
    def generate(self, level: Level) -> GenerationReport:
        cfg = self._config.validate()
        logger.info("generating %dx%d maze", cfg.rows, cfg.cols)

        ticker = PhaseTicker()
        layout = generate_layout(cfg, self.rng, ticker)
        logger.info("Path generate success! %d cells from %s to %s",
                    len(layout.path), tuple(layout.start), tuple(layout.goal))

        report = GenerationReport(layout=layout)
        report.removed = self._clear(level)
        ticker.tick("clear")

        for req in layout.requests:
            handle = self._emit(level, req)
            if handle is None:
                report.skipped.append(req.name)
            else:
                report.created[req.name] = handle
        ticker.tick("emit")

        if report.skipped:
            logger.warning("%d of %d placements skipped", len(report.skipped), len(layout.requests))
        report.phase_ms = dict(ticker.phase_ms)
        ticker.log_summary()
        self._layout = layout
        return report

    def _clear(self, level: Level) -> int:
        handles = list(level.removable_entities())
        for h in handles:
            level.remove_entity(h)
        logger.debug("removed %d entities", len(handles))
        return len(handles)

    def _emit(self, level: Level, req: PlacementRequest) -> Optional[Handle]:
        try:
            handle = level.create_entity(req.role, req.definition, req.name, req.labels)
        except EntityCreationFailure as exc:
            logger.warning("skipping %s: %s", req.name, exc)
            return None
        if handle is None:
            logger.warning("skipping %s: level returned no handle", req.name)
            return None
        level.set_world_position(handle, req.position)
        level.set_world_rotation(handle, req.rotation)
        if req.role == ROLE_PLAYER:
            level.set_active_character(handle)
        return handle
