# src/mazeway/engine/timing.py
# Per-phase wall-clock timing for one generation run.

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, List

logger = logging.getLogger(__name__)


@dataclass
class PhaseTicker:
    """Each ``tick(label)`` closes the phase that started at the previous tick."""

    clock: Callable[[], float] = time.perf_counter
    phase_ms: Dict[str, float] = field(default_factory=dict)
    ticks: List[float] = field(default_factory=list)

    def __post_init__(self) -> None:
        self._start = self.clock()

    def tick(self, label: str) -> float:
        now = self.clock()
        ms = (now - self._start) * 1000.0
        self._start = now
        self.ticks.append(ms)
        self.phase_ms[label] = self.phase_ms.get(label, 0.0) + ms
        logger.debug("phase %s took %.3fms", label, ms)
        return ms

    def average_ms(self) -> float:
        if not self.ticks:
            return 0.0
        return sum(self.ticks) / len(self.ticks)

    def log_summary(self) -> None:
        logger.info("All operations have been completed, each operation cost %.3fms on average.", self.average_ms())
