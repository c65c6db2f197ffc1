# src/mazeway/mapgen/carve.py
# Spanning-tree maze carve over an R×C grid by region merging.
# Every cell starts as its own region; a door is only ever opened between two
# different regions, so the open-door graph can never close a cycle.

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from ..config import MAX_CELLS, validate_size
from ..grid import DIRECTIONS, DoorGrid, GridPosition
from ..rng import PMRandom

logger = logging.getLogger(__name__)


class GridTopologyBuilder:
    """Build a DoorGrid whose open doors form a tree spanning every cell.

    Cells are visited row-major. Each cell picks one direction uniformly among
    the in-bounds neighbors that currently sit in another region, opens that
    door pair and merges the two regions. A cell with no such neighbor is
    skipped and the scan moves on to the next cell.

    ``rng`` is anything with ``index(n) -> 0..n-1``; a fresh clock-seeded
    :class:`PMRandom` is used when none is given.
    """

    def __init__(self, rng=None, *, max_cells: int = MAX_CELLS) -> None:
        self.rng = rng if rng is not None else PMRandom.from_time()
        self.max_cells = max_cells

    def build(self, rows: int, cols: int) -> DoorGrid:
        validate_size(rows, cols, self.max_cells)

        doors = DoorGrid(rows, cols)
        # region id per cell, and region id -> member cells
        region: List[List[int]] = [[r * cols + c for c in range(cols)] for r in range(rows)]
        members: Dict[int, List[GridPosition]] = {
            r * cols + c: [GridPosition(r, c)] for r in range(rows) for c in range(cols)
        }

        skipped = 0
        for pos in doors.positions():
            here = region[pos.row][pos.col]
            candidates = []
            for d in DIRECTIONS:
                nxt = pos.step(d)
                if doors.in_bounds(nxt) and region[nxt.row][nxt.col] != here:
                    candidates.append(d)
            if not candidates:
                skipped += 1
                continue

            direction = candidates[self.rng.index(len(candidates))]
            other = doors.open_door(pos, direction)
            _merge(region, members, here, region[other.row][other.col])

        logger.debug("carved %dx%d maze into %d region(s), %d cells without candidates",
                     rows, cols, len(members), skipped)
        return doors


def _merge(region: List[List[int]], members: Dict[int, List[GridPosition]], keep: int, other: int) -> int:
    """Fold one region into the other; relabel only the smaller side."""
    if len(members[other]) > len(members[keep]):
        keep, other = other, keep
    absorbed = members.pop(other)
    for p in absorbed:
        region[p.row][p.col] = keep
    members[keep].extend(absorbed)
    return keep


def carve_spanning_tree(rows: int, cols: int, rng: Optional[PMRandom] = None) -> DoorGrid:
    return GridTopologyBuilder(rng).build(rows, cols)
