# src/mazeway/mapgen/solve.py
# Best-first (A*-style) path search over a DoorGrid with unit move cost.
#
# Open list bookkeeping
# - `open_seen[r][c]` flips to True the first time a cell is pushed and never
#   flips back; it stands in for a decrease-key capable queue.
# - A cheaper G found for a cell that is already queued (and not yet closed)
#   is written into its SearchNode record (G, cost, parent) in place. The heap
#   entry keeps its old priority and the cell is NOT pushed again.
# - Since open_seen allows one push per cell, a popped cell is never already
#   closed. The closed check on pop stays as a guard (counted in stale_pops)
#   and does not fire in practice.
# - This is relaxation without requeue. With unit edges and the Manhattan
#   heuristic the paths stay short, but it is not a full A* optimality
#   guarantee: a record relaxed after one of its children was popped does not
#   reorder anything already expanded. On a spanning-tree maze every cell has
#   exactly one route from the start, so the in-place update never fires there.
# - Heap entries are (cost, position, G). GridPosition orders by row then
#   column, so equal-cost ties pop in a fixed order and runs are reproducible.

from __future__ import annotations

import heapq
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Set, Tuple

from ..errors import UnreachableGoal
from ..grid import DoorGrid, GridPosition

logger = logging.getLogger(__name__)


@dataclass
class SearchNode:
    position: GridPosition
    g: int
    h: int
    cost: int = 0
    parent: Optional[GridPosition] = None

    def __post_init__(self) -> None:
        self.cost = self.g + self.h

    def relax(self, g: int, parent: GridPosition) -> None:
        self.g = g
        self.cost = g + self.h
        self.parent = parent


@dataclass
class SearchStats:
    expanded: int = 0
    pushed: int = 0
    stale_pops: int = 0
    relaxations: int = 0


def manhattan(a: GridPosition, b: GridPosition) -> int:
    # Admissible: each move changes one axis by exactly one.
    return abs(a.row - b.row) + abs(a.col - b.col)


class PathSolver:
    def __init__(self) -> None:
        self.stats = SearchStats()

    def solve(self, doors: DoorGrid, start, goal) -> List[GridPosition]:
        """Return the cell sequence from ``start`` to ``goal`` (both inclusive).

        Raises OutOfBoundsPosition if either end lies outside the grid, and
        UnreachableGoal if the open list runs dry first.
        """
        start = doors.require_in_bounds(start)
        goal = doors.require_in_bounds(goal)
        self.stats = stats = SearchStats()

        open_heap: List[Tuple[int, GridPosition, int]] = []
        open_seen = [[False] * doors.cols for _ in range(doors.rows)]
        closed: Set[GridPosition] = set()
        records: Dict[GridPosition, SearchNode] = {}

        root = SearchNode(start, 0, manhattan(start, goal))
        records[start] = root
        open_seen[start.row][start.col] = True
        heapq.heappush(open_heap, (root.cost, start, root.g))
        stats.pushed += 1

        found = False
        while open_heap:
            _cost, pos, _g = heapq.heappop(open_heap)
            if pos in closed:
                stats.stale_pops += 1
                continue
            closed.add(pos)
            stats.expanded += 1
            if pos == goal:
                found = True
                break

            g_next = records[pos].g + 1
            for _d, nxt in doors.neighbors(pos):
                if nxt in closed:
                    continue
                if not open_seen[nxt.row][nxt.col]:
                    node = SearchNode(nxt, g_next, manhattan(nxt, goal), parent=pos)
                    records[nxt] = node
                    open_seen[nxt.row][nxt.col] = True
                    heapq.heappush(open_heap, (node.cost, nxt, node.g))
                    stats.pushed += 1
                elif g_next < records[nxt].g:
                    records[nxt].relax(g_next, pos)
                    stats.relaxations += 1

        if not found:
            raise UnreachableGoal(start, goal)

        path = _reconstruct(records, start, goal)
        logger.debug("path %s -> %s: %d cells, %d expanded", tuple(start), tuple(goal), len(path), stats.expanded)
        return path


def _reconstruct(records: Dict[GridPosition, SearchNode], start: GridPosition, goal: GridPosition) -> List[GridPosition]:
    out = [goal]
    cur = goal
    # A parent chain longer than the record table would mean a cycle.
    for _ in range(len(records)):
        if cur == start:
            break
        node = records.get(cur)
        if node is None or node.parent is None:
            raise UnreachableGoal(start, goal)
        cur = node.parent
        out.append(cur)
    else:
        if cur != start:
            raise UnreachableGoal(start, goal)
    out.reverse()
    return out


def solve_path(doors: DoorGrid, start, goal) -> List[GridPosition]:
    return PathSolver().solve(doors, start, goal)
