# src/mazeway/errors.py
# Failure kinds raised by the builder, the solver and the orchestrator.

from __future__ import annotations

from typing import Optional


class MazeError(Exception):
    """Base class for every maze generation failure."""


class InvalidConfiguration(MazeError, ValueError):
    """Row/column counts (or derived sizes) are unusable; nothing was mutated."""


class OutOfBoundsPosition(MazeError, IndexError):
    def __init__(self, position, rows: int, cols: int) -> None:
        self.position = position
        self.rows = rows
        self.cols = cols
        super().__init__(f"position {tuple(position)} outside {rows}x{cols} grid")


class UnreachableGoal(MazeError):
    def __init__(self, start, goal) -> None:
        self.start = start
        self.goal = goal
        super().__init__(f"open list exhausted before reaching {tuple(goal)} from {tuple(start)}")


class EntityCreationFailure(MazeError):
    """Raised (or signalled with None) by a level that could not create an entity."""

    def __init__(self, role: str, name: str, reason: Optional[str] = None) -> None:
        self.role = role
        self.name = name
        self.reason = reason
        msg = f"could not create {role} entity {name!r}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


__all__ = [
    "MazeError",
    "InvalidConfiguration",
    "OutOfBoundsPosition",
    "UnreachableGoal",
    "EntityCreationFailure",
]
