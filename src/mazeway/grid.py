from dataclasses import dataclass, field
from typing import Iterator, List, Sequence, Tuple

from .errors import OutOfBoundsPosition

# Door directions, clockwise from Up; index into a cell's 4-slot mask.
UP, RIGHT, DOWN, LEFT = 0, 1, 2, 3
DIRECTIONS = (UP, RIGHT, DOWN, LEFT)
OFFSETS = ((-1, 0), (0, 1), (1, 0), (0, -1))
OPPOSITE = (DOWN, LEFT, UP, RIGHT)


@dataclass(frozen=True, order=True)
class GridPosition:
    # Field order is the total order: row first, then column.
    row: int
    col: int

    def __add__(self, offset: Tuple[int, int]) -> "GridPosition":
        dr, dc = offset
        return GridPosition(self.row + dr, self.col + dc)

    def __iter__(self) -> Iterator[int]:
        yield self.row
        yield self.col

    def step(self, direction: int) -> "GridPosition":
        return self + OFFSETS[direction]

    def manhattan(self, other: "GridPosition") -> int:
        return abs(self.row - other.row) + abs(self.col - other.col)


def as_position(value) -> GridPosition:
    if isinstance(value, GridPosition):
        return value
    row, col = value
    return GridPosition(int(row), int(col))


@dataclass
class DoorGrid:
    """Per-cell Up/Right/Down/Left door flags for an R×C maze.

    Stored flat, row-major, four slots per cell, the same layout as a
    ``[row][col][dir]`` array. Doors are only ever opened in symmetric pairs
    through :meth:`open_door`.
    """

    rows: int
    cols: int
    buf: List[bool] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        if not self.buf:
            self.buf = [False] * (self.rows * self.cols * 4)
        elif len(self.buf) != self.rows * self.cols * 4:
            raise ValueError("door buffer does not match grid size")

    def idx(self, pos: GridPosition, direction: int) -> int:
        return (pos.row * self.cols + pos.col) * 4 + direction

    def in_bounds(self, pos: GridPosition) -> bool:
        return 0 <= pos.row < self.rows and 0 <= pos.col < self.cols

    def require_in_bounds(self, pos) -> GridPosition:
        pos = as_position(pos)
        if not self.in_bounds(pos):
            raise OutOfBoundsPosition(pos, self.rows, self.cols)
        return pos

    def positions(self) -> Iterator[GridPosition]:
        for r in range(self.rows):
            for c in range(self.cols):
                yield GridPosition(r, c)

    def is_open(self, pos: GridPosition, direction: int) -> bool:
        return self.buf[self.idx(pos, direction)]

    def open_door(self, pos: GridPosition, direction: int) -> GridPosition:
        """Open the door from ``pos`` toward ``direction`` and its mirror; return the neighbor."""
        other = pos.step(direction)
        if not (self.in_bounds(pos) and self.in_bounds(other)):
            raise OutOfBoundsPosition(other if self.in_bounds(pos) else pos, self.rows, self.cols)
        self.buf[self.idx(pos, direction)] = True
        self.buf[self.idx(other, OPPOSITE[direction])] = True
        return other

    def neighbors(self, pos: GridPosition) -> Iterator[Tuple[int, GridPosition]]:
        """(direction, neighbor) pairs reachable through an open door."""
        for d in DIRECTIONS:
            if self.is_open(pos, d):
                nxt = pos.step(d)
                if self.in_bounds(nxt):
                    yield d, nxt

    def door_pairs(self) -> List[Tuple[GridPosition, GridPosition]]:
        # Each pair reported once, from the cell that owns its Right/Down side.
        out = []
        for pos in self.positions():
            for d in (RIGHT, DOWN):
                if self.is_open(pos, d):
                    out.append((pos, pos.step(d)))
        return out

    def door_count(self) -> int:
        return len(self.door_pairs())

    def is_symmetric(self) -> bool:
        for pos in self.positions():
            for d in DIRECTIONS:
                if not self.is_open(pos, d):
                    continue
                nxt = pos.step(d)
                if not self.in_bounds(nxt) or not self.is_open(nxt, OPPOSITE[d]):
                    return False
        return True

    def cell_mask(self, pos: GridPosition) -> int:
        """4-bit mask, bit ``d`` set when door ``d`` is open."""
        m = 0
        for d in DIRECTIONS:
            if self.is_open(pos, d):
                m |= 1 << d
        return m

    def to_rows(self) -> List[List[int]]:
        return [[self.cell_mask(GridPosition(r, c)) for c in range(self.cols)] for r in range(self.rows)]

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "DoorGrid":
        n_rows = len(rows)
        n_cols = len(rows[0]) if n_rows else 0
        g = cls(n_rows, n_cols)
        for r, line in enumerate(rows):
            if len(line) != n_cols:
                raise ValueError("ragged door mask rows")
            for c, m in enumerate(line):
                for d in DIRECTIONS:
                    g.buf[g.idx(GridPosition(r, c), d)] = bool(m & (1 << d))
        return g

    def as_matrix(self) -> List[List[List[bool]]]:
        return [
            [[self.is_open(GridPosition(r, c), d) for d in DIRECTIONS] for c in range(self.cols)]
            for r in range(self.rows)
        ]

    @classmethod
    def from_matrix(cls, matrix: Sequence[Sequence[Sequence[bool]]]) -> "DoorGrid":
        rows = [[sum(1 << d for d in DIRECTIONS if cell[d]) for cell in line] for line in matrix]
        return cls.from_rows(rows)
