import time
from dataclasses import dataclass
from typing import Sequence, TypeVar

A = 16807
M = 0x7FFFFFFF  # 2^31-1
# modular inverse of A (so we can step backward exactly)
INV_A = 1407677000  # because (A * INV_A) % M == 1

T = TypeVar("T")


def pm_next(state: int) -> int:
    return (state * A) % M


def pm_prev(state: int) -> int:
    return (state * INV_A) % M


def normalize_seed(seed: int) -> int:
    # 0 (and multiples of M) would pin the generator at zero forever.
    s = int(seed) % M
    return s if s != 0 else 1


@dataclass
class PMRandom:
    """Park–Miller minimal-standard generator; the maze builder's random state.

    Owned by whoever builds the maze, never global, so two builders seeded
    alike produce the same doors.
    """

    state: int

    def __post_init__(self) -> None:
        self.state = normalize_seed(self.state)

    @classmethod
    def from_time(cls) -> "PMRandom":
        return cls(time.time_ns() & M)

    def next32(self) -> int:
        self.state = pm_next(self.state)
        return self.state

    def bounded(self, n: int) -> int:
        """Return 1..n inclusive."""
        if n <= 0:
            raise ValueError("bounded() needs n > 0")
        return (self.next32() % n) + 1

    def index(self, n: int) -> int:
        """Return 0..n-1."""
        return self.bounded(n) - 1

    def pick(self, seq: Sequence[T]) -> T:
        return seq[self.index(len(seq))]
