"""
Static level geometry.

A Grid classifies every cell as wall, floor or goal and precomputes the
corner dead cells once.  Positions are linearized integers
(row * cols + col) so search states hash as plain int tuples.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, NamedTuple, Sequence


# ---------------------------------------------------------------------------
# Cells & directions
# ---------------------------------------------------------------------------

class Cell(Enum):
    WALL = "#"
    FLOOR = " "
    GOAL = "."


class Direction(NamedTuple):
    dr: int
    dc: int
    char: str

UP    = Direction(-1,  0, "u")
DOWN  = Direction( 1,  0, "d")
LEFT  = Direction( 0, -1, "l")
RIGHT = Direction( 0,  1, "r")
DIRECTIONS = (UP, DOWN, LEFT, RIGHT)

# The four orthogonal corner shapes, as pairs of neighbour offsets.
_CORNERS = ((UP, LEFT), (UP, RIGHT), (DOWN, LEFT), (DOWN, RIGHT))


# ---------------------------------------------------------------------------
# Grid
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Grid:
    """Immutable rows x cols board.  ``cells`` is row-major."""
    rows: int
    cols: int
    cells: tuple[Cell, ...]
    goals: frozenset[int] = field(init=False)
    dead_cells: frozenset[int] = field(init=False)

    def __post_init__(self) -> None:
        if len(self.cells) != self.rows * self.cols:
            raise ValueError(
                f"Grid needs {self.rows * self.cols} cells, got {len(self.cells)}"
            )
        goals = frozenset(
            pos for pos, cell in enumerate(self.cells) if cell is Cell.GOAL
        )
        object.__setattr__(self, "goals", goals)
        object.__setattr__(self, "dead_cells", self._compute_dead_cells())

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Cell]]) -> Grid:
        height = len(rows)
        width = max((len(row) for row in rows), default=0)
        cells: list[Cell] = []
        for row in rows:
            cells.extend(row)
            cells.extend([Cell.FLOOR] * (width - len(row)))
        return cls(height, width, tuple(cells))

    # -- coordinates --------------------------------------------------------

    def index(self, row: int, col: int) -> int:
        return row * self.cols + col

    def coords(self, pos: int) -> tuple[int, int]:
        return divmod(pos, self.cols)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def step(self, pos: int, d: Direction, distance: int = 1) -> int | None:
        """Position ``distance`` cells from ``pos`` along ``d``, or None when
        that leaves the board."""
        r, c = divmod(pos, self.cols)
        nr, nc = r + d.dr * distance, c + d.dc * distance
        if not self.in_bounds(nr, nc):
            return None
        return nr * self.cols + nc

    # -- classification -----------------------------------------------------

    def classify(self, row: int, col: int) -> Cell:
        return self.cells[self.index(row, col)]

    def is_wall(self, pos: int) -> bool:
        return self.cells[pos] is Cell.WALL

    def is_wall_or_outside(self, row: int, col: int) -> bool:
        if not self.in_bounds(row, col):
            return True
        return self.classify(row, col) is Cell.WALL

    def statically_dead(self, pos: int) -> bool:
        return pos in self.dead_cells

    def open_neighbours(
        self, pos: int, directions: Sequence[Direction] = DIRECTIONS
    ) -> Iterator[tuple[Direction, int]]:
        """Yield (direction, neighbour) for every in-bounds non-wall neighbour."""
        for d in directions:
            nxt = self.step(pos, d)
            if nxt is not None and not self.is_wall(nxt):
                yield d, nxt

    # -- dead cells ---------------------------------------------------------

    def _compute_dead_cells(self) -> frozenset[int]:
        """Non-goal floor cells boxed in by two perpendicular walls (or the
        board edge).  A box pushed there can never move again."""
        dead: set[int] = set()
        for pos, cell in enumerate(self.cells):
            if cell is not Cell.FLOOR:
                continue
            r, c = divmod(pos, self.cols)
            for a, b in _CORNERS:
                if self.is_wall_or_outside(r + a.dr, c + a.dc) and \
                   self.is_wall_or_outside(r + b.dr, c + b.dc):
                    dead.add(pos)
                    break
        return frozenset(dead)
