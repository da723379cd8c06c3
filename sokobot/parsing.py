"""
Level input.

Two encodings are accepted: a static map layer (walls, floor, goals) plus
a separate items layer (player, boxes), or a single combined layer in the
standard Sokoban text format:

  # = wall, ' ' = floor, . = goal, $ = box, @ = player,
  * = box on goal, + = player on goal
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from sokobot.grid import Cell, Grid

Layer = Sequence[Sequence[str]]

PLAYER_CHARS = frozenset("@+")
BOX_CHARS = frozenset("$*")
GOAL_CHARS = frozenset(".+*")


@dataclass(frozen=True)
class Puzzle:
    grid: Grid
    player: int | None
    boxes: tuple[int, ...]

    def problems(self) -> list[str]:
        """Human-readable reasons this puzzle cannot be solved as given."""
        found: list[str] = []
        if self.player is None:
            found.append("Level has no player (@).")
        elif self.grid.is_wall(self.player):
            found.append("Player is inside a wall.")
        if not self.boxes:
            found.append("Level has no boxes ($).")
        elif any(self.grid.is_wall(b) for b in self.boxes):
            found.append("A box is inside a wall.")
        if len(self.boxes) > len(self.grid.goals):
            found.append(
                f"Box count ({len(self.boxes)}) exceeds "
                f"goal count ({len(self.grid.goals)})."
            )
        return found


def parse_layers(
    width: int,
    height: int,
    map_data: Layer,
    items_data: Layer | None = None,
) -> Puzzle:
    """Build a Puzzle from a map layer and an optional items layer.

    When the items layer is missing, or has no player or no boxes, the map
    layer is read again as a combined grid.
    """
    goals: set[int] = set()
    boxes: set[int] = set()
    player: int | None = None

    if items_data is not None:
        for r in range(height):
            for c in range(width):
                ch = _char_at(items_data, r, c)
                pos = r * width + c
                if ch in PLAYER_CHARS:
                    player = pos
                if ch in BOX_CHARS:
                    boxes.add(pos)
                if ch in GOAL_CHARS:
                    goals.add(pos)

    combined = player is None or not boxes
    walls: set[int] = set()
    for r in range(height):
        for c in range(width):
            ch = _char_at(map_data, r, c)
            pos = r * width + c
            if ch == "#":
                walls.add(pos)
            elif ch == ".":
                goals.add(pos)
            elif combined:
                if ch in PLAYER_CHARS and player is None:
                    player = pos
                if ch in BOX_CHARS:
                    boxes.add(pos)
                if ch in GOAL_CHARS:
                    goals.add(pos)

    rows = [
        [_cell_kind(r * width + c, walls, goals) for c in range(width)]
        for r in range(height)
    ]
    return Puzzle(Grid.from_rows(rows), player, tuple(sorted(boxes)))


def _cell_kind(pos: int, walls: set[int], goals: set[int]) -> Cell:
    if pos in walls:
        return Cell.WALL
    if pos in goals:
        return Cell.GOAL
    return Cell.FLOOR


def parse_level(text: str) -> Puzzle:
    """Parse a standard Sokoban level string."""
    lines = text.rstrip("\n").split("\n")
    if not any(line.strip() for line in lines):
        raise ValueError("Empty level.")
    height = len(lines)
    width = max(len(line) for line in lines)
    return parse_layers(width, height, lines)


def load_levels(path: str) -> list[str]:
    """Read a level collection file.

    Lines starting with ';' are comments or level numbers; blank lines
    separate levels.
    """
    levels: list[str] = []
    cur: list[str] = []
    with open(path, "r", encoding="utf-8") as f:
        for raw in f:
            line = raw.rstrip("\n")
            if line.startswith(";"):
                continue
            if not line.strip():
                if cur:
                    levels.append("\n".join(cur))
                    cur = []
                continue
            cur.append(line)
    if cur:
        levels.append("\n".join(cur))
    return levels


def _char_at(layer: Layer, r: int, c: int) -> str:
    if r >= len(layer) or c >= len(layer[r]):
        return " "
    return layer[r][c]
