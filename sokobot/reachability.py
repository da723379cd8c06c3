"""
Player reachability.

Both searches only walk: a box is an obstacle exactly like a wall.
"""

from __future__ import annotations

from collections import deque
from typing import AbstractSet, Sequence

from sokobot.grid import DIRECTIONS, Direction, Grid


def reachable_set(
    grid: Grid,
    player: int,
    boxes: AbstractSet[int],
    directions: Sequence[Direction] = DIRECTIONS,
) -> set[int]:
    """Return every cell the player can walk to from ``player``."""
    visited: set[int] = {player}
    queue: deque[int] = deque([player])
    while queue:
        pos = queue.popleft()
        for _, nb in grid.open_neighbours(pos, directions):
            if nb not in boxes and nb not in visited:
                visited.add(nb)
                queue.append(nb)
    return visited


def shortest_walk(
    grid: Grid,
    start: int,
    end: int,
    boxes: AbstractSet[int],
    directions: Sequence[Direction] = DIRECTIONS,
) -> str | None:
    """Shortest walking path from ``start`` to ``end`` as move characters.

    Returns "" when start == end and None when ``end`` is unreachable.
    """
    if start == end:
        return ""

    # parent[pos] = (previous pos, move char that stepped onto pos)
    parent: dict[int, tuple[int, str]] = {}
    visited: set[int] = {start}
    queue: deque[int] = deque([start])
    while queue:
        pos = queue.popleft()
        for d, nb in grid.open_neighbours(pos, directions):
            if nb in boxes or nb in visited:
                continue
            visited.add(nb)
            parent[nb] = (pos, d.char)
            if nb == end:
                return _walk_back(parent, start, end)
            queue.append(nb)
    return None


def _walk_back(parent: dict[int, tuple[int, str]], start: int, end: int) -> str:
    moves: list[str] = []
    pos = end
    while pos != start:
        pos, ch = parent[pos]
        moves.append(ch)
    moves.reverse()
    return "".join(moves)
