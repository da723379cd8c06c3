"""
Successor generation.

One successor per legal single-box push.  Boxes are visited in canonical
(ascending) order and directions in configuration order, so the output
order is reproducible.
"""

from __future__ import annotations

import logging
from typing import Iterator, NamedTuple

from sokobot.config import SolverConfig
from sokobot.grid import Direction, Grid
from sokobot.reachability import reachable_set, shortest_walk
from sokobot.state import SearchState

logger = logging.getLogger(__name__)

PUSH_COST = 1


class Successor(NamedTuple):
    state: SearchState
    action: str     # walk characters followed by one push character
    cost: int


def generate_successors(
    grid: Grid,
    state: SearchState,
    config: SolverConfig,
) -> Iterator[Successor]:
    box_set = frozenset(state.boxes)
    reachable = reachable_set(grid, state.player, box_set, config.directions)

    for i, box in enumerate(state.boxes):
        for d in config.directions:
            dest = _legal_push(grid, box, d, box_set, reachable, config)
            if dest is None:
                continue
            origin = grid.step(box, d, -1)
            walk = shortest_walk(grid, state.player, origin, box_set,
                                 config.directions)
            if walk is None:
                logger.error(
                    "Walk reconstruction failed for a reachable tile: "
                    "player=%s origin=%s boxes=%s",
                    grid.coords(state.player), grid.coords(origin),
                    [grid.coords(b) for b in state.boxes],
                )
                continue
            yield Successor(state.push(i, dest), walk + d.char, PUSH_COST)


def _legal_push(
    grid: Grid,
    box: int,
    d: Direction,
    box_set: frozenset[int],
    reachable: set[int],
    config: SolverConfig,
) -> int | None:
    """Return the box's destination if pushing it along ``d`` is legal."""
    origin = grid.step(box, d, -1)
    dest = grid.step(box, d)
    if origin is None or dest is None:
        return None
    if grid.is_wall(dest) or dest in box_set:
        return None
    if origin not in reachable:
        return None
    if config.deadlock_pruning and grid.statically_dead(dest):
        return None
    return dest
