"""
Best-first push search.

Frontier entries are ordered by pushes-so-far plus a heuristic.  With the
"zero" heuristic the order is breadth-first in pushes, which makes the
result push-optimal.  The "manhattan" heuristic (sum over boxes of the
distance to the nearest goal) ignores walls, but one push moves one box one
cell, so it never overestimates.  It expands fewer states and still returns
a push-optimal result.
"""

from __future__ import annotations

import heapq
import itertools
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import AbstractSet, NamedTuple

from sokobot.config import SolverConfig
from sokobot.grid import Grid
from sokobot.state import SearchState
from sokobot.successors import generate_successors

logger = logging.getLogger(__name__)

Heuristic = Callable[[SearchState], int]


# ---------------------------------------------------------------------------
# Heuristics
# ---------------------------------------------------------------------------

def manhattan_heuristic(grid: Grid) -> Heuristic:
    """Sum over boxes of the Manhattan distance to the closest goal."""
    goals = [grid.coords(g) for g in grid.goals]

    def estimate(state: SearchState) -> int:
        if not goals:
            return 0
        total = 0
        for box in state.boxes:
            r, c = grid.coords(box)
            total += min(abs(r - gr) + abs(c - gc) for gr, gc in goals)
        return total

    return estimate


def zero_heuristic(grid: Grid) -> Heuristic:
    return lambda state: 0


HEURISTIC_FACTORIES: dict[str, Callable[[Grid], Heuristic]] = {
    "manhattan": manhattan_heuristic,
    "zero": zero_heuristic,
}


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

class PredecessorEdge(NamedTuple):
    parent: SearchState
    action: str


class SearchStatus(Enum):
    GOAL = "goal"
    EXHAUSTED = "exhausted"
    BUDGET_EXCEEDED = "budget_exceeded"


@dataclass
class SearchResult:
    status: SearchStatus
    expansions: int
    goal: SearchState | None = None
    cost: int = 0
    predecessors: dict[SearchState, PredecessorEdge] = field(default_factory=dict)

    @property
    def found(self) -> bool:
        return self.status is SearchStatus.GOAL


# ---------------------------------------------------------------------------
# Driver
# ---------------------------------------------------------------------------

class SearchDriver:
    """One search over one grid.  Instances are not shared between calls."""

    def __init__(
        self,
        grid: Grid,
        config: SolverConfig | None = None,
        progress_callback: Callable[[int], None] | None = None,
    ) -> None:
        self.grid = grid
        self.config = config or SolverConfig()
        self.heuristic = HEURISTIC_FACTORIES[self.config.heuristic](grid)
        self.progress_callback = progress_callback

    def run(self, start: SearchState) -> SearchResult:
        goals: AbstractSet[int] = self.grid.goals
        best_cost: dict[SearchState, int] = {start: 0}
        predecessors: dict[SearchState, PredecessorEdge] = {}
        counter = itertools.count()     # FIFO tie-break among equal priorities
        frontier: list[tuple[int, int, int, SearchState]] = [
            (self.heuristic(start), next(counter), 0, start)
        ]
        expansions = 0

        while frontier:
            _, _, cost, state = heapq.heappop(frontier)
            if cost != best_cost[state]:
                continue    # superseded by a cheaper path

            if state.is_goal(goals):
                logger.debug("Goal reached after %d expansions", expansions)
                return SearchResult(SearchStatus.GOAL, expansions, state,
                                    cost, predecessors)

            if expansions >= self.config.max_expansions:
                logger.warning("Expansion budget of %d exhausted",
                               self.config.max_expansions)
                return SearchResult(SearchStatus.BUDGET_EXCEEDED, expansions)
            expansions += 1

            if self.progress_callback and \
               expansions % self.config.progress_interval == 0:
                self.progress_callback(expansions)

            for succ in generate_successors(self.grid, state, self.config):
                new_cost = cost + succ.cost
                known = best_cost.get(succ.state)
                if known is not None and new_cost >= known:
                    continue
                best_cost[succ.state] = new_cost
                predecessors[succ.state] = PredecessorEdge(state, succ.action)
                priority = new_cost + self.heuristic(succ.state)
                heapq.heappush(frontier,
                               (priority, next(counter), new_cost, succ.state))

        logger.debug("Frontier exhausted after %d expansions", expansions)
        return SearchResult(SearchStatus.EXHAUSTED, expansions)
