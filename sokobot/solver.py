"""
Sokobot: push-optimising Sokoban solver.

Ties the pieces together: parse the input, reject what cannot be solved,
run the best-first push search and turn the predecessor links into a
move string over u/d/l/r.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from sokobot.config import SolverConfig
from sokobot.parsing import Layer, Puzzle, parse_layers, parse_level
from sokobot.path import reconstruct_moves
from sokobot.search import SearchDriver, SearchStatus
from sokobot.state import SearchState

logger = logging.getLogger(__name__)


class Outcome(Enum):
    SOLVED = "solved"
    INVALID = "invalid"                 # no player or no boxes
    UNSOLVABLE = "unsolvable"           # proved before searching
    EXHAUSTED = "exhausted"             # every reachable state tried
    BUDGET_EXCEEDED = "budget_exceeded"


@dataclass
class Solution:
    moves: str
    pushes: int
    states_explored: int
    outcome: Outcome

    @property
    def solved(self) -> bool:
        return self.outcome is Outcome.SOLVED


_STATUS_OUTCOMES = {
    SearchStatus.EXHAUSTED: Outcome.EXHAUSTED,
    SearchStatus.BUDGET_EXCEEDED: Outcome.BUDGET_EXCEEDED,
}


def solve_puzzle(
    puzzle: Puzzle,
    config: SolverConfig | None = None,
    progress_callback: Callable[[int], None] | None = None,
) -> Solution:
    """Solve a parsed Puzzle.  Never raises for malformed puzzles."""
    config = config or SolverConfig()
    grid = puzzle.grid

    if puzzle.player is None or not puzzle.boxes:
        logger.debug("Invalid puzzle: player=%s boxes=%d",
                     puzzle.player, len(puzzle.boxes))
        return Solution("", 0, 0, Outcome.INVALID)

    start = SearchState.canonical(puzzle.boxes, puzzle.player)
    if start.is_goal(grid.goals):
        return Solution("", 0, 0, Outcome.SOLVED)

    if len(puzzle.boxes) > len(grid.goals):
        logger.debug("Unsolvable: %d boxes, %d goals",
                     len(puzzle.boxes), len(grid.goals))
        return Solution("", 0, 0, Outcome.UNSOLVABLE)
    if config.deadlock_pruning and any(grid.statically_dead(b)
                                       for b in start.boxes):
        logger.debug("Unsolvable: a box starts on a dead cell")
        return Solution("", 0, 0, Outcome.UNSOLVABLE)

    driver = SearchDriver(grid, config, progress_callback)
    result = driver.run(start)
    if not result.found:
        return Solution("", 0, result.expansions, _STATUS_OUTCOMES[result.status])

    moves = reconstruct_moves(result.goal, result.predecessors)
    logger.info("Solved in %d pushes (%d moves), %d states explored",
                result.cost, len(moves), result.expansions)
    return Solution(moves, result.cost, result.expansions, Outcome.SOLVED)


def solve(level_text: str, config: SolverConfig | None = None) -> Solution:
    """Solve a level given in the standard text format."""
    return solve_puzzle(parse_level(level_text), config)


def solve_sokoban_puzzle(
    width: int,
    height: int,
    map_data: Layer,
    items_data: Layer | None = None,
    config: SolverConfig | None = None,
) -> str:
    """Return the full move string, or "" when already solved, malformed
    or not solved within the budget."""
    puzzle = parse_layers(width, height, map_data, items_data)
    return solve_puzzle(puzzle, config).moves
