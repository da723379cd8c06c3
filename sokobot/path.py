"""Move-string reconstruction from predecessor links."""

from __future__ import annotations

from typing import Mapping

from sokobot.search import PredecessorEdge
from sokobot.state import SearchState


def reconstruct_moves(
    goal: SearchState,
    predecessors: Mapping[SearchState, PredecessorEdge],
) -> str:
    """Walk parent links from ``goal`` back to the start state (the only
    state without a predecessor) and join the actions in play order."""
    actions: list[str] = []
    state = goal
    while state in predecessors:
        edge = predecessors[state]
        actions.append(edge.action)
        state = edge.parent
    actions.reverse()
    return "".join(actions)
