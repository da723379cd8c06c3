"""Replaying move strings against a puzzle, and rendering positions."""

from __future__ import annotations

from typing import AbstractSet, Sequence

from sokobot.grid import DIRECTIONS, Cell, Direction, Grid
from sokobot.parsing import Puzzle


class IllegalMoveError(ValueError):
    """A move walks into a wall or pushes a box where it cannot go."""

    def __init__(self, index: int, move: str, reason: str) -> None:
        super().__init__(f"Move {index} ({move!r}): {reason}")
        self.index = index
        self.move = move
        self.reason = reason


def replay_moves(
    puzzle: Puzzle,
    moves: str,
    directions: Sequence[Direction] = DIRECTIONS,
) -> tuple[int, frozenset[int]]:
    """Apply every move and return the final (player, boxes)."""
    if puzzle.player is None:
        raise ValueError("Puzzle has no player to move.")
    by_char = {d.char: d for d in directions}
    grid = puzzle.grid
    player = puzzle.player
    boxes = set(puzzle.boxes)

    for i, ch in enumerate(moves):
        d = by_char.get(ch)
        if d is None:
            raise IllegalMoveError(i, ch, "unknown move character")
        nxt = grid.step(player, d)
        if nxt is None or grid.is_wall(nxt):
            raise IllegalMoveError(i, ch, "player walks into a wall")
        if nxt in boxes:
            beyond = grid.step(nxt, d)
            if beyond is None or grid.is_wall(beyond):
                raise IllegalMoveError(i, ch, "box pushed into a wall")
            if beyond in boxes:
                raise IllegalMoveError(i, ch, "box pushed into another box")
            boxes.remove(nxt)
            boxes.add(beyond)
        player = nxt

    return player, frozenset(boxes)


def is_solution(puzzle: Puzzle, moves: str,
                directions: Sequence[Direction] = DIRECTIONS) -> bool:
    try:
        _, boxes = replay_moves(puzzle, moves, directions)
    except ValueError:
        return False
    return boxes <= puzzle.grid.goals


def render_state(grid: Grid, player: int | None, boxes: AbstractSet[int]) -> str:
    """Render a position as a Sokoban level string."""
    lines = []
    for r in range(grid.rows):
        row = []
        for c in range(grid.cols):
            pos = grid.index(r, c)
            cell = grid.cells[pos]
            on_goal = cell is Cell.GOAL
            if cell is Cell.WALL:
                row.append("#")
            elif pos in boxes:
                row.append("*" if on_goal else "$")
            elif pos == player:
                row.append("+" if on_goal else "@")
            else:
                row.append(cell.value)
        lines.append("".join(row).rstrip())
    return "\n".join(lines)
