"""Sokobot: push-based Sokoban solver."""

from sokobot.config import SolverConfig
from sokobot.parsing import Puzzle, parse_layers, parse_level
from sokobot.solver import Outcome, Solution, solve, solve_puzzle, solve_sokoban_puzzle

__all__ = [
    "Outcome",
    "Puzzle",
    "Solution",
    "SolverConfig",
    "parse_layers",
    "parse_level",
    "solve",
    "solve_puzzle",
    "solve_sokoban_puzzle",
]
