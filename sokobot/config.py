"""Solver configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Any, Mapping

from sokobot.grid import DIRECTIONS, Direction

MAX_EXPANSIONS = 500_000
HEURISTICS = ("manhattan", "zero")

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class SolverConfig:
    directions: tuple[Direction, ...] = DIRECTIONS
    deadlock_pruning: bool = True
    max_expansions: int = MAX_EXPANSIONS
    heuristic: str = "manhattan"    # "zero" gives breadth-first order
    progress_interval: int = 5000

    def __post_init__(self) -> None:
        if self.heuristic not in HEURISTICS:
            raise ValueError(
                f"Unknown heuristic {self.heuristic!r}; "
                f"choose from: {', '.join(HEURISTICS)}."
            )
        if self.max_expansions <= 0:
            raise ValueError("max_expansions must be positive.")
        if self.progress_interval <= 0:
            raise ValueError("progress_interval must be positive.")
        if len({d.char for d in self.directions}) != len(self.directions):
            raise ValueError("Direction characters must be distinct.")

    @classmethod
    def from_mapping(
        cls,
        options: Mapping[str, Any],
        base: SolverConfig | None = None,
    ) -> SolverConfig:
        """Build a config from JSON-style options on top of ``base``,
        ignoring unknown keys."""
        kwargs: dict[str, Any] = {}
        if "deadlock_pruning" in options:
            kwargs["deadlock_pruning"] = _as_bool(options["deadlock_pruning"])
        if "max_expansions" in options:
            kwargs["max_expansions"] = _as_int(options["max_expansions"],
                                               "max_expansions")
        if "heuristic" in options:
            kwargs["heuristic"] = str(options["heuristic"]).lower()
        if base is None:
            return cls(**kwargs)
        return replace(base, **kwargs)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> SolverConfig:
        """Read SOKOBOT_MAX_EXPANSIONS, SOKOBOT_DEADLOCK and SOKOBOT_HEURISTIC."""
        env = os.environ if environ is None else environ
        options: dict[str, Any] = {}
        if env.get("SOKOBOT_MAX_EXPANSIONS"):
            options["max_expansions"] = env["SOKOBOT_MAX_EXPANSIONS"]
        if env.get("SOKOBOT_DEADLOCK"):
            options["deadlock_pruning"] = env["SOKOBOT_DEADLOCK"]
        if env.get("SOKOBOT_HEURISTIC"):
            options["heuristic"] = env["SOKOBOT_HEURISTIC"]
        return cls.from_mapping(options)

    def signature(self) -> str:
        """Stable string identifying the options that change search results."""
        return (f"deadlock={int(self.deadlock_pruning)};"
                f"heuristic={self.heuristic};"
                f"max={self.max_expansions};"
                f"dirs={''.join(d.char for d in self.directions)}")


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f"Expected a boolean, got {value!r}.")


def _as_int(value: Any, name: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{name} must be an integer.")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be an integer, got {value!r}.") from None
