"""Canonical search states."""

from __future__ import annotations

from typing import AbstractSet, Iterable, NamedTuple


class SearchState(NamedTuple):
    """Sorted box positions plus the exact player position.

    Tuple equality and hashing make this its own deduplication key.
    """
    boxes: tuple[int, ...]
    player: int

    @classmethod
    def canonical(cls, boxes: Iterable[int], player: int) -> SearchState:
        return cls(tuple(sorted(boxes)), player)

    def is_goal(self, goals: AbstractSet[int]) -> bool:
        return all(b in goals for b in self.boxes)

    def push(self, index: int, dest: int) -> SearchState:
        """Move box ``index`` to ``dest``; the player takes the vacated cell."""
        moved = self.boxes[index]
        boxes = self.boxes[:index] + (dest,) + self.boxes[index + 1:]
        return SearchState(tuple(sorted(boxes)), moved)
