"""Search states and their canonical identity."""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from typing import NamedTuple

from board import Direction, Grid, Pos, box_positions


class StateKey(NamedTuple):
    """Player position plus sorted box positions.

    Boxes on targets count the same as plain boxes; the target layout is
    fixed for the whole puzzle.
    """
    player: Pos
    boxes: tuple[Pos, ...]


@dataclass(frozen=True, eq=False)
class SearchState:
    grid: Grid
    player: Pos
    g: int = 0
    h: int = 0
    parent: SearchState | None = None
    move: Direction | None = None
    pushed: bool = False     # did `move` push a box?
    boxes: tuple[Pos, ...] | None = None   # sorted; read from grid if None

    @property
    def f(self) -> int:
        return self.g + self.h

    @cached_property
    def key(self) -> StateKey:
        boxes = self.boxes
        if boxes is None:
            boxes = tuple(box_positions(self.grid))
        return StateKey(self.player, boxes)

    def path(self) -> list[SearchState]:
        """States from the root down to this one (inclusive)."""
        chain: list[SearchState] = []
        state: SearchState | None = self
        while state is not None:
            chain.append(state)
            state = state.parent
        chain.reverse()
        return chain
