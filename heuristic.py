"""Admissible distance estimate from a board to a solved board."""

from __future__ import annotations

from board import Cell, Grid, Pos, target_positions


def manhattan(a: Pos, b: Pos) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def estimate(grid: Grid, targets: list[Pos] | None = None) -> int:
    """Sum over boxes of the Manhattan distance to the nearest target.

    Several boxes may count the same target.  Each push moves one box one
    cell, so the estimate never exceeds the remaining move count.  Boxes
    already on a target contribute nothing.

    Targets never move, so a search passes the list it collected from the
    starting board instead of rescanning every child.
    """
    if targets is None:
        targets = target_positions(grid)
    total = 0
    for r, row in enumerate(grid):
        for c, cell in enumerate(row):
            if cell is Cell.BOX:
                total += min(manhattan((r, c), t) for t in targets)
    return total
