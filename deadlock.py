"""Corner deadlock detection for freshly pushed boxes."""

from __future__ import annotations

from board import Cell, Grid, in_bounds, is_wall


def _blocked(grid: Grid, r: int, c: int) -> bool:
    return not in_bounds(grid, (r, c)) or is_wall(grid[r][c])


def is_corner_deadlock(grid: Grid, row: int, col: int) -> bool:
    """True if the box at (row, col) sits in a corner off any target.

    A corner is a wall or the board edge on one vertical side and one
    horizontal side.  Such a box can never be pushed again.  Boxes frozen
    against other boxes are not detected here.
    """
    if grid[row][col] is not Cell.BOX:
        return False
    vertical = _blocked(grid, row - 1, col) or _blocked(grid, row + 1, col)
    horizontal = _blocked(grid, row, col - 1) or _blocked(grid, row, col + 1)
    return vertical and horizontal
