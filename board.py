"""
Grid model for the Sokoban solver.

A board is a rectangular list of rows of Cell values.  Every search state
owns its own copy, so the helpers here mutate only grids the caller has
just cloned.

Standard level format:
  # = wall, ' ' = floor, . = target, $ = box, @ = player,
  * = box on target, + = player on target
"""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple


class InvalidLevel(ValueError):
    """Raised when level text or a grid breaks the board invariants."""


# ---------------------------------------------------------------------------
# Cell kinds
# ---------------------------------------------------------------------------

class Cell(Enum):
    WALL = "#"
    FLOOR = " "
    TARGET = "."
    BOX = "$"
    BOX_ON_TARGET = "*"
    PLAYER = "@"
    PLAYER_ON_TARGET = "+"


Pos = tuple[int, int]
Grid = list[list[Cell]]

# Extra symbols accepted when parsing: XSB floor variants and the
# box-drawing glyph set (■ wall, □ floor, T target).
_ALIASES: dict[str, Cell] = {
    "-": Cell.FLOOR,
    "_": Cell.FLOOR,
    "■": Cell.WALL,
    "□": Cell.FLOOR,
    "T": Cell.TARGET,
}

_ON_TARGET = {
    Cell.PLAYER: Cell.PLAYER_ON_TARGET,
    Cell.BOX: Cell.BOX_ON_TARGET,
}


def is_wall(cell: Cell) -> bool:
    return cell is Cell.WALL


def is_box(cell: Cell) -> bool:
    return cell is Cell.BOX or cell is Cell.BOX_ON_TARGET


def is_target(cell: Cell) -> bool:
    return cell in (Cell.TARGET, Cell.BOX_ON_TARGET, Cell.PLAYER_ON_TARGET)


def is_player(cell: Cell) -> bool:
    return cell is Cell.PLAYER or cell is Cell.PLAYER_ON_TARGET


def is_free(cell: Cell) -> bool:
    """True for cells an entity can move into: plain floor or empty target."""
    return cell is Cell.FLOOR or cell is Cell.TARGET


# ---------------------------------------------------------------------------
# Direction helpers
# ---------------------------------------------------------------------------

class Direction(NamedTuple):
    dr: int
    dc: int
    name: str

    def step(self, pos: Pos) -> Pos:
        return (pos[0] + self.dr, pos[1] + self.dc)


UP    = Direction(-1,  0, "U")
DOWN  = Direction( 1,  0, "D")
LEFT  = Direction( 0, -1, "L")
RIGHT = Direction( 0,  1, "R")
DIRECTIONS = (UP, DOWN, LEFT, RIGHT)


# ---------------------------------------------------------------------------
# Grid operations
# ---------------------------------------------------------------------------

def in_bounds(grid: Grid, pos: Pos) -> bool:
    r, c = pos
    return 0 <= r < len(grid) and 0 <= c < len(grid[r])


def clone_board(grid: Grid) -> Grid:
    """Return an independent copy of the grid (rows are not shared)."""
    return [row[:] for row in grid]


def move_entity(grid: Grid, src: Pos, dst: Pos, entity: Cell) -> None:
    """Move a PLAYER or BOX from src to dst in place.

    The target flag of both cells survives the move: leaving a target cell
    leaves a TARGET behind, entering one yields the on-target variant.
    """
    sr, sc = src
    dr, dc = dst
    grid[dr][dc] = _ON_TARGET[entity] if is_target(grid[dr][dc]) else entity
    grid[sr][sc] = Cell.TARGET if is_target(grid[sr][sc]) else Cell.FLOOR


def find_player(grid: Grid) -> Pos | None:
    """Return the first player cell in row-major order."""
    for r, row in enumerate(grid):
        for c, cell in enumerate(row):
            if is_player(cell):
                return (r, c)
    return None


def box_positions(grid: Grid) -> list[Pos]:
    """All box cells (on target or not), sorted row-major."""
    return [
        (r, c)
        for r, row in enumerate(grid)
        for c, cell in enumerate(row)
        if is_box(cell)
    ]


def target_positions(grid: Grid) -> list[Pos]:
    return [
        (r, c)
        for r, row in enumerate(grid)
        for c, cell in enumerate(row)
        if is_target(cell)
    ]


def count_cells(grid: Grid, kind: Cell) -> int:
    return sum(row.count(kind) for row in grid)


def is_goal(grid: Grid) -> bool:
    """A board is solved when no plain BOX cell remains."""
    return all(Cell.BOX not in row for row in grid)


# ---------------------------------------------------------------------------
# Level text
# ---------------------------------------------------------------------------

def parse_grid(text: str) -> Grid:
    """Map level text to a grid without checking the board invariants.

    Ragged lines are padded with floor up to the widest line.
    """
    lines = text.strip("\r\n").splitlines()
    if not lines:
        return []
    width = max(len(line) for line in lines)

    grid: Grid = []
    for r, line in enumerate(lines):
        row: list[Cell] = []
        for c, ch in enumerate(line.ljust(width)):
            if ch in _ALIASES:
                row.append(_ALIASES[ch])
                continue
            try:
                row.append(Cell(ch))
            except ValueError:
                raise InvalidLevel(
                    f"Unknown symbol {ch!r} at row {r}, column {c}"
                ) from None
        grid.append(row)
    return grid


def validate_grid(grid: Grid) -> None:
    """Raise InvalidLevel unless the grid is a well-formed puzzle."""
    if not grid or not grid[0]:
        raise InvalidLevel("Level is empty")

    width = len(grid[0])
    if any(len(row) != width for row in grid):
        raise InvalidLevel("Level is not rectangular")

    players = sum(1 for row in grid for cell in row if is_player(cell))
    if players == 0:
        raise InvalidLevel("Level has no player (@)")
    if players > 1:
        raise InvalidLevel(f"Level has {players} players, expected one")

    boxes = len(box_positions(grid))
    targets = len(target_positions(grid))
    if boxes == 0:
        raise InvalidLevel("Level has no boxes ($)")
    if boxes != targets:
        raise InvalidLevel(
            f"Box count ({boxes}) != target count ({targets})"
        )


def parse_level(text: str) -> Grid:
    """Parse a standard Sokoban level string into a validated grid."""
    grid = parse_grid(text)
    validate_grid(grid)
    return grid


def render_board(grid: Grid) -> str:
    """Render a grid back to level text."""
    return "\n".join(
        "".join(cell.value for cell in row).rstrip() for row in grid
    )
