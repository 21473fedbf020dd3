"""Legal next states: player steps and box pushes."""

from __future__ import annotations

from board import (
    DIRECTIONS,
    Cell,
    Direction,
    Grid,
    Pos,
    clone_board,
    in_bounds,
    is_box,
    is_free,
    move_entity,
    target_positions,
)
from deadlock import is_corner_deadlock
from heuristic import estimate
from state import SearchState


def _child(parent: SearchState, grid: Grid, player: Pos, direction: Direction,
           h: int, boxes: tuple[Pos, ...], pushed: bool) -> SearchState:
    return SearchState(
        grid=grid,
        player=player,
        g=parent.g + 1,
        h=h,
        parent=parent,
        move=direction,
        pushed=pushed,
        boxes=boxes,
    )


def successors(state: SearchState,
               targets: list[Pos] | None = None) -> list[SearchState]:
    """Return the children of `state` in direction order U, D, L, R.

    Every step and every push costs 1.  Pushes that leave the box in a
    corner off any target are dropped.  `targets` is the fixed target list
    of the puzzle; it is read from the board when omitted.
    """
    grid = state.grid
    if targets is None:
        targets = target_positions(grid)
    boxes = state.key.boxes
    children: list[SearchState] = []

    for d in DIRECTIONS:
        nxt = d.step(state.player)
        if not in_bounds(grid, nxt):
            continue
        cell = grid[nxt[0]][nxt[1]]

        if is_free(cell):
            new_grid = clone_board(grid)
            move_entity(new_grid, state.player, nxt, Cell.PLAYER)
            # Boxes stay put, so the estimate does too
            children.append(_child(state, new_grid, nxt, d, state.h, boxes,
                                   pushed=False))

        elif is_box(cell):
            beyond = d.step(nxt)
            if not in_bounds(grid, beyond):
                continue
            if not is_free(grid[beyond[0]][beyond[1]]):
                continue
            new_grid = clone_board(grid)
            # Box first, so the player enters an already vacated cell
            move_entity(new_grid, nxt, beyond, Cell.BOX)
            move_entity(new_grid, state.player, nxt, Cell.PLAYER)
            if is_corner_deadlock(new_grid, *beyond):
                continue
            new_boxes = tuple(sorted(beyond if b == nxt else b for b in boxes))
            children.append(_child(state, new_grid, nxt, d,
                                   estimate(new_grid, targets), new_boxes,
                                   pushed=True))

    return children
