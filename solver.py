"""
Sokoban A* solver.

Move-optimal A* search over full board states with corner deadlock
pruning.  Every player step costs 1, whether or not it pushes a box.
"""

from __future__ import annotations

import heapq
import itertools
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from board import (
    Direction,
    Grid,
    find_player,
    is_goal,
    parse_level,
    target_positions,
)
from heuristic import estimate
from state import SearchState, StateKey
from successors import successors

logger = logging.getLogger(__name__)

PROGRESS_INTERVAL = 5000   # expansions between progress callbacks


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

@dataclass
class Solution:
    final_state: SearchState
    states_expanded: int
    elapsed: float            # seconds

    solved = True

    @property
    def path(self) -> list[Direction]:
        """Moves from the start to the goal, rebuilt from parent links."""
        moves: list[Direction] = []
        state = self.final_state
        while state.parent is not None:
            moves.append(state.move)
            state = state.parent
        moves.reverse()
        return moves

    @property
    def length(self) -> int:
        return self.final_state.g

    def to_moves(self) -> list[str]:
        return [d.name for d in self.path]

    def to_lurd(self) -> str:
        """Standard LURD notation: lowercase steps, uppercase pushes."""
        return "".join(
            s.move.name if s.pushed else s.move.name.lower()
            for s in self.final_state.path()[1:]
        )


@dataclass
class NoSolution:
    states_expanded: int
    elapsed: float
    exhausted: bool           # False when a caller budget stopped the search

    solved = False


# ---------------------------------------------------------------------------
# A* search
# ---------------------------------------------------------------------------

def solve(level_text: str, **kwargs) -> Solution | NoSolution:
    """Parse and validate a level string, then search it.

    Raises InvalidLevel for malformed levels; keyword arguments go to
    solve_grid.
    """
    return solve_grid(parse_level(level_text), **kwargs)


def solve_grid(grid: Grid,
               max_expanded: int | None = None,
               time_limit: float | None = None,
               progress_callback: Callable[[int], None] | None = None,
               ) -> Solution | NoSolution:
    """Run A* from a validated grid.

    Returns a Solution with the first goal state popped, which has the
    minimum move count.  Returns NoSolution when the frontier runs dry
    (exhausted=True) or when max_expanded states or time_limit seconds
    are used up first (exhausted=False).
    """
    t0 = time.perf_counter()
    player = find_player(grid)
    targets = target_positions(grid)
    root = SearchState(grid=grid, player=player, h=estimate(grid, targets))
    logger.info("Starting A* search: h0=%d", root.h)

    # (f, insertion order, state); the counter makes ties first-in-first-out
    counter = itertools.count()
    frontier: list[tuple[int, int, SearchState]] = [
        (root.f, next(counter), root)
    ]
    closed: set[StateKey] = set()
    expanded = 0
    stopped = False

    while frontier:
        _, _, state = heapq.heappop(frontier)
        if state.key in closed:
            continue
        # Budgets apply to real expansions only, never to stale entries
        if max_expanded is not None and expanded >= max_expanded:
            stopped = True
            break
        if time_limit is not None and time.perf_counter() - t0 >= time_limit:
            stopped = True
            break

        closed.add(state.key)
        expanded += 1

        if progress_callback and expanded % PROGRESS_INTERVAL == 0:
            progress_callback(expanded)
        if expanded % PROGRESS_INTERVAL == 0:
            logger.debug("Expanded %d states, frontier %d, f=%d",
                         expanded, len(frontier), state.f)

        if is_goal(state.grid):
            elapsed = time.perf_counter() - t0
            logger.info("Solved in %d moves: %d states expanded, %.3fs",
                        state.g, expanded, elapsed)
            return Solution(state, expanded, elapsed)

        for child in successors(state, targets):
            if child.key not in closed:
                heapq.heappush(frontier, (child.f, next(counter), child))

    elapsed = time.perf_counter() - t0
    exhausted = not stopped
    if exhausted:
        logger.info("No solution: frontier exhausted after %d states", expanded)
    else:
        logger.info("Search budget used up after %d states, %.3fs",
                    expanded, elapsed)
    return NoSolution(expanded, elapsed, exhausted)
