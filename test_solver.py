"""Tests for the A* solver and its building blocks."""

import unittest
from collections import deque
from unittest import mock

from app import MAX_EXPANDED
from board import (
    DIRECTIONS,
    Cell,
    InvalidLevel,
    box_positions,
    find_player,
    is_goal,
    parse_grid,
    parse_level,
    target_positions,
)
from deadlock import is_corner_deadlock
from heuristic import estimate, manhattan
from puzzles import PUZZLES, get_puzzle_names
from solver import solve, solve_grid
from state import SearchState, StateKey
from successors import successors

SINGLE_PUSH = """\
#####
#   #
#@$.#
#   #
#####"""

CORNERED = """\
#####
#$  #
#  .#
#  @#
#####"""


def _root(text: str) -> SearchState:
    grid = parse_grid(text)
    return SearchState(grid=grid, player=find_player(grid), h=estimate(grid))


def _bfs_length(text: str) -> int | None:
    """Shortest move count by plain breadth-first search, no pruning."""
    grid = parse_level(text)
    height, width = len(grid), len(grid[0])
    walls = {
        (r, c) for r in range(height) for c in range(width)
        if grid[r][c] is Cell.WALL
    }
    targets = frozenset(target_positions(grid))
    start = (find_player(grid), frozenset(box_positions(grid)))

    def open_cell(pos):
        r, c = pos
        return 0 <= r < height and 0 <= c < width and pos not in walls

    seen = {start}
    queue = deque([(start, 0)])
    while queue:
        (player, boxes), depth = queue.popleft()
        if boxes <= targets:
            return depth
        for d in DIRECTIONS:
            nxt = d.step(player)
            if not open_cell(nxt):
                continue
            new_boxes = boxes
            if nxt in boxes:
                beyond = d.step(nxt)
                if not open_cell(beyond) or beyond in boxes:
                    continue
                new_boxes = (boxes - {nxt}) | {beyond}
            node = (nxt, new_boxes)
            if node not in seen:
                seen.add(node)
                queue.append((node, depth + 1))
    return None


class TestHeuristic(unittest.TestCase):

    def test_manhattan(self):
        self.assertEqual(manhattan((0, 0), (2, 3)), 5)

    def test_single_box(self):
        self.assertEqual(estimate(parse_level(SINGLE_PUSH)), 1)

    def test_zero_when_all_boxes_on_targets(self):
        self.assertEqual(estimate(parse_grid("#*@ #")), 0)

    def test_targets_may_be_shared(self):
        # Both boxes are one step from the same target
        self.assertEqual(estimate(parse_grid("$.$   .")), 2)


class TestDeadlock(unittest.TestCase):

    def test_wall_corner(self):
        grid = parse_grid(CORNERED)
        self.assertTrue(is_corner_deadlock(grid, 1, 1))

    def test_corner_on_target_is_fine(self):
        grid = parse_grid("""\
#####
#*  #
#  @#
#####""")
        self.assertFalse(is_corner_deadlock(grid, 1, 1))

    def test_board_edge_counts_as_wall(self):
        grid = parse_grid("$ \n  ")
        self.assertTrue(is_corner_deadlock(grid, 0, 0))

    def test_along_wall_is_not_corner(self):
        grid = parse_grid("""\
#####
# $ #
#   #
#####""")
        self.assertFalse(is_corner_deadlock(grid, 1, 2))

    def test_non_box_cell(self):
        grid = parse_grid(CORNERED)
        self.assertFalse(is_corner_deadlock(grid, 1, 2))


class TestSuccessors(unittest.TestCase):

    def test_step_and_push(self):
        root = _root(SINGLE_PUSH)
        children = successors(root)
        self.assertEqual([c.move.name for c in children], ["U", "D", "R"])

        for child in children:
            self.assertEqual(child.g, 1)
            self.assertIs(child.parent, root)
            self.assertIsNot(child.grid, root.grid)

        up, down, push = children
        self.assertFalse(up.pushed)
        self.assertEqual(up.player, (1, 1))
        self.assertEqual(up.h, 1)

        self.assertTrue(push.pushed)
        self.assertEqual(push.player, (2, 2))
        self.assertEqual(push.h, 0)
        self.assertIs(push.grid[2][1], Cell.FLOOR)
        self.assertIs(push.grid[2][2], Cell.PLAYER)
        self.assertIs(push.grid[2][3], Cell.BOX_ON_TARGET)

        # Parent board untouched
        self.assertIs(root.grid[2][1], Cell.PLAYER)
        self.assertIs(root.grid[2][2], Cell.BOX)

    def test_corner_push_discarded(self):
        root = _root("""\
#####
# $@#
#  .#
#####""")
        self.assertEqual([c.move.name for c in successors(root)], ["D"])

    def test_corner_push_onto_target_kept(self):
        root = _root("""\
#####
#.$@#
#   #
#####""")
        children = successors(root)
        self.assertEqual([c.move.name for c in children], ["D", "L"])
        self.assertIs(children[1].grid[1][1], Cell.BOX_ON_TARGET)

    def test_push_blocked_by_box(self):
        root = _root("""\
######
#@$$ #
#..  #
######""")
        self.assertEqual([c.move.name for c in successors(root)], ["D"])

    def test_out_of_bounds_skipped(self):
        root = _root("$@.")
        children = successors(root)
        self.assertEqual([c.move.name for c in children], ["R"])
        self.assertIs(children[0].grid[0][2], Cell.PLAYER_ON_TARGET)

    def test_player_leaves_target_behind(self):
        root = _root("""\
#####
#+ $#
# $.#
#   #
#####""")
        right = next(c for c in successors(root) if c.move.name == "R")
        self.assertIs(right.grid[1][1], Cell.TARGET)
        self.assertIs(right.grid[1][2], Cell.PLAYER)

    def test_box_leaves_target_behind(self):
        root = _root("""\
######
#@*  #
#   .#
######""")
        push = next(c for c in successors(root) if c.move.name == "R")
        self.assertIs(push.grid[1][2], Cell.PLAYER_ON_TARGET)
        self.assertIs(push.grid[1][3], Cell.BOX)

    def test_box_count_invariant(self):
        root = _root(PUZZLES["Twin Drop"])
        seen = {root.key}
        queue = deque([root])
        while queue and len(seen) < 2000:
            state = queue.popleft()
            self.assertEqual(len(box_positions(state.grid)), 2)
            for child in successors(state):
                if child.key not in seen:
                    seen.add(child.key)
                    queue.append(child)

    def test_state_key_ignores_target_status(self):
        a = _root("@$.")
        b = SearchState(grid=parse_grid("@*."), player=(0, 0))
        self.assertEqual(a.key, b.key)
        self.assertEqual(a.key, StateKey((0, 0), ((0, 1),)))

    def test_children_carry_board_estimate_and_key(self):
        root = _root(PUZZLES["Three Shelf"])
        seen = {root.key}
        queue = deque([root])
        while queue and len(seen) < 500:
            state = queue.popleft()
            for child in successors(state):
                self.assertEqual(child.h, estimate(child.grid))
                self.assertEqual(
                    child.key,
                    StateKey(child.player, tuple(box_positions(child.grid))),
                )
                if child.key not in seen:
                    seen.add(child.key)
                    queue.append(child)


class TestSolving(unittest.TestCase):

    def test_single_push(self):
        result = solve(SINGLE_PUSH)
        self.assertTrue(result.solved)
        self.assertEqual(result.length, 1)
        self.assertEqual(result.to_moves(), ["R"])
        self.assertEqual(result.to_lurd(), "R")
        self.assertLessEqual(result.states_expanded, 3)
        self.assertTrue(is_goal(result.final_state.grid))

    def test_already_solved(self):
        result = solve("""\
#####
#*  #
#  @#
#####""")
        self.assertTrue(result.solved)
        self.assertEqual(result.length, 0)
        self.assertEqual(result.path, [])
        self.assertEqual(result.to_lurd(), "")
        self.assertEqual(result.states_expanded, 1)

    def test_corridor_moves(self):
        result = solve(PUZZLES["Corridor"])
        self.assertTrue(result.solved)
        self.assertEqual(result.to_lurd(), "rRR")

    def test_unsolvable_corner(self):
        result = solve(CORNERED)
        self.assertFalse(result.solved)
        self.assertTrue(result.exhausted)
        self.assertGreater(result.states_expanded, 0)

    def test_expansion_budget(self):
        result = solve(PUZZLES["Twin Drop"], max_expanded=1)
        self.assertFalse(result.solved)
        self.assertFalse(result.exhausted)
        self.assertEqual(result.states_expanded, 1)

    def test_budget_matching_full_search_reports_exhausted(self):
        full = solve(CORNERED)
        self.assertTrue(full.exhausted)
        capped = solve(CORNERED, max_expanded=full.states_expanded)
        self.assertTrue(capped.exhausted)
        self.assertEqual(capped.states_expanded, full.states_expanded)

    def test_time_budget(self):
        result = solve(PUZZLES["Twin Drop"], time_limit=0)
        self.assertFalse(result.solved)
        self.assertFalse(result.exhausted)
        self.assertEqual(result.states_expanded, 0)

    def test_invalid_level_raises(self):
        with self.assertRaises(InvalidLevel):
            solve("#@#")

    def test_progress_callback(self):
        calls = []
        with mock.patch("solver.PROGRESS_INTERVAL", 1):
            solve_grid(parse_level(SINGLE_PUSH),
                       progress_callback=calls.append)
        self.assertEqual(calls, [1, 2])

    def test_matches_breadth_first_oracle(self):
        levels = [
            PUZZLES["One Box"],
            PUZZLES["Single Push"],
            PUZZLES["Corridor"],
            PUZZLES["Side Step"],
            PUZZLES["Twin Drop"],
            """\
######
#    #
# #$ #
# .@ #
#    #
######""",
            """\
#######
#.  # #
# $   #
#  $@ #
#.    #
#######""",
        ]
        for text in levels:
            with self.subTest(level=text):
                result = solve(text)
                self.assertTrue(result.solved)
                self.assertEqual(result.length, _bfs_length(text))

    def test_path_is_consistent(self):
        result = solve(PUZZLES["Twin Drop"])
        self.assertEqual(result.length, 6)
        chain = result.final_state.path()
        self.assertEqual(len(chain), 7)
        for g, state in enumerate(chain):
            self.assertEqual(state.g, g)
        self.assertEqual([s.move for s in chain[1:]], result.path)

    def test_no_cornered_box_on_solution_path(self):
        result = solve(PUZZLES["Three Shelf"])
        self.assertTrue(result.solved)
        for state in result.final_state.path():
            for r, c in box_positions(state.grid):
                self.assertFalse(is_corner_deadlock(state.grid, r, c))

    def test_crossroads(self):
        result = solve(PUZZLES["Crossroads"], max_expanded=MAX_EXPANDED)
        self.assertTrue(result.solved)
        self.assertTrue(is_goal(result.final_state.grid))
        self.assertEqual(result.to_lurd().count("D"), 4)

    def test_builtin_puzzles(self):
        """Every built-in puzzle solves within the web API budget."""
        for name in get_puzzle_names():
            with self.subTest(puzzle=name):
                result = solve(PUZZLES[name], max_expanded=MAX_EXPANDED)
                self.assertTrue(result.solved, f"Puzzle '{name}' was not solved")


if __name__ == "__main__":
    unittest.main(verbosity=2)
