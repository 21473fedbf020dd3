"""Command-line entry point: solve a built-in puzzle or a level file."""

import argparse
import logging
import sys

from board import InvalidLevel, parse_level, render_board
from puzzles import get_puzzle, get_puzzle_names
from solver import solve_grid


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="sokoban-solve",
        description="Find a move-optimal solution to a Sokoban level with A*.",
    )
    ap.add_argument("puzzle", nargs="?", default="Single Push",
                    help="name of a built-in puzzle")
    ap.add_argument("--file", help="read the level from this text file")
    ap.add_argument("--max-expanded", type=int, default=None,
                    help="stop after expanding this many states")
    ap.add_argument("--time-limit", type=float, default=None,
                    help="stop after this many seconds")
    ap.add_argument("--list", action="store_true",
                    help="list the built-in puzzles and exit")
    ap.add_argument("-v", "--verbose", action="store_true",
                    help="log search progress")
    return ap


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    if args.list:
        for name in get_puzzle_names():
            print(name)
        return 0

    if args.file:
        with open(args.file, encoding="utf-8") as f:
            text = f.read()
        title = args.file
    else:
        try:
            text = get_puzzle(args.puzzle)
        except KeyError:
            print(f"Unknown puzzle '{args.puzzle}'. Use --list to see the "
                  f"built-in puzzles.", file=sys.stderr)
            return 2
        title = args.puzzle

    try:
        grid = parse_level(text)
    except InvalidLevel as e:
        print(f"Invalid level: {e}", file=sys.stderr)
        return 2

    print(f"=== {title} ===")
    print(render_board(grid))
    print()

    result = solve_grid(grid, max_expanded=args.max_expanded,
                        time_limit=args.time_limit)

    if not result.solved:
        if result.exhausted:
            print("No solution exists.")
        else:
            print("No solution found within the search budget.")
        print(f"States expanded: {result.states_expanded}")
        print(f"Time: {result.elapsed * 1000:.1f} ms")
        return 1

    print("Solved!")
    print(f"Moves: {result.length}")
    print(f"States expanded: {result.states_expanded}")
    print(f"Time: {result.elapsed * 1000:.1f} ms")
    print(f"Path: {result.to_lurd()}")
    print()
    print(render_board(result.final_state.grid))
    return 0


if __name__ == "__main__":
    sys.exit(main())
