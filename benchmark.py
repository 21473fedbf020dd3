"""
Solve a set of built-in puzzles and plot how the search scales.

Saves nodes_expanded.png and runtime.png in the working directory.
"""

import matplotlib.pyplot as plt

from board import box_positions, parse_level
from puzzles import PUZZLES
from solver import solve_grid

BENCHMARK_PUZZLES = [
    "One Box",
    "Single Push",
    "Corridor",
    "Side Step",
    "Twin Drop",
    "Three Shelf",
    "Crossroads",
]
MAX_EXPANDED = 500_000


def run_benchmark(names):
    results = []
    for name in names:
        grid = parse_level(PUZZLES[name])
        result = solve_grid(grid, max_expanded=MAX_EXPANDED)
        results.append({
            "name": name,
            "boxes": len(box_positions(grid)),
            "solved": result.solved,
            "moves": result.length if result.solved else None,
            "states_expanded": result.states_expanded,
            "time_s": result.elapsed,
        })
    return results


def plot_results(results):
    names = [r["name"] for r in results]
    nodes = [r["states_expanded"] for r in results]
    times = [r["time_s"] for r in results]

    # Graph 1: states expanded
    plt.figure()
    plt.bar(names, nodes)
    plt.yscale("log")
    plt.xlabel("Puzzle")
    plt.ylabel("States expanded")
    plt.title("A* Sokoban: states expanded per puzzle")
    plt.xticks(rotation=30, ha="right")
    plt.tight_layout()
    plt.savefig("nodes_expanded.png")
    plt.close()

    # Graph 2: runtime
    plt.figure()
    plt.bar(names, times)
    plt.xlabel("Puzzle")
    plt.ylabel("Time (seconds)")
    plt.title("A* Sokoban: runtime per puzzle")
    plt.xticks(rotation=30, ha="right")
    plt.tight_layout()
    plt.savefig("runtime.png")
    plt.close()


def main():
    results = run_benchmark(BENCHMARK_PUZZLES)

    print("Results:")
    for row in results:
        print(row)

    plot_results(results)


if __name__ == "__main__":
    main()
