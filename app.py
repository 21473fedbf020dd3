"""
Sokoban solver — Flask web server.

Job-based JSON API: a level is validated synchronously, then solved in a
background thread that the client polls.

Encapsulation: this module only calls parse_level(), solve_grid(), and
reads result attributes.  It never touches solver internals.
"""

import logging
import threading
import uuid

from flask import Flask, jsonify, request

from board import Grid, InvalidLevel, box_positions, parse_level
from puzzles import get_puzzle, get_puzzle_names
from solver import solve_grid

logger = logging.getLogger(__name__)

app = Flask(__name__)

SOLVE_TIMEOUT = 60         # seconds
MAX_EXPANDED = 1_000_000   # states

# In-memory job store: job_id -> job dict
jobs: dict[str, dict] = {}


@app.route("/api/levels", methods=["GET"])
def get_levels():
    """Return the built-in puzzle catalog."""
    levels = []
    for name in get_puzzle_names():
        text = get_puzzle(name)
        levels.append({
            "name": name,
            "text": text,
            "boxes": len(box_positions(parse_level(text))),
        })
    return jsonify(levels)


@app.route("/api/solve", methods=["POST"])
def start_solve():
    """Validate a level synchronously, then solve in a background thread."""
    data = request.get_json(silent=True)
    if not data or not isinstance(data, dict):
        return jsonify(status="error",
                       message="Request body must be JSON."), 400

    level_text = data.get("level")
    if not isinstance(level_text, str) or not level_text.strip():
        return jsonify(status="error",
                       message="Missing 'level' field."), 400

    try:
        grid = parse_level(level_text)
    except InvalidLevel as e:
        return jsonify(status="error", message=str(e)), 400

    job_id = uuid.uuid4().hex
    jobs[job_id] = {
        "status": "searching",
        "states_expanded": 0,
    }
    logger.info("Job %s: solving %dx%d level", job_id, len(grid), len(grid[0]))

    thread = threading.Thread(target=_run_solve, args=(job_id, grid),
                              daemon=True)
    thread.start()

    return jsonify(status="ok", job_id=job_id)


@app.route("/api/solve/<job_id>", methods=["GET"])
def poll_solve(job_id: str):
    """Poll for the result of a solve job."""
    job = jobs.get(job_id)
    if job is None:
        return jsonify(status="error", message="Job not found."), 404
    return jsonify(job)


def _run_solve(job_id: str, grid: Grid) -> None:
    """Run the search and record its outcome on the job."""
    job = jobs[job_id]

    def on_progress(n: int) -> None:
        job["states_expanded"] = n

    try:
        result = solve_grid(grid, max_expanded=MAX_EXPANDED,
                            time_limit=SOLVE_TIMEOUT,
                            progress_callback=on_progress)
    except Exception as e:
        logger.exception("Job %s failed", job_id)
        job.update(status="error", message=f"Solver error: {e}")
        return

    if result.solved:
        job.update(
            status="solved",
            moves=result.to_moves(),
            lurd=result.to_lurd(),
            length=result.length,
            states_expanded=result.states_expanded,
            elapsed=round(result.elapsed, 4),
        )
    else:
        job.update(
            status="no_solution",
            exhausted=result.exhausted,
            states_expanded=result.states_expanded,
            elapsed=round(result.elapsed, 4),
        )
    logger.info("Job %s: %s after %d states",
                job_id, job["status"], result.states_expanded)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    app.run(debug=True, use_reloader=False, port=5000)
