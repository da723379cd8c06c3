"""
Sokobot Flask web server.

Job-based API for solving Sokoban levels: validate synchronously, solve in
a background thread, poll for the result.  Final results are kept in the
sqlite solution cache.
"""

import logging
import threading
import uuid

from flask import Flask, jsonify, request

from sokobot import cache
from sokobot.config import SolverConfig
from sokobot.parsing import parse_level
from sokobot.puzzles import PUZZLES, get_puzzle_names
from sokobot.solver import Outcome, Solution, solve_puzzle

logger = logging.getLogger(__name__)

app = Flask(__name__)

SOLVE_TIMEOUT = 60  # seconds

# Outcomes that will not change on a retry with the same options.
CACHEABLE = {Outcome.SOLVED, Outcome.EXHAUSTED, Outcome.UNSOLVABLE}

# In-memory job store: job_id -> job dict
jobs: dict[str, dict] = {}


# ---------------------------------------------------------------------------
# API endpoints
# ---------------------------------------------------------------------------

@app.route("/api/levels", methods=["GET"])
def get_levels():
    """Return the built-in puzzle catalog."""
    levels = []
    for name in get_puzzle_names():
        text = PUZZLES[name]
        levels.append({
            "name": name,
            "text": text,
            "boxes": len(parse_level(text).boxes),
        })
    return jsonify(levels)


@app.route("/api/solve", methods=["POST"])
def start_solve():
    """Validate a level synchronously, then solve in a background thread."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or not data:
        return jsonify(status="error",
                       message="Request body must be a JSON object."), 400

    level_text = data.get("level", "")
    if not isinstance(level_text, str) or not level_text.strip():
        return jsonify(status="error",
                       message="Missing 'level' field."), 400
    level_text = level_text.strip("\n")

    options = data.get("options", {})
    if not isinstance(options, dict):
        return jsonify(status="error",
                       message="'options' must be an object."), 400

    try:
        config = SolverConfig.from_mapping(options, base=_default_config())
        puzzle = parse_level(level_text)
    except ValueError as e:
        return jsonify(status="error", message=str(e)), 400

    problems = puzzle.problems()
    if problems:
        return jsonify(status="error", message=" ".join(problems)), 400

    cached = cache.get_cached_solution(level_text, config.signature())
    if cached is not None:
        return jsonify(_result_payload(cached, cached=True))

    job_id = uuid.uuid4().hex
    job: dict = {
        "status": "searching",
        "states_explored": 0,
        "pushes": None,
        "moves": None,
    }
    jobs[job_id] = job

    thread = threading.Thread(
        target=_run_solver, args=(job_id, level_text, puzzle, config),
        daemon=True,
    )
    thread.start()

    return jsonify(status="ok", job_id=job_id)


@app.route("/api/solve/<job_id>", methods=["GET"])
def poll_solve(job_id):
    """Poll for the result of a solve job."""
    job = jobs.get(job_id)
    if job is None:
        return jsonify(status="error", message="Job not found."), 404
    return jsonify(job)


@app.route("/api/cache", methods=["DELETE"])
def api_clear_cache():
    """Clear the solution cache."""
    cache.clear_cache()
    return jsonify(status="ok", message="Cache cleared.")


# ---------------------------------------------------------------------------
# Background solving
# ---------------------------------------------------------------------------

def _default_config():
    """Server-wide defaults from the environment, or built-in defaults when
    the environment holds bad values."""
    try:
        return SolverConfig.from_env()
    except ValueError as e:
        logger.error("Ignoring SOKOBOT_* environment settings: %s", e)
        return SolverConfig()


def _run_solver(job_id, level_text, puzzle, config):
    """Run the solver in its own thread and record the result on the job."""
    job = jobs[job_id]

    def on_progress(n):
        job["states_explored"] = n

    result_holder = [None]
    error_holder = [None]

    def do_solve():
        try:
            result_holder[0] = solve_puzzle(puzzle, config,
                                            progress_callback=on_progress)
        except Exception as e:
            logger.exception("Solver failed for job %s", job_id)
            error_holder[0] = str(e)

    thread = threading.Thread(target=do_solve, daemon=True)
    thread.start()
    thread.join(timeout=SOLVE_TIMEOUT)

    if thread.is_alive():
        job["status"] = "error"
        job["message"] = "Solver timed out."
        return
    if error_holder[0]:
        job["status"] = "error"
        job["message"] = error_holder[0]
        return

    solution: Solution = result_holder[0]
    record = {
        "moves": solution.moves,
        "outcome": solution.outcome.value,
        "pushes": solution.pushes,
        "states_explored": solution.states_explored,
    }
    if solution.outcome in CACHEABLE:
        cache.set_cached_solution(level_text, config.signature(), **record)
    job.update(_result_payload(record))


def _result_payload(record, cached=False):
    solved = record["outcome"] == Outcome.SOLVED.value
    payload = {
        "status": "solved" if solved else "no_solution",
        "outcome": record["outcome"],
        "states_explored": record["states_explored"],
        "pushes": record["pushes"] if solved else None,
        "moves": record["moves"] if solved else None,
    }
    if cached:
        payload["cached"] = True
    return payload


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    app.run(debug=True, use_reloader=False, port=5000)
