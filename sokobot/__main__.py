import argparse
import logging
import sys

from sokobot.config import SolverConfig
from sokobot.parsing import load_levels, parse_level
from sokobot.puzzles import get_puzzle, get_puzzle_names
from sokobot.replay import render_state, replay_moves
from sokobot.solver import solve_puzzle


def main(argv=None):
    ap = argparse.ArgumentParser(prog="sokobot",
                                 description="Solve a Sokoban level.")
    ap.add_argument("file", nargs="?", help="level collection file")
    ap.add_argument("--idx", type=int, default=0,
                    help="which level in the file to solve")
    ap.add_argument("--puzzle", help="name of a built-in puzzle")
    ap.add_argument("--list", action="store_true",
                    help="list built-in puzzles and exit")
    ap.add_argument("--bfs", action="store_true",
                    help="breadth-first order (push-optimal, slower)")
    ap.add_argument("--no-deadlock", action="store_true",
                    help="disable dead-cell pruning")
    ap.add_argument("--max-expansions", type=int)
    ap.add_argument("-v", "--verbose", action="store_true")
    args = ap.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    if args.list:
        for name in get_puzzle_names():
            print(name)
        return 0

    if args.puzzle:
        try:
            text = get_puzzle(args.puzzle)
        except KeyError:
            ap.error(f"unknown puzzle {args.puzzle!r}")
    elif args.file:
        levels = load_levels(args.file)
        if not 0 <= args.idx < len(levels):
            ap.error(f"--idx must be between 0 and {len(levels) - 1}")
        text = levels[args.idx]
    else:
        ap.error("give a level file or --puzzle NAME")

    options = {}
    if args.bfs:
        options["heuristic"] = "zero"
    if args.no_deadlock:
        options["deadlock_pruning"] = False
    if args.max_expansions is not None:
        options["max_expansions"] = args.max_expansions
    try:
        config = SolverConfig.from_mapping(options, base=SolverConfig.from_env())
    except ValueError as e:
        ap.error(str(e))

    puzzle = parse_level(text)
    print(text)
    print()
    for problem in puzzle.problems():
        print(f"warning: {problem}")

    solution = solve_puzzle(puzzle, config)
    print(f"Outcome: {solution.outcome.value}")
    print(f"States explored: {solution.states_explored}")
    if not solution.solved:
        return 1

    print(f"Pushes: {solution.pushes}")
    print(f"Moves: {solution.moves or '(none)'}")
    player, boxes = replay_moves(puzzle, solution.moves, config.directions)
    print()
    print(render_state(puzzle.grid, player, boxes))
    return 0


if __name__ == "__main__":
    sys.exit(main())
