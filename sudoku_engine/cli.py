"""Command-line interface for the Sudoku engine."""

import argparse
import json
import logging
import sys

from .core.board import GridModel
from .core.givens import DEFAULT_DEGREE, DEFAULT_GIVENS
from .core.moves import ChangeGuess, InitiateGuess, SetDigit
from .engine import Engine, Status
from .benchmark import Benchmark


def main(argv=None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Step-by-step Sudoku engine with deduction strategies and backtracking",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Solve the built-in default game, printing a hint for every move
  python -m sudoku_engine.cli solve --trace

  # Solve a puzzle string and stream events as JSON lines
  python -m sudoku_engine.cli solve --puzzle "530070000600195000..." --json

  # Show the next 3 moves for a puzzle
  python -m sudoku_engine.cli hint --puzzle "530070000600195000..." --steps 3

  # Run every puzzle of a file and save results
  python -m sudoku_engine.cli benchmark --file puzzles.txt --output results/
        """
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Log engine internals at DEBUG level"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Solve command
    solve_parser = subparsers.add_parser("solve", help="Step a puzzle to completion")
    _add_puzzle_arguments(solve_parser)
    solve_parser.add_argument(
        "--trace", "-t", action="store_true",
        help="Print the justification for every committed digit and guess"
    )
    solve_parser.add_argument(
        "--json", action="store_true",
        help="Print every event as a JSON line"
    )
    solve_parser.add_argument(
        "--max-steps", type=int, default=None,
        help="Stop after this many steps (default: no limit)"
    )

    # Hint command
    hint_parser = subparsers.add_parser("hint", help="Apply a few steps and explain them")
    _add_puzzle_arguments(hint_parser)
    hint_parser.add_argument(
        "--steps", "-n", type=int, default=1,
        help="Number of steps to take (default: 1)"
    )

    # Benchmark command
    bench_parser = subparsers.add_parser("benchmark", help="Run the engine over a puzzle file")
    bench_parser.add_argument(
        "--file", "-f", type=str, required=True,
        help="Text file with one puzzle per line, optionally prefixed by a label"
    )
    bench_parser.add_argument(
        "--output", "-o", type=str, default="results",
        help="Output directory for results (default: results)"
    )
    bench_parser.add_argument(
        "--max-steps", type=int, default=None,
        help="Step cap per puzzle (default: no limit)"
    )
    bench_parser.add_argument(
        "--no-cascade", action="store_true",
        help="Stop backtracking at the first exhausted guess"
    )
    bench_parser.add_argument(
        "--no-charts", action="store_true",
        help="Skip chart generation"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.command == "solve":
        cmd_solve(args)
    elif args.command == "hint":
        cmd_hint(args)
    elif args.command == "benchmark":
        cmd_benchmark(args)


def _add_puzzle_arguments(sub: argparse.ArgumentParser) -> None:
    sub.add_argument(
        "--puzzle", "-p", type=str, default=None,
        help="Puzzle string (16, 81 or 256 chars, 0 or . for empty cells). "
             "Defaults to the built-in easy game."
    )
    sub.add_argument(
        "--no-cascade", action="store_true",
        help="Stop backtracking at the first exhausted guess"
    )


def _load_board(args) -> GridModel:
    if args.puzzle is None:
        return GridModel.from_givens(DEFAULT_DEGREE, DEFAULT_GIVENS)
    try:
        return GridModel.from_string(args.puzzle)
    except ValueError as e:
        print(f"Error parsing puzzle: {e}")
        sys.exit(1)


def _describe(move) -> str:
    if isinstance(move, ChangeGuess):
        return f"backtrack: {move.help}"
    verb = "guess" if isinstance(move, InitiateGuess) else "set"
    line = f"{verb} ({move.row}, {move.col}) = {move.digit}"
    return f"{line}: {move.help}" if move.help else line


def cmd_solve(args):
    """Handle the solve command."""
    board = _load_board(args)

    print("Input puzzle:")
    print(board)
    print()

    if args.json:
        board.subscribe("cli.json", lambda move: print(json.dumps(move.to_dict())))
    if args.trace:
        # Peer eliminations are too chatty to print one by one.
        def print_hint(move):
            if isinstance(move, (SetDigit, InitiateGuess, ChangeGuess)):
                print(_describe(move))
        board.subscribe("cli.trace", print_hint)

    engine = Engine(board, cascade=not args.no_cascade)
    stats = engine.run(max_steps=args.max_steps)

    print()
    if stats.solved:
        print(f"✓ Solved in {stats.steps:,} steps ({stats.time_seconds:.4f}s)")
    else:
        print(f"✗ Not solved: {stats.status.value} after {stats.steps:,} steps")
    print(f"  Guesses: {stats.guesses:,}")
    print(f"  Backtracks: {stats.backtracks:,}")
    for name, count in stats.moves_by_strategy.items():
        print(f"  {name} moves: {count:,}")
    print(board)

    if stats.status in (Status.UNSOLVABLE, Status.EXHAUSTED):
        sys.exit(2)


def cmd_hint(args):
    """Handle the hint command."""
    board = _load_board(args)
    engine = Engine(board, cascade=not args.no_cascade)

    for i in range(1, args.steps + 1):
        result = engine.step()
        if result.move is not None:
            print(f"{i}. [{result.strategy}] {_describe(result.move)}")
        if result.status == Status.BACKTRACKED:
            print("   (that led to a contradiction; a guess was changed)")
        if not result.made_progress:
            print(f"No further progress: {result.status.value}")
            break

    print()
    print(board)


def cmd_benchmark(args):
    """Handle the benchmark command."""
    try:
        puzzles = Benchmark.load_puzzles(args.file)
    except (OSError, ValueError) as e:
        print(f"Error reading {args.file}: {e}")
        sys.exit(1)

    print("=" * 60)
    print("SUDOKU ENGINE BENCHMARK")
    print("=" * 60)
    print(f"Puzzle file: {args.file}")
    print(f"Labels: {list(puzzles.keys())}")
    print(f"Output directory: {args.output}")
    print("=" * 60)

    benchmark = Benchmark(
        puzzles,
        cascade=not args.no_cascade,
        max_steps=args.max_steps,
    )
    results = benchmark.run()
    summary = benchmark.get_summary()

    print("\nBy Label:")
    print("-" * 50)
    for label, stats in summary["results_by_label"].items():
        print(f"\n{label}:")
        print(f"  Solved: {stats['accuracy']:.1f}% ({stats['total_solved']}/{stats['total_tested']})")
        print(f"  Avg Time: {stats['avg_time_seconds']:.4f}s")
        print(f"  Avg Steps: {stats['avg_steps']:.1f}")
        print(f"  Guesses: {stats['total_guesses']:,}  Backtracks: {stats['total_backtracks']:,}")

    benchmark.save_results(args.output)
    print(f"\nResults saved to {args.output}")

    if not args.no_charts and results:
        from .benchmark.visualizer import Visualizer

        print("\nGenerating charts...")
        visualizer = Visualizer(results, args.output)
        charts = visualizer.generate_all()
        visualizer.generate_summary_table()
        for chart in charts:
            print(f"  - {chart.split('/')[-1]}")

    print("\n" + "=" * 60)
    print("Benchmark complete!")


if __name__ == "__main__":
    main()
