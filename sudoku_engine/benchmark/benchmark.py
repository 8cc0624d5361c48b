"""Batch runs of the engine over a set of puzzles."""

from __future__ import annotations
import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from tqdm import tqdm

from ..core.board import GridModel
from ..engine import Engine

log = logging.getLogger(__name__)


@dataclass
class BenchmarkResult:
    """Results from running the engine on one puzzle."""
    puzzle_id: int
    label: str
    puzzle: str
    status: str
    solved: bool
    time_seconds: float = 0.0
    memory_bytes: int = 0
    steps: int = 0
    guesses: int = 0
    backtracks: int = 0
    max_depth: int = 0
    moves_by_strategy: Dict[str, int] = field(default_factory=dict)
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "puzzle_id": self.puzzle_id,
            "label": self.label,
            "puzzle": self.puzzle,
            "status": self.status,
            "solved": self.solved,
            "time_seconds": self.time_seconds,
            "memory_bytes": self.memory_bytes,
            "memory_mb": self.memory_bytes / (1024 * 1024),
            "steps": self.steps,
            "guesses": self.guesses,
            "backtracks": self.backtracks,
            "max_depth": self.max_depth,
            "moves_by_strategy": dict(self.moves_by_strategy),
            **self.extra
        }


class Benchmark:
    """
    Run the engine to completion on many puzzles and collect statistics.

    Puzzles are compact strings grouped under labels (for instance a source
    file or a difficulty name).
    """

    def __init__(
        self,
        puzzles: Union[Dict[str, List[str]], List[str]],
        cascade: bool = True,
        max_steps: Optional[int] = None,
    ):
        """
        Initialize the benchmark.

        Args:
            puzzles: Puzzle strings, either a plain list or label -> list.
            cascade: Passed to each Engine.
            max_steps: Step cap per puzzle (None for no limit).
        """
        if isinstance(puzzles, dict):
            self.puzzles = {label: list(items) for label, items in puzzles.items()}
        else:
            self.puzzles = {"default": list(puzzles)}
        self.cascade = cascade
        self.max_steps = max_steps
        self.results: List[BenchmarkResult] = []

    @staticmethod
    def load_puzzles(path: str) -> Dict[str, List[str]]:
        """
        Read puzzles from a text file.

        Each non-blank line holds a puzzle string, optionally preceded by a
        label and whitespace. Lines starting with ``#`` are skipped.
        Raises ValueError on a line with more than two fields.
        """
        puzzles: Dict[str, List[str]] = {}
        with open(path, "r") as f:
            for lineno, line in enumerate(f, 1):
                line = line.strip()
                if not line or line.startswith("#"):
                    continue
                parts = line.split()
                if len(parts) > 2:
                    raise ValueError(f"{path}:{lineno}: expected [label] puzzle, got {line!r}")
                label, puzzle = (parts[0], parts[1]) if len(parts) == 2 else ("default", parts[0])
                puzzles.setdefault(label, []).append(puzzle)
        return puzzles

    def run(self, show_progress: bool = True) -> List[BenchmarkResult]:
        """
        Run the engine on every puzzle.

        Returns:
            List of BenchmarkResult objects.
        """
        self.results = []
        total = sum(len(items) for items in self.puzzles.values())

        pbar = tqdm(total=total, desc="Solving", disable=not show_progress)

        for label, items in self.puzzles.items():
            for puzzle_id, puzzle in enumerate(items):
                self.results.append(self._run_single(puzzle, puzzle_id, label))
                pbar.update(1)

        pbar.close()
        return self.results

    def _run_single(self, puzzle: str, puzzle_id: int, label: str) -> BenchmarkResult:
        """Run the engine on a single puzzle."""
        try:
            board = GridModel.from_string(puzzle)
        except ValueError as e:
            log.warning("Skipping puzzle %s/%d: %s", label, puzzle_id, e)
            return BenchmarkResult(
                puzzle_id=puzzle_id,
                label=label,
                puzzle=puzzle,
                status="invalid",
                solved=False,
                extra={"error": str(e)}
            )

        engine = Engine(board, cascade=self.cascade)
        stats = engine.run(max_steps=self.max_steps)

        return BenchmarkResult(
            puzzle_id=puzzle_id,
            label=label,
            puzzle=puzzle,
            status=stats.status.value,
            solved=stats.solved,
            time_seconds=stats.time_seconds,
            memory_bytes=stats.memory_bytes,
            steps=stats.steps,
            guesses=stats.guesses,
            backtracks=stats.backtracks,
            max_depth=stats.max_depth,
            moves_by_strategy=stats.moves_by_strategy,
            extra={"solution": board.to_string()} if stats.solved else {}
        )

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics from benchmark results."""
        summary = {
            "total_puzzles": len(self.results),
            "labels": list(self.puzzles.keys()),
            "results_by_label": {},
            "status_counts": {},
        }

        for result in self.results:
            counts = summary["status_counts"]
            counts[result.status] = counts.get(result.status, 0) + 1

        for label in self.puzzles:
            label_results = [r for r in self.results if r.label == label]
            if not label_results:
                continue

            solved = [r for r in label_results if r.solved]
            times = [r.time_seconds for r in label_results]
            steps = [r.steps for r in label_results]
            moves: Dict[str, int] = {}
            for r in label_results:
                for name, count in r.moves_by_strategy.items():
                    moves[name] = moves.get(name, 0) + count

            summary["results_by_label"][label] = {
                "accuracy": len(solved) / len(label_results) * 100,
                "avg_time_seconds": sum(times) / len(times),
                "max_time_seconds": max(times),
                "avg_steps": sum(steps) / len(steps),
                "total_guesses": sum(r.guesses for r in label_results),
                "total_backtracks": sum(r.backtracks for r in label_results),
                "moves_by_strategy": moves,
                "total_solved": len(solved),
                "total_tested": len(label_results)
            }

        return summary

    def save_results(self, output_dir: str) -> None:
        """Save raw results and the summary as JSON."""
        os.makedirs(output_dir, exist_ok=True)

        results_file = os.path.join(output_dir, "benchmark_results.json")
        with open(results_file, "w") as f:
            json.dump([r.to_dict() for r in self.results], f, indent=2)

        summary_file = os.path.join(output_dir, "benchmark_summary.json")
        with open(summary_file, "w") as f:
            json.dump(self.get_summary(), f, indent=2)

        log.info("Results saved to %s", output_dir)
