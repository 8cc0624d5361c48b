"""Engine driver: runs strategies in priority order, one move per step."""

from __future__ import annotations
import logging
import time
import tracemalloc
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from .controller import GuessController
from .status import Status
from ..core.board import GridModel
from ..core.moves import Move
from ..strategies import BaseStrategy, default_strategies

log = logging.getLogger(__name__)


@dataclass
class StepResult:
    """What a single call to :meth:`Engine.step` did."""
    status: Status
    move: Optional[Move] = None
    strategy: str = ""

    @property
    def made_progress(self) -> bool:
        return self.status.made_progress


@dataclass
class EngineStats:
    """Statistics from an engine run."""
    # Core metrics
    status: Status = Status.STUCK
    solved: bool = False
    time_seconds: float = 0.0
    memory_bytes: int = 0
    steps: int = 0

    # Search metrics
    guesses: int = 0
    backtracks: int = 0
    max_depth: int = 0

    moves_by_strategy: Dict[str, int] = field(default_factory=dict)
    events_by_kind: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary."""
        return {
            "status": self.status.value,
            "solved": self.solved,
            "time_seconds": self.time_seconds,
            "memory_bytes": self.memory_bytes,
            "steps": self.steps,
            "guesses": self.guesses,
            "backtracks": self.backtracks,
            "max_depth": self.max_depth,
            "moves_by_strategy": dict(self.moves_by_strategy),
            "events_by_kind": dict(self.events_by_kind),
        }


class Engine:
    """
    Step-by-step Sudoku engine.

    Each :meth:`step` asks the strategies, in the order given, for moves and
    applies the first move of the first strategy that has one. Contradictions
    are resolved by the guess controller before the step returns.
    """

    def __init__(
        self,
        board: GridModel,
        strategies: Optional[Sequence[BaseStrategy]] = None,
        cascade: bool = True,
    ):
        """
        Initialize the engine.

        Args:
            board: The grid to play on. The engine mutates it in place.
            strategies: Strategies in priority order. Defaults to obvious
                        singles, box-line reduction, then guessing.
            cascade: Backtrack through older guesses once a guess runs out
                     of alternatives.
        """
        self.board = board
        self.strategies: List[BaseStrategy] = (
            list(strategies) if strategies is not None else default_strategies()
        )
        self.controller = GuessController(board, cascade=cascade)
        self.steps = 0
        self.moves_by_strategy: Counter = Counter()

    def step(self) -> StepResult:
        """
        Apply at most one move.

        Returns:
            A StepResult. ``made_progress`` is False when the grid is solved,
            no strategy has a move, or the search has failed.
        """
        log.debug("Stepping...")

        if self.board.contradiction is not None:
            status = self.controller.resolve()
            if status.made_progress:
                self.steps += 1
            return StepResult(status)

        for strategy in self.strategies:
            move = strategy.first_move(self.board)
            if move is None:
                continue

            log.debug("Applying %s from %s", move, strategy.name)
            status = self.controller.apply(move)
            self.steps += 1
            self.moves_by_strategy[strategy.name] += 1
            return StepResult(status, move, strategy.name)

        if self.board.is_complete():
            return StepResult(Status.SOLVED)
        log.debug("No strategy found a move")
        return StepResult(Status.STUCK)

    def run(self, max_steps: Optional[int] = None) -> EngineStats:
        """
        Step until no more progress is possible.

        Args:
            max_steps: Stop after this many steps (None for no limit).

        Returns:
            EngineStats for this run. ``status`` is the last step's status, or
            SOLVED/MOVED from the current grid when no step ran. ``max_depth``
            is the deepest guess stack seen during this run.
        """
        events: Counter = Counter()

        def count_event(move: Move) -> None:
            events[move.kind.value] += 1

        self.board.subscribe("engine.run", count_event)
        tracemalloc.start()
        start_time = time.perf_counter()
        steps_before = self.steps
        strategy_counts_before = Counter(self.moves_by_strategy)
        guesses_before = self.controller.guesses
        backtracks_before = self.controller.backtracks
        depth_before = self.controller.max_depth
        self.controller.max_depth = self.controller.depth

        try:
            result = StepResult(Status.SOLVED if self.board.is_solved() else Status.MOVED)
            while max_steps is None or self.steps - steps_before < max_steps:
                result = self.step()
                if not result.made_progress:
                    break
        finally:
            elapsed = time.perf_counter() - start_time
            _, peak = tracemalloc.get_traced_memory()
            tracemalloc.stop()
            self.board.unsubscribe("engine.run")
            run_depth = self.controller.max_depth
            self.controller.max_depth = max(depth_before, run_depth)

        stats = EngineStats(
            status=result.status,
            solved=self.board.is_solved(),
            time_seconds=elapsed,
            memory_bytes=peak,
            steps=self.steps - steps_before,
            guesses=self.controller.guesses - guesses_before,
            backtracks=self.controller.backtracks - backtracks_before,
            max_depth=run_depth,
            moves_by_strategy=dict(self.moves_by_strategy - strategy_counts_before),
            events_by_kind=dict(events),
        )

        if stats.solved:
            log.info("Solved in %d steps (%d guesses, %d backtracks)",
                     stats.steps, stats.guesses, stats.backtracks)
        elif result.status.made_progress:
            log.info("Stopped after %d steps", stats.steps)
        else:
            log.info("Run ended: %s after %d steps", result.status.value, stats.steps)
        return stats
