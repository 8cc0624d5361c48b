"""Guess checkpoints and backtracking."""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .status import Status
from ..core.board import GridModel, GridSnapshot
from ..core.moves import (
    ChangeGuess,
    InitiateGuess,
    Move,
    RemovePossibility,
    SetDigit,
)

log = logging.getLogger(__name__)


@dataclass
class GuessCheckpoint:
    """State saved before a guess, plus the alternatives not yet tried."""
    row: int
    col: int
    guessed_digit: int
    remaining_digits: List[int]
    snapshot: GridSnapshot = field(repr=False)


class GuessController:
    """
    Maintain the guess stack and recover from contradictions.

    Every mutation made through the controller is followed by a
    contradiction check; a contradiction retracts the most recent guess and
    commits its next candidate, repeatedly, until the grid is consistent or
    no alternative is left.

    With ``cascade=True`` an exhausted checkpoint is dropped and the next
    older guess is advanced instead (depth-first search). With
    ``cascade=False`` the search stops at the first exhausted checkpoint.
    """

    def __init__(self, board: GridModel, cascade: bool = True):
        self.board = board
        self.cascade = cascade
        self.stack: List[GuessCheckpoint] = []
        self.exhausted = False

        self.guesses = 0
        self.backtracks = 0
        self.max_depth = 0

    @property
    def depth(self) -> int:
        """Number of live guesses."""
        return len(self.stack)

    @property
    def top(self) -> Optional[GuessCheckpoint]:
        return self.stack[-1] if self.stack else None

    def initiate_guess(self, row: int, col: int, digit: int, help: str = "") -> Status:
        """
        Speculatively commit ``digit`` at (row, col).

        The cell must be empty with at least two candidates, one of which is
        ``digit``. The other candidates are kept, in ascending order, as
        alternatives for backtracking.
        """
        if self.board.contradiction is not None:
            raise ValueError("Cannot guess while the grid holds a contradiction")
        if not self.board.is_empty(row, col):
            raise ValueError(f"Cannot guess on ({row}, {col}): cell already set")
        candidates = self.board.candidates(row, col)
        if len(candidates) < 2:
            raise ValueError(
                f"Cannot guess on ({row}, {col}): needs at least two candidates, has {candidates}"
            )
        if digit not in candidates:
            raise ValueError(f"Cannot guess {digit} on ({row}, {col}): candidates are {candidates}")

        checkpoint = GuessCheckpoint(
            row=row,
            col=col,
            guessed_digit=digit,
            remaining_digits=[d for d in candidates if d != digit],
            snapshot=self.board.snapshot(),
        )
        self.stack.append(checkpoint)
        self.guesses += 1
        self.max_depth = max(self.max_depth, len(self.stack))
        log.debug("Guess (%d, %d) = %d, depth %d", row, col, digit, len(self.stack))

        self.board.emit(InitiateGuess(row, col, digit, help))
        self.board.set_digit(row, col, digit, help=help)
        return self.resolve()

    def change_guess(self, help: Optional[str] = None) -> bool:
        """
        Retract the most recent guess and commit its next alternative.

        Returns:
            True if a new alternative is now live, False if the search ran
            out of alternatives.

        Raises:
            ValueError: If there is no guess to change.
        """
        if not self.stack:
            raise ValueError("No guess to change")

        while self.stack:
            checkpoint = self.stack.pop()
            self.backtracks += 1

            if not checkpoint.remaining_digits:
                log.debug(
                    "Guess at (%d, %d) has no alternatives left",
                    checkpoint.row, checkpoint.col,
                )
                if self.cascade:
                    continue
                self.exhausted = True
                return False

            previous = checkpoint.guessed_digit
            checkpoint.guessed_digit = checkpoint.remaining_digits.pop(0)
            self.board.restore(checkpoint.snapshot)
            msg = help if help is not None else (
                f"guessing {previous} at ({checkpoint.row}, {checkpoint.col}) "
                f"led to a contradiction; trying {checkpoint.guessed_digit}"
            )
            log.debug("%s", msg)
            self.board.set_digit(checkpoint.row, checkpoint.col, checkpoint.guessed_digit, help=msg)
            self.stack.append(checkpoint)
            self.board.emit(ChangeGuess(msg))
            return True

        self.exhausted = True
        return False

    def resolve(self) -> Status:
        """
        Backtrack until the grid has no contradiction.

        Returns:
            MOVED if there was nothing to resolve, BACKTRACKED if a guess was
            changed, UNSOLVABLE if the contradiction arose without any guess,
            EXHAUSTED if every alternative was tried.
        """
        status = Status.MOVED
        while self.board.contradiction is not None:
            if self.exhausted:
                return Status.EXHAUSTED
            if not self.stack:
                log.warning("Contradiction at %s with no guess to retract", self.board.contradiction)
                return Status.UNSOLVABLE
            if not self.change_guess():
                log.warning("Backtracking exhausted after %d guesses", self.guesses)
                return Status.EXHAUSTED
            status = Status.BACKTRACKED
        return status

    def apply(self, move: Move) -> Status:
        """Apply any kind of move, then resolve contradictions."""
        if isinstance(move, SetDigit):
            self.board.set_digit(move.row, move.col, move.digit, help=move.help)
        elif isinstance(move, RemovePossibility):
            self.board.remove_possibility(move.row, move.col, move.digit, help=move.help)
        elif isinstance(move, InitiateGuess):
            return self.initiate_guess(move.row, move.col, move.digit, help=move.help)
        elif isinstance(move, ChangeGuess):
            if not self.change_guess(move.help or None):
                return Status.EXHAUSTED
            status = self.resolve()
            return Status.BACKTRACKED if status == Status.MOVED else status
        else:
            raise ValueError(f"Unknown move: {move!r}")
        return self.resolve()
