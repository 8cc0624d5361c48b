"""Outcome of applying a move or taking a step."""

from enum import Enum


class Status(Enum):
    """Result of a controller operation or an engine step."""
    MOVED = "moved"              # a move was applied, no contradiction
    BACKTRACKED = "backtracked"  # a contradiction was resolved by changing a guess
    SOLVED = "solved"            # nothing to do: every cell is filled
    STUCK = "stuck"              # nothing to do: no strategy found a move
    UNSOLVABLE = "unsolvable"    # contradiction without any guess to retract
    EXHAUSTED = "exhausted"      # every guessed alternative led to a contradiction

    @property
    def made_progress(self) -> bool:
        return self in (Status.MOVED, Status.BACKTRACKED)

    @property
    def is_terminal(self) -> bool:
        return not self.made_progress
