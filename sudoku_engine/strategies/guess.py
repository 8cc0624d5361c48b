"""Guess fallback used when no deduction applies."""

from __future__ import annotations
import logging
from typing import Iterator

from .base_strategy import BaseStrategy
from ..core.board import GridModel
from ..core.moves import InitiateGuess, Move

log = logging.getLogger(__name__)


class GuessStrategy(BaseStrategy):
    """
    Start a speculative assignment.

    Picks the first empty cell in row-major order that has more than one
    candidate and guesses its smallest candidate. The fixed order keeps
    search traces reproducible.
    """

    name = "Guess"

    def generate_moves(self, board: GridModel) -> Iterator[Move]:
        for row, col in board.iter_all():
            if not board.is_empty(row, col):
                continue
            candidates = board.candidates(row, col)
            if len(candidates) > 1:
                log.debug("Add move: guess (%d, %d) = %d of %s", row, col, candidates[0], candidates)
                yield InitiateGuess(
                    row, col, candidates[0],
                    f"no deduction applies; guessing {candidates[0]} "
                    f"out of {', '.join(map(str, candidates))}"
                )
                return
