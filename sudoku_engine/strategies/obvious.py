"""Naked and hidden single detection."""

from __future__ import annotations
import logging
from typing import Iterator

from .base_strategy import BaseStrategy
from ..core.board import GridModel
from ..core.moves import Move, SetDigit

log = logging.getLogger(__name__)


class ObviousStrategy(BaseStrategy):
    """
    Find cells whose digit is forced.

    Two cases are reported, both as ``SetDigit`` moves:

    - Naked single: the cell has exactly one candidate left.
    - Hidden single: a candidate of the cell is ruled out for every other
      cell of its row, column or block.

    Cells are scanned in row-major order and digits in ascending order. A
    naked single cell is not checked for hidden singles.
    """

    name = "Obvious"

    def generate_moves(self, board: GridModel) -> Iterator[Move]:
        for row, col in board.iter_all():
            if not board.is_empty(row, col):
                continue

            possible_digits = board.candidates(row, col)

            if len(possible_digits) == 1:
                digit = possible_digits[0]
                log.debug("Add move (%d, %d) = %d (only option)", row, col, digit)
                yield SetDigit(row, col, digit, "this was the only digit this cell could be")
                continue

            for digit in possible_digits:
                groups = self._unique_groups(board, row, col, digit)
                if groups:
                    msg = "this digit was only possible here for this " + ", ".join(groups)
                    log.debug("Add move (%d, %d) = %d %s", row, col, digit, msg)
                    yield SetDigit(row, col, digit, msg)

    @staticmethod
    def _unique_groups(board: GridModel, row: int, col: int, digit: int) -> list:
        """Names of the groups in which (row, col) is the only place for ``digit``."""
        def possible_elsewhere(cells) -> bool:
            return any(board.is_possible(r, c, digit) for r, c in cells)

        groups = []
        if not possible_elsewhere(board.iter_others_in_row(row, col)):
            groups.append("row")
        if not possible_elsewhere(board.iter_others_in_col(row, col)):
            groups.append("column")
        if not possible_elsewhere(board.iter_others_in_block(row, col)):
            groups.append("block")
        return groups
