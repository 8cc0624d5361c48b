"""Box-line (pointing) reduction."""

from __future__ import annotations
import logging
from typing import Iterator, Set

from .base_strategy import BaseStrategy
from ..core.board import GridModel
from ..core.moves import Move, RemovePossibility

log = logging.getLogger(__name__)


class BoxLineStrategy(BaseStrategy):
    """
    Eliminate candidates pointed at by a block.

    If, inside one block, every cell that can still hold a digit lies on the
    same row (or column), the digit must go in that row (or column) within
    the block, so it can be ruled out for the rest of the row (or column).
    """

    name = "BoxLine"

    def generate_moves(self, board: GridModel) -> Iterator[Move]:
        for top, left in board.iter_blocks():
            block_rows = range(top, top + board.degree)
            block_cols = range(left, left + board.degree)

            for digit in board.iter_digits():
                count = 0
                rows: Set[int] = set()
                cols: Set[int] = set()
                for r, c in board.iter_block(top, left):
                    if board.is_possible(r, c, digit):
                        count += 1
                        rows.add(r)
                        cols.add(c)

                # A single spot is a hidden single, handled elsewhere.
                if count <= 1:
                    continue

                if len(rows) == 1:
                    row = next(iter(rows))
                    msg = (
                        f"in block ({top}, {left}), {digit} can only be in row {row}, "
                        f"so it cannot be elsewhere in that row"
                    )
                    for r, c in board.iter_row(row):
                        if c in block_cols:
                            continue
                        if board.is_empty(r, c) and board.is_possible(r, c, digit):
                            log.debug("Add move: remove %d from (%d, %d) (row)", digit, r, c)
                            yield RemovePossibility(r, c, digit, msg)

                if len(cols) == 1:
                    col = next(iter(cols))
                    msg = (
                        f"in block ({top}, {left}), {digit} can only be in column {col}, "
                        f"so it cannot be elsewhere in that column"
                    )
                    for r, c in board.iter_col(col):
                        if r in block_rows:
                            continue
                        if board.is_empty(r, c) and board.is_possible(r, c, digit):
                            log.debug("Add move: remove %d from (%d, %d) (column)", digit, r, c)
                            yield RemovePossibility(r, c, digit, msg)
