"""Grid model: committed values plus the candidate-possibility cube."""

from __future__ import annotations
import logging
from typing import Callable, Dict, Iterable, Iterator, List, NamedTuple, Optional, Tuple

import numpy as np

from .givens import parse_givens
from .moves import Move, RemovePossibility, SetDigit

log = logging.getLogger(__name__)

Cell = Tuple[int, int]
Listener = Callable[[Move], None]


class GridSnapshot(NamedTuple):
    """Independent copy of a grid's values and possibilities."""
    val: np.ndarray
    poss: np.ndarray


class GridModel:
    """
    Sudoku grid of configurable degree.

    ``degree`` is the block size; the board side is ``degree ** 2``.
    The model is the single source of truth for:

    - ``val[r, c]``: committed digit, 0 for empty.
    - ``poss[r, c, d]``: True while digit ``d`` is still possible at (r, c).
      Index 0 is padding and always False.

    All mutations go through :meth:`set_digit` and :meth:`remove_possibility`,
    which notify registered listeners with one move per state change.
    """

    def __init__(self, degree: int = 3):
        """
        Initialize an empty grid.

        Args:
            degree: Block size (2 for 4x4, 3 for 9x9, 4 for 16x16).
        """
        if degree < 1:
            raise ValueError(f"Degree must be positive, got {degree}")

        self.degree = degree
        self.size = degree * degree

        self._val = np.zeros((self.size, self.size), dtype=np.int32)
        self._poss = np.ones((self.size, self.size, self.size + 1), dtype=bool)
        self._poss[:, :, 0] = False

        self._listeners: Dict[object, Listener] = {}
        self._contradiction: Optional[Cell] = None

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_givens(cls, degree: int, givens: Iterable[Tuple[int, int, int]]) -> GridModel:
        """Create a grid and commit each ``(row, col, digit)`` triple in order."""
        board = cls(degree)
        for row, col, digit in givens:
            board.set_digit(row, col, digit, help="given")
        return board

    @classmethod
    def from_string(cls, s: str) -> GridModel:
        """
        Create a grid from a compact puzzle string.

        The degree is inferred from the length (81 chars -> 9x9, 16 -> 4x4).
        """
        degree, givens = parse_givens(s)
        return cls.from_givens(degree, givens)

    def copy(self) -> GridModel:
        """Create a deep copy of the grid. Listeners are not copied."""
        new_board = GridModel(self.degree)
        new_board._val = self._val.copy()
        new_board._poss = self._poss.copy()
        new_board._contradiction = self._contradiction
        return new_board

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def _check_cell(self, row: int, col: int) -> None:
        if not (0 <= row < self.size and 0 <= col < self.size):
            raise ValueError(
                f"Cell ({row}, {col}) is outside a {self.size}x{self.size} grid"
            )

    def _check_digit(self, digit: int) -> None:
        if not 1 <= digit <= self.size:
            raise ValueError(f"Digit must be 1-{self.size}, got {digit}")

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def subscribe(self, listener_id: object, callback: Listener) -> None:
        """
        Register a callback for every emitted move.

        Re-subscribing an existing id replaces its callback but keeps its
        position in the call order.
        """
        self._listeners[listener_id] = callback

    def unsubscribe(self, listener_id: object) -> None:
        """Remove a registered listener. Unknown ids are ignored."""
        self._listeners.pop(listener_id, None)

    def emit(self, move: Move) -> None:
        """Notify all listeners synchronously, in registration order."""
        for callback in list(self._listeners.values()):
            callback(move)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def set_digit(self, row: int, col: int, digit: int, help: str = "") -> None:
        """
        Commit ``digit`` at (row, col).

        Collapses the cell's possibilities to ``digit`` and removes ``digit``
        from every other cell of the row, column and block. Each removal is
        emitted as its own event after the ``SetDigit`` event.

        Setting the value a cell already holds does nothing. Setting a digit
        that is no longer possible raises the contradiction flag instead of
        committing it.
        """
        self._check_cell(row, col)
        self._check_digit(digit)

        current = int(self._val[row, col])
        if current == digit:
            return
        if current != 0:
            raise ValueError(
                f"Cell ({row}, {col}) already holds {current}, cannot set {digit}"
            )
        if not self._poss[row, col, digit]:
            log.debug("Cannot set (%d, %d) to %d: not a candidate", row, col, digit)
            self._flag_contradiction(row, col)
            return

        log.debug("Set (%d, %d) to %d", row, col, digit)
        self._val[row, col] = digit
        self._poss[row, col, :] = False
        self._poss[row, col, digit] = True
        self.emit(SetDigit(row, col, digit, help))

        reason = f"{digit} was placed at ({row}, {col})"
        for r, c in self.iter_peers(row, col):
            self.remove_possibility(r, c, digit, help=reason)

    def remove_possibility(self, row: int, col: int, digit: int, help: str = "") -> None:
        """
        Rule out ``digit`` for (row, col).

        Idempotent: removing an already excluded digit emits nothing. If an
        empty cell is left without candidates the contradiction flag is set.
        """
        self._check_cell(row, col)
        self._check_digit(digit)

        if not self._poss[row, col, digit]:
            return
        if self._val[row, col] == digit:
            raise ValueError(
                f"Cannot remove {digit} from ({row}, {col}): it is the committed value"
            )

        self._poss[row, col, digit] = False
        self.emit(RemovePossibility(row, col, digit, help))

        if self._val[row, col] == 0 and not self._poss[row, col].any():
            self._flag_contradiction(row, col)

    def _flag_contradiction(self, row: int, col: int) -> None:
        # Keep the first offending cell; later ones add no information.
        if self._contradiction is None:
            log.debug("Contradiction at (%d, %d)", row, col)
            self._contradiction = (row, col)

    @property
    def contradiction(self) -> Optional[Cell]:
        """The cell that made the current state infeasible, or None."""
        return self._contradiction

    def snapshot(self) -> GridSnapshot:
        """Take an independent copy of values and possibilities."""
        return GridSnapshot(self._val.copy(), self._poss.copy())

    def restore(self, snapshot: GridSnapshot) -> None:
        """Roll back to ``snapshot``. The snapshot itself stays untouched."""
        if snapshot.val.shape != self._val.shape:
            raise ValueError("Snapshot does not match this grid's size")
        self._val[...] = snapshot.val
        self._poss[...] = snapshot.poss
        self._contradiction = None

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get(self, row: int, col: int) -> int:
        """Get value at (row, col). 0 means empty."""
        self._check_cell(row, col)
        return int(self._val[row, col])

    def is_empty(self, row: int, col: int) -> bool:
        """Check if cell is empty (value is 0)."""
        return self.get(row, col) == 0

    def is_possible(self, row: int, col: int, digit: int) -> bool:
        """Check if ``digit`` is still a candidate at (row, col)."""
        self._check_cell(row, col)
        self._check_digit(digit)
        return bool(self._poss[row, col, digit])

    def candidates(self, row: int, col: int) -> List[int]:
        """Ascending list of digits still possible at (row, col)."""
        self._check_cell(row, col)
        return [int(d) for d in np.flatnonzero(self._poss[row, col])]

    @property
    def values(self) -> np.ndarray:
        """Read-only view of the value matrix."""
        view = self._val.view()
        view.flags.writeable = False
        return view

    @property
    def possibilities(self) -> np.ndarray:
        """Read-only view of the possibility cube."""
        view = self._poss.view()
        view.flags.writeable = False
        return view

    def count_empty(self) -> int:
        """Count the number of empty cells."""
        return int(np.sum(self._val == 0))

    def count_filled(self) -> int:
        """Count the number of filled cells."""
        return int(np.sum(self._val != 0))

    def is_complete(self) -> bool:
        """Check if all cells are filled."""
        return self.count_empty() == 0

    def is_valid(self) -> bool:
        """Check that no row, column or block holds a duplicate value."""
        groups = [list(self.iter_row(i)) for i in range(self.size)]
        groups += [list(self.iter_col(i)) for i in range(self.size)]
        groups += [list(self.iter_block(r, c)) for r, c in self.iter_blocks()]

        for group in groups:
            values = [self._val[r, c] for r, c in group if self._val[r, c] != 0]
            if len(values) != len(set(values)):
                return False
        return True

    def is_solved(self) -> bool:
        """Check if the puzzle is completely and correctly filled."""
        return self.is_complete() and self.is_valid()

    # ------------------------------------------------------------------
    # Iteration
    # ------------------------------------------------------------------

    def iter_row(self, row: int) -> Iterator[Cell]:
        for col in range(self.size):
            yield row, col

    def iter_col(self, col: int) -> Iterator[Cell]:
        for row in range(self.size):
            yield row, col

    def block_origin(self, row: int, col: int) -> Cell:
        """Top-left corner of the block containing (row, col)."""
        return (row // self.degree) * self.degree, (col // self.degree) * self.degree

    def iter_block(self, row: int, col: int) -> Iterator[Cell]:
        top, left = self.block_origin(row, col)
        for r in range(top, top + self.degree):
            for c in range(left, left + self.degree):
                yield r, c

    def iter_others_in_row(self, row: int, col: int) -> Iterator[Cell]:
        return (cell for cell in self.iter_row(row) if cell != (row, col))

    def iter_others_in_col(self, row: int, col: int) -> Iterator[Cell]:
        return (cell for cell in self.iter_col(col) if cell != (row, col))

    def iter_others_in_block(self, row: int, col: int) -> Iterator[Cell]:
        return (cell for cell in self.iter_block(row, col) if cell != (row, col))

    def iter_peers(self, row: int, col: int) -> Iterator[Cell]:
        """
        Other cells of the row, then column, then block.

        Cells shared by two groups are yielded once per group.
        """
        yield from self.iter_others_in_row(row, col)
        yield from self.iter_others_in_col(row, col)
        yield from self.iter_others_in_block(row, col)

    def iter_all(self) -> Iterator[Cell]:
        """All cells in row-major order."""
        for row in range(self.size):
            yield from self.iter_row(row)

    def iter_digits(self) -> Iterator[int]:
        return iter(range(1, self.size + 1))

    def iter_other_digits(self, digit: int) -> Iterator[int]:
        return (d for d in self.iter_digits() if d != digit)

    def iter_blocks(self) -> Iterator[Cell]:
        """Top-left corners of every block, in row-major block order."""
        for top in range(0, self.size, self.degree):
            for left in range(0, self.size, self.degree):
                yield top, left

    # ------------------------------------------------------------------
    # Text output
    # ------------------------------------------------------------------

    @staticmethod
    def _symbol(value: int) -> str:
        if value <= 9:
            return str(value)
        return chr(ord('A') + value - 10)

    def to_string(self) -> str:
        """Compact representation: 0 for empty, 1-9 then A-Z."""
        return ''.join(self._symbol(int(v)) for v in self._val.flatten())

    def __str__(self) -> str:
        """Pretty-print the grid."""
        lines = []
        horizontal_sep = '+' + (('-' * (self.degree * 2 + 1)) + '+') * self.degree

        for i in range(self.size):
            if i % self.degree == 0:
                lines.append(horizontal_sep)

            row_str = '|'
            for j in range(self.size):
                val = int(self._val[i, j])
                row_str += ' .' if val == 0 else f' {self._symbol(val)}'
                if (j + 1) % self.degree == 0:
                    row_str += ' |'

            lines.append(row_str)

        lines.append(horizontal_sep)
        return '\n'.join(lines)

    def __repr__(self) -> str:
        return f"GridModel(degree={self.degree}, filled={self.count_filled()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GridModel):
            return False
        return (
            self.degree == other.degree
            and np.array_equal(self._val, other._val)
            and np.array_equal(self._poss, other._poss)
        )

