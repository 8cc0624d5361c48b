"""Base strategy interface."""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Iterator, Optional

from ..core.board import GridModel
from ..core.moves import Move


class BaseStrategy(ABC):
    """
    Abstract base class for move-producing strategies.

    A strategy reads the current grid and lazily yields candidate moves.
    It never mutates the grid: the engine applies one move at a time and
    asks again, so a strategy must not assume that its earlier moves have
    been applied.
    """

    name: str = "BaseStrategy"

    @abstractmethod
    def generate_moves(self, board: GridModel) -> Iterator[Move]:
        """
        Yield moves justified by the current state of ``board``.

        Args:
            board: The grid to reason over (treated as read-only).

        Returns:
            An iterator of moves, in the strategy's deterministic order.
        """
        pass

    def first_move(self, board: GridModel) -> Optional[Move]:
        """Return the first move this strategy would make, or None."""
        return next(iter(self.generate_moves(board)), None)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
