"""Strategies module: deduction rules and the guess fallback."""

from .base_strategy import BaseStrategy
from .obvious import ObviousStrategy
from .box_line import BoxLineStrategy
from .guess import GuessStrategy

__all__ = [
    "BaseStrategy",
    "ObviousStrategy",
    "BoxLineStrategy",
    "GuessStrategy",
    "default_strategies",
]


def default_strategies() -> list:
    """A fresh list of strategies in priority order."""
    return [ObviousStrategy(), BoxLineStrategy(), GuessStrategy()]
