"""Step-by-step Sudoku engine: candidate model, deduction strategies, backtracking."""

from .core import GridModel, DEFAULT_GIVENS, DEFAULT_DEGREE
from .engine import Engine, Status

__all__ = ["GridModel", "Engine", "Status", "DEFAULT_GIVENS", "DEFAULT_DEGREE"]
