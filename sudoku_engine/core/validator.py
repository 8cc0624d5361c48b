"""Validation utilities for grid states and solutions."""

from __future__ import annotations
from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from .board import GridModel


def invariant_violations(board: GridModel) -> List[str]:
    """
    Describe every broken model invariant.

    Checks that no group holds a duplicate value and that each set cell has
    exactly its own digit marked possible.

    Returns:
        A list of messages, empty when the state is consistent.
    """
    problems = []

    if not board.is_valid():
        problems.append("duplicate value in a row, column or block")

    for row, col in board.iter_all():
        value = board.get(row, col)
        if value == 0:
            continue
        candidates = board.candidates(row, col)
        if candidates != [value]:
            problems.append(
                f"cell ({row}, {col}) holds {value} but has candidates {candidates}"
            )

    return problems


def check_invariants(board: GridModel) -> bool:
    """True if the grid state satisfies all model invariants."""
    return not invariant_violations(board)


def validate_solution(puzzle: GridModel, solution: GridModel) -> bool:
    """
    Validate that a solution correctly solves the puzzle.

    Args:
        puzzle: The original puzzle.
        solution: The proposed solution.

    Returns:
        True if solution is complete, valid and matches puzzle clues.
    """
    if puzzle.size != solution.size:
        return False

    for row, col in puzzle.iter_all():
        if not puzzle.is_empty(row, col):
            if puzzle.get(row, col) != solution.get(row, col):
                return False

    return solution.is_solved()
