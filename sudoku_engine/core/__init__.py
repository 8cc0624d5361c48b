"""Core module: grid model, move protocol, and validation."""

from .board import GridModel, GridSnapshot
from .givens import DEFAULT_GIVENS, DEFAULT_DEGREE, parse_givens
from .moves import (
    Move,
    MoveKind,
    SetDigit,
    RemovePossibility,
    InitiateGuess,
    ChangeGuess,
)
from .validator import check_invariants, invariant_violations, validate_solution

__all__ = [
    "GridModel",
    "GridSnapshot",
    "DEFAULT_GIVENS",
    "DEFAULT_DEGREE",
    "parse_givens",
    "Move",
    "MoveKind",
    "SetDigit",
    "RemovePossibility",
    "InitiateGuess",
    "ChangeGuess",
    "check_invariants",
    "invariant_violations",
    "validate_solution",
]
