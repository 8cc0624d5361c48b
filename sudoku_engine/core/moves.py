"""Moves: the events that mutate a grid and the records strategies produce."""

from __future__ import annotations
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, ClassVar, Dict, Union


class MoveKind(Enum):
    """Tag for each kind of move."""
    SET_DIGIT = "set_digit"
    REMOVE_POSSIBILITY = "remove_possibility"
    INITIATE_GUESS = "initiate_guess"
    CHANGE_GUESS = "change_guess"


@dataclass(frozen=True)
class _CellMove:
    row: int
    col: int
    digit: int
    help: str = ""

    kind: ClassVar[MoveKind]

    def to_dict(self) -> Dict[str, Any]:
        """Wire form of the move; ``help`` is left out when empty."""
        data = {"kind": self.kind.value, **asdict(self)}
        if not self.help:
            del data["help"]
        return data


@dataclass(frozen=True)
class SetDigit(_CellMove):
    """Commit ``digit`` at (row, col)."""
    kind: ClassVar[MoveKind] = MoveKind.SET_DIGIT


@dataclass(frozen=True)
class RemovePossibility(_CellMove):
    """Rule out ``digit`` as a candidate for (row, col)."""
    kind: ClassVar[MoveKind] = MoveKind.REMOVE_POSSIBILITY


@dataclass(frozen=True)
class InitiateGuess(_CellMove):
    """Speculatively commit ``digit`` at (row, col), keeping a checkpoint."""
    kind: ClassVar[MoveKind] = MoveKind.INITIATE_GUESS


@dataclass(frozen=True)
class ChangeGuess:
    """Retract the most recent guess and try its next candidate."""
    help: str = ""

    kind: ClassVar[MoveKind] = MoveKind.CHANGE_GUESS

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"kind": self.kind.value}
        if self.help:
            data["help"] = self.help
        return data


Move = Union[SetDigit, RemovePossibility, InitiateGuess, ChangeGuess]
