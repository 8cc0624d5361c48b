"""Engine module: guess controller and step driver."""

from .status import Status
from .controller import GuessCheckpoint, GuessController
from .driver import Engine, EngineStats, StepResult

__all__ = [
    "Status",
    "GuessCheckpoint",
    "GuessController",
    "Engine",
    "EngineStats",
    "StepResult",
]
