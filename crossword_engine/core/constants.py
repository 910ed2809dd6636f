"""Shared constants and enumerations for the crossword engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class Direction(str, Enum):
    """Word directions supported by the grid.

    Values are the lowercase names used in puzzle data and in callbacks, so a
    ``Direction`` compares equal to ``"across"`` / ``"down"``.
    """

    ACROSS = "across"
    DOWN = "down"

    @property
    def step(self) -> Tuple[int, int]:
        return (0, 1) if self is Direction.ACROSS else (1, 0)

    @property
    def other(self) -> "Direction":
        return Direction.DOWN if self is Direction.ACROSS else Direction.ACROSS

    @classmethod
    def for_delta(cls, row_delta: int, col_delta: int) -> "Direction":
        """Return the axis a movement by ``(row_delta, col_delta)`` travels along."""
        if row_delta and col_delta:
            raise ValueError(f"Diagonal offset ({row_delta}, {col_delta}) has no axis")
        return cls.ACROSS if col_delta != 0 else cls.DOWN


DIRECTIONS: Tuple[Direction, ...] = (Direction.ACROSS, Direction.DOWN)


class WrapPolicy(str, Enum):
    """What ``advance_after_guess`` does after the last clue of a direction."""

    STOP = "stop"
    WRAP_DIRECTION = "wrap_direction"
    SWITCH_DIRECTION = "switch_direction"


class LoadedCorrectPolicy(str, Enum):
    """When ``on_loaded_correct`` is reported."""

    EVERY_LOAD = "every_load"
    FIRST_LOAD_ONLY = "first_load_only"


@dataclass(frozen=True)
class Bounds:
    """Simple rectangle bounds helper."""

    rows: int
    cols: int
