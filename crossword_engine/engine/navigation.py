"""Focus and navigation state machine.

The navigator tracks the current direction, clue number and cell, and
computes movement targets against the layout. It never leaves the set of
covered cells: a move towards an uncovered cell is a no-op.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from ..core.constants import Direction, WrapPolicy
from ..core.models import CellKey, Clue
from ..utils.logger import get_logger
from .guesses import GuessStore
from .layout import Puzzle


LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class FocusState:
    direction: Direction = Direction.ACROSS
    number: Optional[int] = None
    cell: Optional[CellKey] = None
    has_focus: bool = False


class Navigator:
    """Keeps the focus state for one play session."""

    def __init__(self, puzzle: Puzzle, guesses: GuessStore, wrap: WrapPolicy = WrapPolicy.STOP) -> None:
        self.puzzle = puzzle
        self.guesses = guesses
        self.wrap = WrapPolicy(wrap)
        self.direction = Direction.ACROSS
        self.number: Optional[int] = None
        self.cell: Optional[CellKey] = None
        self.has_focus = False

    @property
    def state(self) -> FocusState:
        return FocusState(
            direction=self.direction,
            number=self.number,
            cell=self.cell,
            has_focus=self.has_focus,
        )

    @property
    def current_clue(self) -> Optional[Clue]:
        if self.number is None:
            return None
        return self.puzzle.clue(self.direction, self.number)

    # ------------------------------------------------------------------
    # Focus
    # ------------------------------------------------------------------

    def focus(self) -> FocusState:
        self.has_focus = True
        if self.cell is None:
            clue = self.puzzle.first_clue()
            if clue is not None:
                self._set(clue.direction, clue.number, clue.cells[0])
        return self.state

    def blur(self) -> FocusState:
        self.has_focus = False
        return self.state

    # ------------------------------------------------------------------
    # Movement
    # ------------------------------------------------------------------

    def move(self, row_delta: int, col_delta: int) -> bool:
        """Move by a grid offset along one axis, e.g. an arrow key.

        Returns whether focus moved. Diagonal offsets never move focus.
        """

        if self.cell is None or (row_delta == 0) == (col_delta == 0):
            return False
        target = (self.cell[0] + row_delta, self.cell[1] + col_delta)
        if not self.puzzle.has_cell(*target):
            return False
        self._go(target, Direction.for_delta(row_delta, col_delta))
        return True

    def move_to(self, row: int, col: int, direction: Optional[Direction] = None) -> bool:
        """Move to an absolute cell, e.g. a click.

        Selecting the current cell again without a direction toggles between
        its across and down clues.
        """

        if not self.puzzle.has_cell(row, col):
            return False
        if direction is None:
            if self.cell == (row, col):
                return self.toggle_direction()
            direction = self.direction
        self._go((row, col), Direction(direction))
        return True

    def select_clue(self, direction: Direction, number: int) -> FocusState:
        """Focus a clue at its first empty cell, or its first cell when full."""

        clue = self.puzzle.clue(direction, number)
        target = next(
            (key for key in clue.cells if not self.guesses.is_filled(*key)),
            clue.cells[0],
        )
        self._set(clue.direction, clue.number, target)
        return self.state

    def advance_after_guess(self) -> bool:
        """Step forward along the current clue, then on to the next clue."""

        clue = self.current_clue
        if clue is None or self.cell is None:
            return False
        index = clue.cells.index(self.cell)
        if index + 1 < len(clue.cells):
            self.cell = clue.cells[index + 1]
            return True

        following = self._following_clue(clue)
        if following is None:
            return False
        self._set(following.direction, following.number, following.cells[0])
        return True

    def retreat(self) -> bool:
        """Step back one cell inside the current clue."""

        clue = self.current_clue
        if clue is None or self.cell is None:
            return False
        index = clue.cells.index(self.cell)
        if index == 0:
            return False
        self.cell = clue.cells[index - 1]
        return True

    def toggle_direction(self) -> bool:
        if self.cell is None:
            return False
        other = self.puzzle.clue_for_cell(self.cell[0], self.cell[1], self.direction.other)
        if other is None:
            return False
        self.direction = other.direction
        self.number = other.number
        return True

    def next_clue(self) -> FocusState:
        return self._step_clue(1)

    def previous_clue(self) -> FocusState:
        return self._step_clue(-1)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _set(self, direction: Direction, number: int, cell: CellKey) -> None:
        self.direction = direction
        self.number = number
        self.cell = cell
        LOGGER.debug("Focus on %d-%s at %s", number, direction.value, cell)

    def _go(self, target: CellKey, direction: Direction) -> None:
        clue = self.puzzle.clue_for_cell(target[0], target[1], direction)
        if clue is None:
            clue = self.puzzle.clue_for_cell(target[0], target[1], direction.other)
        self._set(clue.direction, clue.number, target)

    def _following_clue(self, clue: Clue) -> Optional[Clue]:
        same: List[Clue] = list(self.puzzle.clues_in(clue.direction))
        index = same.index(clue)
        if index + 1 < len(same):
            return same[index + 1]
        if self.wrap is WrapPolicy.STOP:
            return None
        if self.wrap is WrapPolicy.SWITCH_DIRECTION:
            other = self.puzzle.clues_in(clue.direction.other)
            if other:
                return other[0]
        return same[0]

    def _step_clue(self, offset: int) -> FocusState:
        ordered = self.puzzle.ordered_clues()
        clue = self.current_clue
        if clue is None:
            target = ordered[0] if offset > 0 else ordered[-1]
        else:
            target = ordered[(ordered.index(clue) + offset) % len(ordered)]
        return self.select_clue(target.direction, target.number)
