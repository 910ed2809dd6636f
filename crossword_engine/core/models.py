"""Data models supporting the crossword engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from .constants import Direction

CellKey = Tuple[int, int]
AnswerTuple = Tuple[Direction, int, str]


@dataclass(frozen=True)
class ClueDefinition:
    """An authored clue entry, immutable once loaded."""

    direction: Direction
    number: int
    clue: str
    answer: str
    row: int
    col: int

    @property
    def cells(self) -> List[CellKey]:
        dr, dc = self.direction.step
        return [(self.row + dr * i, self.col + dc * i) for i in range(len(self.answer))]


@dataclass(frozen=True)
class Cell:
    """A covered grid cell.

    ``answer`` is the authored character expected here. ``across`` and
    ``down`` hold the numbers of the covering clues. The player's guess is
    not part of the layout and lives in the guess store.

    ``numbers`` lists every clue number starting here, lowest first. When an
    across and a down clue start on the same cell with different numbers
    both are kept, and ``number`` is the lowest of them.
    """

    row: int
    col: int
    answer: str
    across: Optional[int] = None
    down: Optional[int] = None
    number: Optional[int] = None
    numbers: Tuple[int, ...] = ()

    @property
    def key(self) -> CellKey:
        return (self.row, self.col)

    def clue_number(self, direction: Direction) -> Optional[int]:
        return self.across if direction is Direction.ACROSS else self.down

    def directions(self) -> List[Direction]:
        found = []
        if self.across is not None:
            found.append(Direction.ACROSS)
        if self.down is not None:
            found.append(Direction.DOWN)
        return found


@dataclass(frozen=True)
class Clue:
    """A resolved clue: its definition plus the ordered keys of its cells."""

    definition: ClueDefinition
    cells: Tuple[CellKey, ...]

    @property
    def direction(self) -> Direction:
        return self.definition.direction

    @property
    def number(self) -> int:
        return self.definition.number

    @property
    def answer(self) -> str:
        return self.definition.answer

    @property
    def text(self) -> str:
        return self.definition.clue

    @property
    def identity(self) -> Tuple[Direction, int]:
        return (self.definition.direction, self.definition.number)

    def as_answer_tuple(self) -> AnswerTuple:
        return (self.definition.direction, self.definition.number, self.definition.answer)


@dataclass(frozen=True)
class CellState:
    """Read-only view of one cell for the rendering layer."""

    row: int
    col: int
    covered: bool
    guess: str = ""
    number: Optional[int] = None
    correct: bool = False
    across: Optional[int] = None
    down: Optional[int] = None
    numbers: Tuple[int, ...] = ()

@dataclass(frozen=True)
class ClueState:
    """Read-only view of one clue for the rendering layer."""

    direction: Direction
    number: int
    clue: str
    answer: str
    cells: Tuple[CellKey, ...]
    answered: bool
    correct: bool
