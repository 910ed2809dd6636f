"""Layout builder: compiles a clue map into an immutable, indexed grid."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from ..core.constants import DIRECTIONS, Bounds, Direction
from ..core.exceptions import (ConflictingCellsError, EmptyAnswerError, InvalidPuzzleDataError,
                               LayoutError, UnknownClueError)
from ..core.models import Cell, CellKey, Clue, ClueDefinition
from ..data.normalization import DEFAULT_ALPHABET, AlphabetPolicy
from ..data.puzzle_data import ensure_clue_map
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


class Puzzle:
    """The built layout: every resolved clue plus the cells they cover.

    Clues reference cells by ``(row, col)`` key, so an intersection is a
    single ``Cell`` shared by an across and a down clue.
    """

    def __init__(
        self,
        cells: Dict[CellKey, Cell],
        clues: Dict[Tuple[Direction, int], Clue],
        alphabet: AlphabetPolicy,
    ) -> None:
        self._cells = MappingProxyType(dict(cells))
        self._clues = MappingProxyType(dict(clues))
        self.alphabet = alphabet
        rows = max((row for row, _ in cells), default=-1) + 1
        cols = max((col for _, col in cells), default=-1) + 1
        self.bounds = Bounds(rows=rows, cols=cols)
        self._by_direction: Dict[Direction, Tuple[Clue, ...]] = {
            direction: tuple(
                sorted(
                    (clue for clue in clues.values() if clue.direction is direction),
                    key=lambda clue: (clue.number, clue.definition.row, clue.definition.col),
                )
            )
            for direction in DIRECTIONS
        }

    # ------------------------------------------------------------------
    # Read-only queries
    # ------------------------------------------------------------------

    @property
    def rows(self) -> int:
        return self.bounds.rows

    @property
    def cols(self) -> int:
        return self.bounds.cols

    @property
    def cells(self) -> Mapping[CellKey, Cell]:
        return self._cells

    @property
    def clues(self) -> Mapping[Tuple[Direction, int], Clue]:
        return self._clues

    def has_cell(self, row: int, col: int) -> bool:
        return (row, col) in self._cells

    def cell(self, row: int, col: int) -> Optional[Cell]:
        return self._cells.get((row, col))

    def clue(self, direction: Direction | str, number: int) -> Clue:
        try:
            return self._clues[(Direction(direction), int(number))]
        except (KeyError, TypeError, ValueError) as exc:
            raise UnknownClueError(f"No clue {number}-{direction}") from exc

    def clues_in(self, direction: Direction) -> Tuple[Clue, ...]:
        """Clues of one direction in ascending number order."""
        return self._by_direction[direction]

    def ordered_clues(self) -> List[Clue]:
        """All clues, across before down, each in ascending number order."""
        return [clue for direction in DIRECTIONS for clue in self._by_direction[direction]]

    def covering_clues(self, row: int, col: int) -> List[Clue]:
        cell = self._cells.get((row, col))
        if cell is None:
            return []
        return [self._clues[(direction, cell.clue_number(direction))] for direction in cell.directions()]

    def clue_for_cell(self, row: int, col: int, direction: Direction) -> Optional[Clue]:
        cell = self._cells.get((row, col))
        if cell is None:
            return None
        number = cell.clue_number(direction)
        if number is None:
            return None
        return self._clues[(direction, number)]

    def first_clue(self) -> Optional[Clue]:
        """The clue focus defaults to: across preferred, lowest number."""
        for direction in DIRECTIONS:
            if self._by_direction[direction]:
                return self._by_direction[direction][0]
        return None

    def __iter__(self) -> Iterator[Cell]:
        return iter(self._cells.values())

    def __len__(self) -> int:
        return len(self._cells)

    def __repr__(self) -> str:
        return f"Puzzle(rows={self.rows}, cols={self.cols}, clues={len(self._clues)})"


@dataclass
class _CellDraft:
    answer: str
    across: Optional[int] = None
    down: Optional[int] = None
    numbers: List[int] = field(default_factory=list)
    first_direction: Direction = field(default=Direction.ACROSS)


def build_puzzle(
    clue_map: Mapping[Any, Any],
    alphabet: Optional[AlphabetPolicy] = None,
) -> Puzzle:
    """Compile ``clue_map`` into a :class:`Puzzle`.

    ``clue_map`` may be raw puzzle data or the output of
    :func:`parse_clue_map`. Structural problems raise a :class:`LayoutError`
    subclass and no puzzle is produced.
    """

    alphabet = alphabet or DEFAULT_ALPHABET
    parsed = ensure_clue_map(clue_map)
    if not any(parsed.get(direction) for direction in DIRECTIONS):
        raise InvalidPuzzleDataError("Puzzle data contains no clues")

    for direction in DIRECTIONS:
        for number, definition in parsed.get(direction, {}).items():
            if not definition.answer:
                raise EmptyAnswerError(direction, number)

    drafts: Dict[CellKey, _CellDraft] = {}
    clues: Dict[Tuple[Direction, int], Clue] = {}
    for direction in DIRECTIONS:
        for number, definition in sorted(parsed.get(direction, {}).items()):
            keys = definition.cells
            for index, key in enumerate(keys):
                _place_character(drafts, key, definition, definition.answer[index], alphabet)
            start = drafts[keys[0]]
            if number not in start.numbers:
                start.numbers.append(number)
            clues[(direction, number)] = Clue(definition=definition, cells=tuple(keys))

    cells = {
        key: Cell(
            row=key[0],
            col=key[1],
            answer=draft.answer,
            across=draft.across,
            down=draft.down,
            number=min(draft.numbers, default=None),
            numbers=tuple(sorted(draft.numbers)),
        )
        for key, draft in drafts.items()
    }
    puzzle = Puzzle(cells, clues, alphabet)
    LOGGER.info(
        "Built puzzle %dx%d with %d clues over %d cells",
        puzzle.rows,
        puzzle.cols,
        len(clues),
        len(cells),
    )
    return puzzle


def _place_character(
    drafts: Dict[CellKey, _CellDraft],
    key: CellKey,
    definition: ClueDefinition,
    char: str,
    alphabet: AlphabetPolicy,
) -> None:
    direction = definition.direction
    draft = drafts.get(key)
    if draft is None:
        draft = _CellDraft(answer=char, first_direction=direction)
        drafts[key] = draft
    else:
        if alphabet.normalize(draft.answer) != alphabet.normalize(char):
            raise ConflictingCellsError(key[0], key[1], draft.first_direction, direction)
        existing = draft.across if direction is Direction.ACROSS else draft.down
        if existing is not None:
            raise LayoutError(
                f"Clues {existing}-{direction.value} and {definition.number}-{direction.value} "
                f"overlap at {key}"
            )
    if direction is Direction.ACROSS:
        draft.across = definition.number
    else:
        draft.down = definition.number
