"""Correctness checks and the events they raise.

The engine compares the guess store against the layout and reports state
transitions to the host through a :class:`CrosswordCallbacks` object handed
in with each call. Events are delivered synchronously, in the order the
underlying state changes, within the call that caused them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Set, Tuple

from ..core.constants import DIRECTIONS, Direction
from ..core.models import AnswerTuple, CellKey, Clue
from ..utils.logger import get_logger
from .guesses import GuessStore
from .layout import Puzzle


LOGGER = get_logger(__name__)

ClueId = Tuple[Direction, int]


@dataclass
class CrosswordCallbacks:
    """Host-owned event handlers. Any handler may be left as ``None``."""

    on_cell_change: Optional[Callable[[int, int, str], None]] = None
    on_correct: Optional[Callable[[Direction, int, str], None]] = None
    on_loaded_correct: Optional[Callable[[List[AnswerTuple]], None]] = None
    on_crossword_correct: Optional[Callable[[bool], None]] = None
    on_answer_complete: Optional[Callable[[Direction, int, bool, str], None]] = None
    on_crossword_complete: Optional[Callable[[bool], None]] = None
    on_clue_selected: Optional[Callable[[Direction, int], None]] = None

    def emit(self, event: str, *args) -> None:
        handler = getattr(self, event)
        LOGGER.debug("Event %s%r", event, args)
        if handler is not None:
            handler(*args)


NO_CALLBACKS = CrosswordCallbacks()


class CorrectnessEngine:
    """Tracks per-clue and global correctness and raises edge-triggered events."""

    def __init__(self, puzzle: Puzzle) -> None:
        self.puzzle = puzzle
        self.alphabet = puzzle.alphabet
        self._correct: Set[ClueId] = set()
        self._complete: Dict[ClueId, bool] = {}
        self._crossword_correct = False
        self._crossword_complete = False

    # ------------------------------------------------------------------
    # Pure checks
    # ------------------------------------------------------------------

    def check_clue(self, clue: Clue, guesses: GuessStore) -> Tuple[bool, bool]:
        """Return ``(answered, correct)`` for ``clue`` under the current guesses."""
        answered = True
        correct = True
        for key in clue.cells:
            guess = guesses[key]
            if not guess:
                answered = False
                correct = False
                break
            if not self.alphabet.matches(self.puzzle.cells[key].answer, guess):
                correct = False
        return answered, correct

    def is_cell_correct(self, row: int, col: int, guesses: GuessStore) -> bool:
        cell = self.puzzle.cell(row, col)
        if cell is None:
            return False
        return self.alphabet.matches(cell.answer, guesses[cell.key])

    def is_clue_correct(self, direction: Direction, number: int) -> bool:
        return (Direction(direction), number) in self._correct

    def is_clue_answered(self, direction: Direction, number: int) -> bool:
        return (Direction(direction), number) in self._complete

    def is_crossword_correct(self) -> bool:
        return self._crossword_correct

    def is_crossword_complete(self) -> bool:
        return self._crossword_complete

    def correct_answers(self) -> List[AnswerTuple]:
        return [clue.as_answer_tuple() for clue in self.puzzle.ordered_clues() if clue.identity in self._correct]

    # ------------------------------------------------------------------
    # Recomputation passes
    # ------------------------------------------------------------------

    def load(
        self,
        guesses: GuessStore,
        callbacks: CrosswordCallbacks = NO_CALLBACKS,
        report_loaded: bool = True,
        was_correct: bool = False,
        was_complete: bool = False,
    ) -> List[AnswerTuple]:
        """Establish the baseline from the initial guesses.

        No previous per-clue state exists at load, so instead of per-clue
        transitions the already-correct clues are reported once through
        ``on_loaded_correct``. The global events compare against
        ``was_correct`` / ``was_complete``, the values last reported for the
        puzzle this load replaces.
        """

        self._correct.clear()
        self._complete.clear()
        self._crossword_correct = was_correct
        self._crossword_complete = was_complete
        for clue in self.puzzle.ordered_clues():
            answered, correct = self.check_clue(clue, guesses)
            if answered:
                self._complete[clue.identity] = correct
            if correct:
                self._correct.add(clue.identity)

        loaded = self.correct_answers()
        if loaded and report_loaded:
            callbacks.emit("on_loaded_correct", loaded)
        self._update_global(callbacks)
        return loaded

    def recompute(
        self,
        guesses: GuessStore,
        callbacks: CrosswordCallbacks = NO_CALLBACKS,
        affected: Optional[Iterable[CellKey]] = None,
    ) -> None:
        """Re-check the clues covering ``affected`` cells (all clues if ``None``)."""

        for clue in self._clues_for(affected):
            answered, correct = self.check_clue(clue, guesses)
            identity = clue.identity
            previous = self._complete.get(identity)
            if answered:
                self._complete[identity] = correct
                if previous is None or previous != correct:
                    callbacks.emit("on_answer_complete", clue.direction, clue.number, correct, clue.answer)
            else:
                self._complete.pop(identity, None)
            if correct and identity not in self._correct:
                self._correct.add(identity)
                callbacks.emit("on_correct", clue.direction, clue.number, clue.answer)
            elif not correct:
                self._correct.discard(identity)
        self._update_global(callbacks)

    def _clues_for(self, affected: Optional[Iterable[CellKey]]) -> List[Clue]:
        if affected is None:
            return self.puzzle.ordered_clues()
        wanted: Dict[ClueId, Clue] = {}
        for row, col in affected:
            for clue in self.puzzle.covering_clues(row, col):
                wanted[clue.identity] = clue
        return [wanted[identity] for identity in sorted(wanted, key=_clue_order)]

    def _update_global(self, callbacks: CrosswordCallbacks) -> None:
        total = len(self.puzzle.clues)
        complete = len(self._complete) == total
        correct = len(self._correct) == total
        was_complete, was_correct = self._crossword_complete, self._crossword_correct
        self._crossword_complete = complete
        self._crossword_correct = correct
        if complete and (not was_complete or correct != was_correct):
            callbacks.emit("on_crossword_complete", correct)
        if correct != was_correct:
            LOGGER.info("Crossword correct: %s", correct)
            callbacks.emit("on_crossword_correct", correct)


def _clue_order(identity: ClueId) -> Tuple[int, int]:
    direction, number = identity
    return (DIRECTIONS.index(direction), number)
