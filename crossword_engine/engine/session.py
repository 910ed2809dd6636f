"""Host-facing crossword session.

A :class:`CrosswordSession` ties together the built layout, the guess store,
the correctness engine and the navigator for one puzzle, and exposes the
imperative API a UI drives (``focus``, ``set_guess``, ``fill_all_answers``,
``reset``) plus read-only queries for rendering. Sessions share no state;
two sessions over the same data are fully independent.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from ..core.constants import DIRECTIONS, Direction, LoadedCorrectPolicy, WrapPolicy
from ..core.models import AnswerTuple, CellState, ClueState
from ..data.normalization import DEFAULT_ALPHABET, AlphabetPolicy
from ..data.puzzle_data import puzzle_key
from ..utils.logger import get_logger
from .correctness import CorrectnessEngine, CrosswordCallbacks
from .guesses import GuessStore
from .layout import Puzzle, build_puzzle
from .navigation import FocusState, Navigator
from .session_store import SessionStore


LOGGER = get_logger(__name__)


@dataclass
class SessionConfig:
    """Configuration values driving a play session."""

    wrap_policy: WrapPolicy = WrapPolicy.STOP
    loaded_correct_policy: LoadedCorrectPolicy = LoadedCorrectPolicy.EVERY_LOAD
    alphabet: AlphabetPolicy = field(default_factory=lambda: DEFAULT_ALPHABET)
    autosave: bool = True


class CrosswordSession:
    """One play session over one puzzle."""

    def __init__(
        self,
        data: Mapping[Any, Any],
        callbacks: Optional[CrosswordCallbacks] = None,
        config: Optional[SessionConfig] = None,
        store: Optional[SessionStore] = None,
        storage_key: Optional[str] = None,
    ) -> None:
        self.callbacks = callbacks or CrosswordCallbacks()
        self.config = config or SessionConfig()
        self.store = store
        self._storage_key = storage_key
        self._load_count = 0
        self.data: Mapping[Any, Any] = {}
        self.engine: Optional[CorrectnessEngine] = None
        self.load(data)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self, data: Mapping[Any, Any]) -> None:
        """Build a fresh layout from ``data`` and replace all play state.

        The layout is built before anything is replaced, so a structural
        error leaves the previous puzzle (if any) untouched.
        """

        puzzle = build_puzzle(data, alphabet=self.config.alphabet)
        guesses = GuessStore(puzzle)
        key = self._storage_key or puzzle_key(data)
        if self.store is not None:
            saved = self.store.load(key)
            if saved:
                guesses.restore(saved)

        previous = self.engine
        was_correct = previous.is_crossword_correct() if previous is not None else False
        was_complete = previous.is_crossword_complete() if previous is not None else False

        self.data = data
        self.key = key
        self.puzzle: Puzzle = puzzle
        self.guesses = guesses
        self.navigator = Navigator(puzzle, guesses, wrap=self.config.wrap_policy)
        self.engine = CorrectnessEngine(puzzle)

        report = (
            self._load_count == 0
            or self.config.loaded_correct_policy is LoadedCorrectPolicy.EVERY_LOAD
        )
        self._load_count += 1
        self.engine.load(
            guesses,
            self.callbacks,
            report_loaded=report,
            was_correct=was_correct,
            was_complete=was_complete,
        )

    def set_data(self, data: Mapping[Any, Any]) -> bool:
        """Rebuild only when ``data`` is a different object from the current one."""
        if data is self.data:
            return False
        self.load(data)
        return True

    # ------------------------------------------------------------------
    # Imperative API
    # ------------------------------------------------------------------

    def focus(self) -> FocusState:
        return self._navigate(self.navigator.focus)

    def blur(self) -> FocusState:
        return self.navigator.blur()

    def set_guess(self, row: int, col: int, char: str) -> bool:
        """Set one cell's guess; raises :class:`GuessError` without side effects."""

        if not self.guesses.set_guess(row, col, char):
            return False
        self.callbacks.emit("on_cell_change", row, col, self.guesses.get(row, col))
        self.engine.recompute(self.guesses, self.callbacks, affected=[(row, col)])
        self._autosave()
        return True

    def fill_all_answers(self) -> None:
        changed = self.guesses.fill_all_answers()
        self.engine.recompute(self.guesses, self.callbacks)
        if changed:
            self._autosave()

    def reset(self) -> None:
        self.guesses.reset()
        self.engine.recompute(self.guesses, self.callbacks)
        if self.store is not None:
            self.store.clear(self.key)

    def enter_character(self, char: str) -> bool:
        """Type ``char`` into the focused cell and advance."""

        cell = self.navigator.cell
        if cell is None:
            return False
        self.set_guess(cell[0], cell[1], char)
        self._navigate(self.navigator.advance_after_guess)
        return True

    def delete_character(self) -> bool:
        """Clear the focused cell and step back inside the clue."""

        cell = self.navigator.cell
        if cell is None:
            return False
        self.set_guess(cell[0], cell[1], "")
        self.navigator.retreat()
        return True

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def move(self, row_delta: int, col_delta: int) -> bool:
        return self._navigate(self.navigator.move, row_delta, col_delta)

    def move_to(self, row: int, col: int, direction: Optional[Direction] = None) -> bool:
        return self._navigate(self.navigator.move_to, row, col, direction)

    def select_clue(self, direction: Direction, number: int) -> FocusState:
        return self._navigate(self.navigator.select_clue, direction, number)

    def next_clue(self) -> FocusState:
        return self._navigate(self.navigator.next_clue)

    def previous_clue(self) -> FocusState:
        return self._navigate(self.navigator.previous_clue)

    def toggle_direction(self) -> bool:
        return self._navigate(self.navigator.toggle_direction)

    # ------------------------------------------------------------------
    # Read-only queries
    # ------------------------------------------------------------------

    @property
    def dimensions(self) -> Tuple[int, int]:
        return (self.puzzle.rows, self.puzzle.cols)

    @property
    def focus_state(self) -> FocusState:
        return self.navigator.state

    def is_crossword_correct(self) -> bool:
        return self.engine.is_crossword_correct()

    def is_crossword_complete(self) -> bool:
        return self.engine.is_crossword_complete()

    def correct_answers(self) -> List[AnswerTuple]:
        return self.engine.correct_answers()

    def cell_state(self, row: int, col: int) -> CellState:
        cell = self.puzzle.cell(row, col)
        if cell is None:
            return CellState(row=row, col=col, covered=False)
        return CellState(
            row=row,
            col=col,
            covered=True,
            guess=self.guesses[cell.key],
            number=cell.number,
            numbers=cell.numbers,
            correct=self.engine.is_cell_correct(row, col, self.guesses),
            across=cell.across,
            down=cell.down,
        )

    def clue_state(self, direction: Direction, number: int) -> ClueState:
        clue = self.puzzle.clue(direction, number)
        return ClueState(
            direction=clue.direction,
            number=clue.number,
            clue=clue.text,
            answer=clue.answer,
            cells=clue.cells,
            answered=self.engine.is_clue_answered(clue.direction, clue.number),
            correct=self.engine.is_clue_correct(clue.direction, clue.number),
        )

    def clue_states(self, direction: Direction) -> List[ClueState]:
        return [self.clue_state(clue.direction, clue.number) for clue in self.puzzle.clues_in(Direction(direction))]

    def to_jsonable(self) -> Dict[str, Any]:
        """Frontend-ready snapshot of the whole session."""

        focus = self.navigator.state
        return {
            "rows": self.puzzle.rows,
            "cols": self.puzzle.cols,
            "grid": [
                [self._cell_jsonable(row, col) for col in range(self.puzzle.cols)]
                for row in range(self.puzzle.rows)
            ],
            "clues": {
                direction.value: [
                    {
                        "number": state.number,
                        "clue": state.clue,
                        "cells": [list(key) for key in state.cells],
                        "answered": state.answered,
                        "correct": state.correct,
                    }
                    for state in self.clue_states(direction)
                ]
                for direction in DIRECTIONS
            },
            "focus": {
                "direction": focus.direction.value,
                "number": focus.number,
                "cell": list(focus.cell) if focus.cell is not None else None,
                "has_focus": focus.has_focus,
            },
            "complete": self.is_crossword_complete(),
            "correct": self.is_crossword_correct(),
        }

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _cell_jsonable(self, row: int, col: int) -> Optional[Dict[str, Any]]:
        state = self.cell_state(row, col)
        if not state.covered:
            return None
        return {
            "guess": state.guess,
            "number": state.number,
            "numbers": list(state.numbers),
            "correct": state.correct,
            "across": state.across,
            "down": state.down,
        }

    def _navigate(self, action: Callable[..., Any], *args: Any) -> Any:
        before = (self.navigator.direction, self.navigator.number)
        result = action(*args)
        after = (self.navigator.direction, self.navigator.number)
        if after != before and after[1] is not None:
            self.callbacks.emit("on_clue_selected", after[0], after[1])
        return result

    def _autosave(self) -> None:
        if self.store is not None and self.config.autosave:
            self.store.save(self.key, self.guesses.snapshot())
