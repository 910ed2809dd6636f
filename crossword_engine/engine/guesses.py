"""Per-cell guess storage for a play session."""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Tuple

from ..core.exceptions import InvalidGuessError, NoCellAtError
from ..core.models import CellKey
from ..utils.logger import get_logger
from .layout import Puzzle


LOGGER = get_logger(__name__)


class GuessStore:
    """Mutable mapping from covered cell to the guessed character.

    Every covered cell has an entry; ``""`` means the cell is empty. Each
    mutating method reports the keys it changed so the caller can run one
    correctness pass for the whole mutation.
    Guesses are kept in the alphabet policy's composed form, so a halfwidth
    voiced kana such as ``"ｺﾞ"`` is stored as the single character ``"ゴ"``.
    """

    def __init__(self, puzzle: Puzzle) -> None:
        self.puzzle = puzzle
        self._guesses: Dict[CellKey, str] = {key: "" for key in puzzle.cells}

    def get(self, row: int, col: int) -> str:
        try:
            return self._guesses[(row, col)]
        except KeyError as exc:
            raise NoCellAtError(row, col) from exc

    def is_filled(self, row: int, col: int) -> bool:
        return bool(self._guesses.get((row, col)))

    def set_guess(self, row: int, col: int, char: str) -> bool:
        """Store ``char`` at ``(row, col)``; ``""`` clears the cell.

        Returns whether the stored value changed. Raises
        :class:`NoCellAtError` when no clue covers the cell.
        """

        key = (row, col)
        if key not in self._guesses:
            raise NoCellAtError(row, col)
        char = self._coerce(char)
        if self._guesses[key] == char:
            return False
        self._guesses[key] = char
        LOGGER.debug("Guess at %s set to %r", key, char)
        return True

    def fill_all_answers(self) -> List[CellKey]:
        """Set every cell to its expected character in one batch."""
        return self._apply((cell.key, cell.answer) for cell in self.puzzle)

    def reset(self) -> List[CellKey]:
        """Clear every cell."""
        return self._apply((key, "") for key in self._guesses)

    def restore(self, guesses: Mapping[CellKey, str]) -> List[CellKey]:
        """Load previously saved guesses, skipping cells the layout lacks."""
        accepted: List[Tuple[CellKey, str]] = []
        for key, char in guesses.items():
            if key not in self._guesses:
                LOGGER.warning("Ignoring saved guess for uncovered cell %s", key)
                continue
            try:
                accepted.append((key, self._coerce(char)))
            except InvalidGuessError:
                LOGGER.warning("Ignoring invalid saved guess %r at %s", char, key)
        return self._apply(accepted)

    def snapshot(self) -> Dict[CellKey, str]:
        return dict(self._guesses)

    def filled(self) -> Dict[CellKey, str]:
        return {key: char for key, char in self._guesses.items() if char}

    def __getitem__(self, key: CellKey) -> str:
        return self._guesses[key]

    def __contains__(self, key: object) -> bool:
        return key in self._guesses

    def _apply(self, updates: Iterable[Tuple[CellKey, str]]) -> List[CellKey]:
        changed: List[CellKey] = []
        for key, char in updates:
            if self._guesses[key] != char:
                self._guesses[key] = char
                changed.append(key)
        return changed

    def _coerce(self, char: str) -> str:
        if char is None:
            return ""
        if not isinstance(char, str):
            raise InvalidGuessError(f"Guess must be a string, got {type(char).__name__}")
        char = self.puzzle.alphabet.compose(char)
        if len(char) > 1:
            raise InvalidGuessError(f"Guess {char!r} is longer than one character")
        return char
