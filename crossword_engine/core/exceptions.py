"""Custom exception hierarchy for the crossword engine."""

from __future__ import annotations


def _label(direction) -> str:
    return getattr(direction, "value", str(direction))


class CrosswordError(Exception):
    """Base exception for engine failures."""


class LayoutError(CrosswordError):
    """Raised when puzzle data cannot be compiled into a usable layout."""


class InvalidPuzzleDataError(LayoutError):
    """Raised when the raw clue map is malformed."""


class DuplicateClueError(LayoutError):
    """Raised when a clue number appears twice within one direction."""

    def __init__(self, direction: str, number: int) -> None:
        super().__init__(f"Duplicate clue number {number} in direction {_label(direction)}")
        self.direction = direction
        self.number = number


class EmptyAnswerError(LayoutError):
    """Raised when a clue has a zero-length answer."""

    def __init__(self, direction: str, number: int) -> None:
        super().__init__(f"Clue {number}-{_label(direction)} has an empty answer")
        self.direction = direction
        self.number = number


class ConflictingCellsError(LayoutError):
    """Raised when two intersecting clues disagree on a shared cell."""

    def __init__(self, row: int, col: int, direction_a: str, direction_b: str) -> None:
        super().__init__(
            f"Conflicting characters at ({row},{col}) between {_label(direction_a)} and {_label(direction_b)}"
        )
        self.row = row
        self.col = col
        self.direction_a = direction_a
        self.direction_b = direction_b


class GuessError(CrosswordError):
    """Raised when a guess cannot be applied."""


class NoCellAtError(GuessError):
    """Raised when guessing into a cell no clue covers."""

    def __init__(self, row: int, col: int) -> None:
        super().__init__(f"No cell at ({row},{col})")
        self.row = row
        self.col = col


class InvalidGuessError(GuessError):
    """Raised when a guess is longer than a single character."""


class UnknownClueError(CrosswordError):
    """Raised when a ``(direction, number)`` pair names no clue."""
