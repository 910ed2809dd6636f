"""Crossword play engine.

Turns declarative clue data into a consistent grid, tracks guesses, checks
answers per clue and for the whole puzzle, and drives focus and navigation
for a host UI. The public API surface:

- ``crossword_engine.engine.session.CrosswordSession``: the imperative API a UI drives.
- ``crossword_engine.engine.layout.build_puzzle``: compiles clue data into a layout.
- ``crossword_engine.engine.correctness.CrosswordCallbacks``: host event handlers.
"""

from .core.constants import Direction, LoadedCorrectPolicy, WrapPolicy
from .core.exceptions import CrosswordError, GuessError, LayoutError
from .data.normalization import AlphabetPolicy
from .engine.correctness import CrosswordCallbacks
from .engine.layout import Puzzle, build_puzzle
from .engine.session import CrosswordSession, SessionConfig
from .engine.session_store import SessionStore

__all__ = [
    "AlphabetPolicy",
    "CrosswordCallbacks",
    "CrosswordError",
    "CrosswordSession",
    "Direction",
    "GuessError",
    "LayoutError",
    "LoadedCorrectPolicy",
    "Puzzle",
    "SessionConfig",
    "SessionStore",
    "WrapPolicy",
    "build_puzzle",
]

__version__ = "0.1.0"
