"""Pretty-print helpers for crossword sessions."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, List

from ..core.constants import DIRECTIONS
from ..core.models import CellState

if TYPE_CHECKING:
    from ..engine.session import CrosswordSession


VOID_SYMBOL = "#"
EMPTY_SYMBOL = "."


def cell_symbol(state: CellState) -> str:
    if not state.covered:
        return VOID_SYMBOL
    return state.guess or EMPTY_SYMBOL


def format_grid(session: CrosswordSession) -> str:
    rows, cols = session.dimensions
    focus = session.focus_state.cell
    header_cells = [f"{c:>2}" for c in range(cols)]
    lines = ["    " + " ".join(header_cells)]
    lines.append("    " + "-" * (3 * cols - 1))
    for r in range(rows):
        rendered: List[str] = []
        for c in range(cols):
            symbol = cell_symbol(session.cell_state(r, c))
            marker = "*" if focus == (r, c) else " "
            rendered.append(f"{marker}{symbol}")
        lines.append(f"{r:>2} | " + " ".join(rendered))
    return "\n".join(lines)


def format_clues(session: CrosswordSession) -> str:
    lines: List[str] = []
    for direction in DIRECTIONS:
        lines.append(direction.value.upper())
        for state in session.clue_states(direction):
            mark = "✓" if state.correct else " "
            lines.append(f"  {mark} {state.number:>2}. {state.clue}")
    return "\n".join(lines)


def pretty_print_session(session: CrosswordSession, *, label: str | None = None, stream=None) -> None:
    """Print the grid and clue lists in a human-friendly format."""

    stream = stream or sys.stdout
    if label:
        print(label, file=stream)
    print(format_grid(session), file=stream)
    print(format_clues(session), file=stream)
