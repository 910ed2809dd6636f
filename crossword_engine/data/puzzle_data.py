"""Parsing and validation of raw puzzle data.

Puzzle data is a mapping with ``across`` and ``down`` entries, each mapping a
clue number to ``{"clue": ..., "answer": ..., "row": ..., "col": ...}``. Data
read from JSON arrives with string keys, so numeric strings are accepted as
clue numbers.
"""

from __future__ import annotations

import hashlib
import json
import unicodedata
from pathlib import Path
from typing import Any, Dict, Mapping

from ..core.constants import DIRECTIONS, Direction
from ..core.exceptions import DuplicateClueError, InvalidPuzzleDataError
from ..core.models import ClueDefinition
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

ClueMap = Dict[Direction, Dict[int, ClueDefinition]]

REQUIRED_FIELDS = ("clue", "answer", "row", "col")


def parse_clue_map(raw: Mapping[Any, Any]) -> ClueMap:
    """Return a validated clue map built from ``raw`` puzzle data."""

    if not isinstance(raw, Mapping):
        raise InvalidPuzzleDataError("Puzzle data must be a mapping of directions")

    clue_map: ClueMap = {direction: {} for direction in DIRECTIONS}
    for key, entries in raw.items():
        direction = _parse_direction(key)
        if entries is None:
            continue
        if not isinstance(entries, Mapping):
            raise InvalidPuzzleDataError(f"Clues for {direction.value} must be a mapping")
        for raw_number, entry in entries.items():
            number = _parse_number(direction, raw_number)
            if number in clue_map[direction]:
                raise DuplicateClueError(direction, number)
            clue_map[direction][number] = _parse_entry(direction, number, entry)
    return clue_map


def load_puzzle_file(path: Path | str) -> Dict[str, Any]:
    """Read puzzle data from a UTF-8 JSON file."""

    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise InvalidPuzzleDataError(f"{path} is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise InvalidPuzzleDataError(f"{path} does not contain a puzzle object")
    LOGGER.debug("Loaded puzzle data from %s", path)
    return data


def puzzle_key(raw: Mapping[Any, Any]) -> str:
    """Return a stable short key identifying a puzzle's content."""

    canonical = {
        direction.value: {
            str(number): {
                "clue": definition.clue,
                "answer": definition.answer,
                "row": definition.row,
                "col": definition.col,
            }
            for number, definition in sorted(clues.items())
        }
        for direction, clues in ensure_clue_map(raw).items()
    }
    payload = json.dumps(canonical, ensure_ascii=False, sort_keys=True)
    return hashlib.md5(payload.encode("utf-8")).hexdigest()[:12]


def ensure_clue_map(raw: Mapping[Any, Any]) -> ClueMap:
    """Return ``raw`` as a clue map, parsing it unless it already is one."""

    if raw and all(isinstance(key, Direction) for key in raw) and all(
        isinstance(definition, ClueDefinition)
        for clues in raw.values()
        for definition in clues.values()
    ):
        return {direction: dict(raw.get(direction, {})) for direction in DIRECTIONS}
    return parse_clue_map(raw)


# ----------------------------------------------------------------------
# Private helpers
# ----------------------------------------------------------------------


def _parse_direction(key: Any) -> Direction:
    if isinstance(key, Direction):
        return key
    try:
        return Direction(str(key).lower())
    except ValueError as exc:
        raise InvalidPuzzleDataError(f"Unknown direction {key!r}") from exc


def _parse_number(direction: Direction, raw_number: Any) -> int:
    if isinstance(raw_number, bool):
        raise InvalidPuzzleDataError(f"Invalid clue number {raw_number!r} in {direction.value}")
    try:
        number = int(raw_number)
    except (TypeError, ValueError) as exc:
        raise InvalidPuzzleDataError(
            f"Invalid clue number {raw_number!r} in {direction.value}"
        ) from exc
    if str(number) != str(raw_number).strip() or number <= 0:
        raise InvalidPuzzleDataError(f"Invalid clue number {raw_number!r} in {direction.value}")
    return number


def _parse_entry(direction: Direction, number: int, entry: Any) -> ClueDefinition:
    label = f"{number}-{direction.value}"
    if isinstance(entry, ClueDefinition):
        return entry
    if not isinstance(entry, Mapping):
        raise InvalidPuzzleDataError(f"Clue {label} must be a mapping")
    missing = [name for name in REQUIRED_FIELDS if name not in entry]
    if missing:
        raise InvalidPuzzleDataError(f"Clue {label} is missing {', '.join(missing)}")

    answer = entry["answer"]
    if not isinstance(answer, str):
        raise InvalidPuzzleDataError(f"Clue {label} answer must be a string")
    answer = unicodedata.normalize("NFC", answer)
    position = []
    for name in ("row", "col"):
        value = entry[name]
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise InvalidPuzzleDataError(f"Clue {label} {name} must be a non-negative integer")
        position.append(value)

    return ClueDefinition(
        direction=direction,
        number=number,
        clue=str(entry["clue"]),
        answer=answer,
        row=position[0],
        col=position[1],
    )


__all__ = ["ClueMap", "ensure_clue_map", "load_puzzle_file", "parse_clue_map", "puzzle_key"]
