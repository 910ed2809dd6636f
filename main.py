"""CLI demo harness for the crossword play engine.

Loads a puzzle, runs a sequence of commands against a session and prints
every callback the engine raises as a message line.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from crossword_engine.core.constants import LoadedCorrectPolicy, WrapPolicy
from crossword_engine.core.exceptions import CrosswordError, GuessError, UnknownClueError
from crossword_engine.core.models import AnswerTuple
from crossword_engine.data.puzzle_data import load_puzzle_file
from crossword_engine.engine.correctness import CrosswordCallbacks
from crossword_engine.engine.session import CrosswordSession, SessionConfig
from crossword_engine.engine.session_store import SessionStore
from crossword_engine.utils.logger import configure_logging
from crossword_engine.utils.pretty import pretty_print_session


DEMO_PUZZLE: Dict[str, Any] = {
    "across": {
        1: {"clue": "apple", "answer": "りんご", "row": 0, "col": 0},
    },
    "down": {
        2: {"clue": "gorilla", "answer": "ごりら", "row": 0, "col": 2},
    },
}

COMMANDS_HELP = (
    "focus | guess:ROW,COL,CHAR | clear:ROW,COL | type:TEXT | select:DIRECTION,NUMBER "
    "| fill-all | reset | show"
)


class MessageLog:
    """Collects callback messages the way the demo page lists them."""

    def __init__(self, stream=None) -> None:
        self.stream = stream or sys.stdout
        self.messages: List[str] = []

    def add(self, message: str) -> None:
        self.messages.append(message)
        print(message, file=self.stream)

    def callbacks(self) -> CrosswordCallbacks:
        return CrosswordCallbacks(
            on_correct=self.on_correct,
            on_loaded_correct=self.on_loaded_correct,
            on_crossword_correct=self.on_crossword_correct,
            on_cell_change=self.on_cell_change,
        )

    def on_correct(self, direction, number: int, answer: str) -> None:
        self.add(f'onCorrect: "{direction.value}", "{number}", "{answer}"')

    def on_loaded_correct(self, answers: List[AnswerTuple]) -> None:
        lines = [f'    - "{direction.value}", "{number}", "{answer}"' for direction, number, answer in answers]
        self.add("onLoadedCorrect:\n" + "\n".join(lines))

    def on_crossword_correct(self, is_correct: bool) -> None:
        self.add(f"onCrosswordCorrect: {json.dumps(is_correct)}")

    def on_cell_change(self, row: int, col: int, char: str) -> None:
        self.add(f'onCellChange: "{row}", "{col}", "{char}"')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Drive a crossword play session from the command line",
    )
    parser.add_argument(
        "--puzzle",
        type=Path,
        help="Path to puzzle JSON ({across: {...}, down: {...}}); defaults to the demo puzzle",
    )
    parser.add_argument(
        "commands",
        nargs="*",
        metavar="COMMAND",
        help=f"Commands to run in order: {COMMANDS_HELP}",
    )
    parser.add_argument(
        "--wrap",
        type=str,
        choices=[policy.value for policy in WrapPolicy],
        default=WrapPolicy.STOP.value,
        help="What typing past the last clue of a direction does",
    )
    parser.add_argument(
        "--loaded-correct",
        type=str,
        choices=[policy.value for policy in LoadedCorrectPolicy],
        default=LoadedCorrectPolicy.EVERY_LOAD.value,
        help="When already-correct answers are reported",
    )
    parser.add_argument(
        "--storage-dir",
        type=Path,
        help="Persist guesses in this directory and restore them on load",
    )
    parser.add_argument("--output", type=Path, help="Optional path to JSON snapshot output")
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def run_command(session: CrosswordSession, command: str, log: MessageLog) -> None:
    name, _, argument = command.partition(":")
    if name == "focus":
        session.focus()
    elif name == "guess":
        row, col, char = _split(argument, 3, command)
        session.set_guess(int(row), int(col), char)
    elif name == "clear":
        row, col = _split(argument, 2, command)
        session.set_guess(int(row), int(col), "")
    elif name == "type":
        for char in argument:
            session.enter_character(char)
    elif name == "select":
        direction, number = _split(argument, 2, command)
        session.select_clue(direction, int(number))
    elif name == "fill-all":
        session.fill_all_answers()
    elif name == "reset":
        session.reset()
    elif name == "show":
        pretty_print_session(session, stream=log.stream)
    else:
        raise ValueError(f"Unknown command {command!r}; expected one of: {COMMANDS_HELP}")


def main(argv: Optional[List[str]] = None, stream=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.WARNING)
    configure_logging(level)

    log = MessageLog(stream)
    config = SessionConfig(
        wrap_policy=WrapPolicy(args.wrap),
        loaded_correct_policy=LoadedCorrectPolicy(args.loaded_correct),
    )
    store = SessionStore(args.storage_dir) if args.storage_dir else None

    try:
        data = load_puzzle_file(args.puzzle) if args.puzzle else DEMO_PUZZLE
        session = CrosswordSession(data, callbacks=log.callbacks(), config=config, store=store)
    except CrosswordError as exc:
        print(f"error: cannot load puzzle: {exc}", file=sys.stderr)
        return 1

    for command in args.commands:
        try:
            run_command(session, command, log)
        except (GuessError, UnknownClueError) as exc:
            log.add(f"rejected: {exc}")
        except ValueError as exc:
            parser.error(str(exc))

    if args.output:
        output_text = json.dumps(session.to_jsonable(), ensure_ascii=False, indent=2)
        args.output.write_text(output_text, encoding="utf-8")
    return 0


def _split(argument: str, count: int, command: str) -> List[str]:
    parts = argument.split(",")
    if len(parts) != count:
        raise ValueError(f"Malformed command {command!r}")
    return parts


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
