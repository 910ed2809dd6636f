import copy
import json
import tempfile
import unittest
from pathlib import Path

from crossword_engine.core.constants import Direction, LoadedCorrectPolicy, WrapPolicy
from crossword_engine.core.exceptions import ConflictingCellsError
from crossword_engine.core.models import CellState
from crossword_engine.engine.correctness import CrosswordCallbacks
from crossword_engine.engine.session import CrosswordSession, SessionConfig
from crossword_engine.engine.session_store import SessionStore


DATA = {
    "across": {
        1: {"clue": "Feline", "answer": "CAT", "row": 0, "col": 0},
        3: {"clue": "Draft", "answer": "WIP", "row": 2, "col": 0},
    },
    "down": {
        1: {"clue": "Cattle", "answer": "COW", "row": 0, "col": 0},
        2: {"clue": "Summit", "answer": "TOP", "row": 0, "col": 2},
    },
}

DEMO = {
    "across": {1: {"clue": "apple", "answer": "りんご", "row": 0, "col": 0}},
    "down": {2: {"clue": "gorilla", "answer": "ごりら", "row": 0, "col": 2}},
}


class Recorder:
    def __init__(self) -> None:
        self.events = []

    def callbacks(self) -> CrosswordCallbacks:
        return CrosswordCallbacks(
            on_cell_change=lambda *args: self.events.append(("cell_change",) + args),
            on_correct=lambda *args: self.events.append(("correct",) + args),
            on_loaded_correct=lambda answers: self.events.append(("loaded_correct", answers)),
            on_crossword_correct=lambda ok: self.events.append(("crossword_correct", ok)),
            on_clue_selected=lambda *args: self.events.append(("clue_selected",) + args),
        )

    def named(self, name: str):
        return [event for event in self.events if event[0] == name]


class TypingTests(unittest.TestCase):
    def setUp(self) -> None:
        self.recorder = Recorder()
        self.session = CrosswordSession(DATA, callbacks=self.recorder.callbacks())

    def test_focus_selects_first_clue(self) -> None:
        state = self.session.focus()
        self.assertTrue(state.has_focus)
        self.assertEqual(self.recorder.events, [("clue_selected", Direction.ACROSS, 1)])

    def test_typing_fills_clue_and_moves_on(self) -> None:
        self.session.focus()
        for char in "cat":
            self.assertTrue(self.session.enter_character(char))
        self.assertEqual(
            self.recorder.events[1:],
            [
                ("cell_change", 0, 0, "c"),
                ("cell_change", 0, 1, "a"),
                ("cell_change", 0, 2, "t"),
                ("correct", Direction.ACROSS, 1, "CAT"),
                ("clue_selected", Direction.ACROSS, 3),
            ],
        )
        self.assertEqual(self.session.focus_state.cell, (2, 0))
        self.assertTrue(self.session.clue_state("across", 1).correct)

    def test_typing_without_focus_does_nothing(self) -> None:
        self.assertFalse(self.session.enter_character("C"))
        self.assertFalse(self.session.delete_character())
        self.assertEqual(self.recorder.events, [])

    def test_delete_clears_and_steps_back(self) -> None:
        self.session.focus()
        self.session.enter_character("C")
        self.session.enter_character("A")
        self.assertTrue(self.session.delete_character())
        self.assertEqual(self.session.focus_state.cell, (0, 1))
        self.assertTrue(self.session.delete_character())
        self.assertEqual(self.session.focus_state.cell, (0, 0))
        self.assertEqual(self.session.guesses.filled(), {(0, 0): "C"})

    def test_navigation_reports_clue_changes_only(self) -> None:
        self.session.focus()
        self.session.move(1, 0)
        self.session.move(0, 1)
        self.session.move_to(0, 1)
        self.session.move_to(0, 1)
        self.assertEqual(
            self.recorder.named("clue_selected"),
            [
                ("clue_selected", Direction.ACROSS, 1),
                ("clue_selected", Direction.DOWN, 1),
                ("clue_selected", Direction.ACROSS, 1),
            ],
        )

    def test_select_and_tab(self) -> None:
        self.session.select_clue(Direction.DOWN, 2)
        self.session.next_clue()
        self.session.previous_clue()
        self.assertTrue(self.session.toggle_direction())
        self.assertEqual(
            [event[1:] for event in self.recorder.named("clue_selected")],
            [(Direction.DOWN, 2), (Direction.ACROSS, 1), (Direction.DOWN, 2), (Direction.ACROSS, 1)],
        )


class QueryTests(unittest.TestCase):
    def setUp(self) -> None:
        self.session = CrosswordSession(DATA)

    def test_dimensions(self) -> None:
        self.assertEqual(self.session.dimensions, (3, 3))

    def test_cell_state(self) -> None:
        self.session.set_guess(0, 0, "c")
        self.assertEqual(
            self.session.cell_state(0, 0),
            CellState(
                row=0, col=0, covered=True, guess="c", number=1, correct=True, across=1, down=1, numbers=(1,)
            ),
        )
        self.assertEqual(self.session.cell_state(1, 1), CellState(row=1, col=1, covered=False))

    def test_clue_states(self) -> None:
        states = self.session.clue_states(Direction.DOWN)
        self.assertEqual([state.number for state in states], [1, 2])
        self.assertEqual(states[1].cells, ((0, 2), (1, 2), (2, 2)))
        self.assertFalse(states[1].answered)

    def test_to_jsonable_is_serializable(self) -> None:
        self.session.fill_all_answers()
        snapshot = self.session.to_jsonable()
        json.dumps(snapshot)
        self.assertIsNone(snapshot["grid"][1][1])
        self.assertEqual(snapshot["grid"][0][2]["numbers"], [2])
        self.assertEqual(snapshot["grid"][2][1]["guess"], "I")
        self.assertTrue(snapshot["correct"])
        self.assertEqual([clue["number"] for clue in snapshot["clues"]["across"]], [1, 3])


class AlphabetTests(unittest.TestCase):
    def test_halfwidth_voiced_kana_guess_is_correct(self) -> None:
        session = CrosswordSession(DEMO)
        session.set_guess(0, 2, "ｺﾞ")
        self.assertEqual(session.cell_state(0, 2).guess, "ゴ")
        self.assertTrue(session.cell_state(0, 2).correct)

    def test_katakana_guess_counts_as_hiragana_answer(self) -> None:
        recorder = Recorder()
        session = CrosswordSession(DEMO, callbacks=recorder.callbacks())
        session.set_guess(0, 2, "ゴ")
        self.assertTrue(session.cell_state(0, 2).correct)
        self.assertEqual(recorder.events, [("cell_change", 0, 2, "ゴ")])


class LoadTests(unittest.TestCase):
    def test_invalid_reload_keeps_previous_puzzle(self) -> None:
        session = CrosswordSession(DATA)
        session.set_guess(0, 0, "C")
        broken = {
            "across": {1: {"clue": "a", "answer": "AB", "row": 0, "col": 0}},
            "down": {2: {"clue": "b", "answer": "CC", "row": 0, "col": 1}},
        }
        with self.assertRaises(ConflictingCellsError):
            session.load(broken)
        self.assertIs(session.data, DATA)
        self.assertEqual(session.guesses.get(0, 0), "C")

    def test_set_data_rebuilds_on_identity_change(self) -> None:
        session = CrosswordSession(DATA)
        session.set_guess(0, 0, "C")
        self.assertFalse(session.set_data(DATA))
        self.assertEqual(session.guesses.get(0, 0), "C")
        self.assertTrue(session.set_data(dict(DATA)))
        self.assertEqual(session.guesses.get(0, 0), "")

    def test_reload_after_solving_reports_crossword_incorrect(self) -> None:
        recorder = Recorder()
        session = CrosswordSession(DATA, callbacks=recorder.callbacks())
        session.fill_all_answers()
        session.set_data(copy.deepcopy(DATA))
        self.assertFalse(session.is_crossword_correct())
        self.assertEqual(
            recorder.named("crossword_correct"),
            [("crossword_correct", True), ("crossword_correct", False)],
        )

    def test_reload_before_solving_stays_silent(self) -> None:
        recorder = Recorder()
        session = CrosswordSession(DATA, callbacks=recorder.callbacks())
        session.set_guess(0, 0, "C")
        session.set_data(copy.deepcopy(DATA))
        self.assertEqual(recorder.named("crossword_correct"), [])

    def test_sessions_are_independent(self) -> None:
        first = CrosswordSession(DEMO)
        second = CrosswordSession(DEMO)
        first.fill_all_answers()
        self.assertTrue(first.is_crossword_correct())
        self.assertFalse(second.is_crossword_correct())
        self.assertEqual(second.guesses.filled(), {})


class PersistenceTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.store = SessionStore(Path(self._tmp.name))

    def test_restored_session_reports_loaded_correct(self) -> None:
        CrosswordSession(DEMO, store=self.store).fill_all_answers()

        recorder = Recorder()
        session = CrosswordSession(DEMO, callbacks=recorder.callbacks(), store=self.store)
        self.assertEqual(
            recorder.events,
            [
                ("loaded_correct", [(Direction.ACROSS, 1, "りんご"), (Direction.DOWN, 2, "ごりら")]),
                ("crossword_correct", True),
            ],
        )
        self.assertTrue(session.is_crossword_correct())

    def test_reload_of_solved_saved_grid_does_not_repeat_crossword_correct(self) -> None:
        recorder = Recorder()
        session = CrosswordSession(DEMO, callbacks=recorder.callbacks(), store=self.store)
        session.fill_all_answers()
        session.set_data(copy.deepcopy(DEMO))
        self.assertTrue(session.is_crossword_correct())
        self.assertEqual(recorder.named("crossword_correct"), [("crossword_correct", True)])
        self.assertEqual(len(recorder.named("loaded_correct")), 1)

    def test_reset_clears_saved_document(self) -> None:
        session = CrosswordSession(DEMO, store=self.store)
        session.set_guess(0, 0, "り")
        self.assertEqual(self.store.load(session.key), {(0, 0): "り"})
        session.reset()
        self.assertIsNone(self.store.load(session.key))

    def test_autosave_disabled(self) -> None:
        session = CrosswordSession(DEMO, store=self.store, config=SessionConfig(autosave=False))
        session.fill_all_answers()
        self.assertIsNone(self.store.load(session.key))

    def test_storage_key_override(self) -> None:
        session = CrosswordSession(DEMO, store=self.store, storage_key="demo")
        session.set_guess(0, 0, "り")
        self.assertTrue((Path(self._tmp.name) / "demo.json").exists())

    def test_first_load_only_policy(self) -> None:
        CrosswordSession(DEMO, store=self.store).set_guess(0, 2, "ご")
        CrosswordSession(DEMO, store=self.store).set_guess(1, 2, "り")
        CrosswordSession(DEMO, store=self.store).set_guess(2, 2, "ら")

        recorder = Recorder()
        config = SessionConfig(loaded_correct_policy=LoadedCorrectPolicy.FIRST_LOAD_ONLY)
        session = CrosswordSession(DEMO, callbacks=recorder.callbacks(), config=config, store=self.store)
        session.load(DEMO)
        self.assertEqual(len(recorder.named("loaded_correct")), 1)

    def test_every_load_policy(self) -> None:
        CrosswordSession(DEMO, store=self.store).fill_all_answers()
        recorder = Recorder()
        session = CrosswordSession(DEMO, callbacks=recorder.callbacks(), store=self.store)
        session.load(DEMO)
        self.assertEqual(len(recorder.named("loaded_correct")), 2)


class ConfigTests(unittest.TestCase):
    def test_wrap_policy_reaches_navigator(self) -> None:
        session = CrosswordSession(DATA, config=SessionConfig(wrap_policy=WrapPolicy.SWITCH_DIRECTION))
        self.assertIs(session.navigator.wrap, WrapPolicy.SWITCH_DIRECTION)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
