import unittest

from crossword_engine.core.exceptions import GuessError, InvalidGuessError, NoCellAtError
from crossword_engine.data.normalization import AlphabetPolicy
from crossword_engine.engine.guesses import GuessStore
from crossword_engine.engine.layout import build_puzzle


DATA = {
    "across": {1: {"clue": "Number", "answer": "TWO", "row": 0, "col": 0}},
    "down": {2: {"clue": "Either", "answer": "OR", "row": 0, "col": 2}},
}


class GuessStoreTests(unittest.TestCase):
    def setUp(self) -> None:
        self.store = GuessStore(build_puzzle(DATA))

    def test_cells_start_empty(self) -> None:
        self.assertEqual(self.store.snapshot(), {(0, 0): "", (0, 1): "", (0, 2): "", (1, 2): ""})
        self.assertEqual(self.store.filled(), {})

    def test_set_guess_reports_change(self) -> None:
        self.assertTrue(self.store.set_guess(0, 2, "X"))
        self.assertFalse(self.store.set_guess(0, 2, "X"))
        self.assertEqual(self.store.get(0, 2), "X")
        self.assertTrue(self.store.set_guess(0, 2, ""))
        self.assertFalse(self.store.is_filled(0, 2))

    def test_uncovered_cell_rejected(self) -> None:
        with self.assertRaises(NoCellAtError) as ctx:
            self.store.set_guess(1, 0, "A")
        self.assertEqual((ctx.exception.row, ctx.exception.col), (1, 0))
        self.assertIsInstance(ctx.exception, GuessError)
        self.assertEqual(self.store.filled(), {})

    def test_multi_character_guess_rejected(self) -> None:
        with self.assertRaises(InvalidGuessError):
            self.store.set_guess(0, 0, "TW")
        self.assertEqual(self.store.get(0, 0), "")

    def test_composed_character_counts_once(self) -> None:
        self.assertTrue(self.store.set_guess(0, 0, "が"))
        self.assertEqual(self.store.get(0, 0), "が")

    def test_halfwidth_voiced_kana_counts_once(self) -> None:
        self.assertTrue(self.store.set_guess(0, 2, "ｺﾞ"))
        self.assertEqual(self.store.get(0, 2), "ゴ")

    def test_composition_follows_alphabet_policy(self) -> None:
        store = GuessStore(build_puzzle(DATA, alphabet=AlphabetPolicy(fold_width=False)))
        with self.assertRaises(InvalidGuessError):
            store.set_guess(0, 2, "ｺﾞ")
        self.assertTrue(store.set_guess(0, 2, "が"))

    def test_fill_all_answers_is_idempotent(self) -> None:
        changed = self.store.fill_all_answers()
        self.assertEqual(len(changed), 4)
        first = self.store.snapshot()
        self.assertEqual(self.store.fill_all_answers(), [])
        self.assertEqual(self.store.snapshot(), first)
        self.assertEqual(first[(0, 2)], "O")

    def test_reset_then_fill_round_trips(self) -> None:
        self.store.fill_all_answers()
        filled = self.store.snapshot()
        self.store.set_guess(0, 0, "Z")
        self.store.reset()
        self.assertEqual(self.store.filled(), {})
        self.store.fill_all_answers()
        self.assertEqual(self.store.snapshot(), filled)

    def test_restore_skips_unknown_cells(self) -> None:
        with self.assertLogs("crossword_engine.engine.guesses", level="WARNING"):
            changed = self.store.restore({(0, 0): "T", (5, 5): "Q", (0, 1): "WW"})
        self.assertEqual(changed, [(0, 0)])
        self.assertEqual(self.store.filled(), {(0, 0): "T"})


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
