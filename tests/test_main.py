import io
import json
import tempfile
import unittest
from pathlib import Path

from main import main


class CliTests(unittest.TestCase):
    def run_cli(self, *argv: str) -> str:
        stream = io.StringIO()
        code = main(list(argv), stream=stream)
        self.assertEqual(code, 0)
        return stream.getvalue()

    def test_fill_all_then_reset(self) -> None:
        output = self.run_cli("fill-all", "reset")
        self.assertEqual(
            output.splitlines(),
            [
                'onCorrect: "across", "1", "りんご"',
                'onCorrect: "down", "2", "ごりら"',
                "onCrosswordCorrect: true",
                "onCrosswordCorrect: false",
            ],
        )

    def test_fill_one_cell(self) -> None:
        output = self.run_cli("focus", "guess:0,2,ご")
        self.assertEqual(output.splitlines(), ['onCellChange: "0", "2", "ご"'])

    def test_rejected_guess_is_reported(self) -> None:
        output = self.run_cli("guess:1,0,x")
        self.assertIn("rejected: No cell at (1,0)", output)

    def test_show_renders_grid(self) -> None:
        output = self.run_cli("focus", "type:り", "show")
        self.assertIn("り", output)
        self.assertIn("ACROSS", output)
        self.assertIn("*.", output)

    def test_restored_session_reports_loaded_correct(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            self.run_cli("--storage-dir", tmpdir, "fill-all")
            output = self.run_cli("--storage-dir", tmpdir)
        self.assertTrue(output.startswith("onLoadedCorrect:\n"))
        self.assertIn('    - "down", "2", "ごりら"', output)

    def test_puzzle_file_and_output(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            puzzle = Path(tmpdir) / "puzzle.json"
            puzzle.write_text(json.dumps({
                "across": {"1": {"clue": "apple", "answer": "AB", "row": 0, "col": 0}},
                "down": {"2": {"clue": "gorilla", "answer": "BC", "row": 0, "col": 1}},
            }), encoding="utf-8")
            snapshot = Path(tmpdir) / "out.json"
            self.run_cli("--puzzle", str(puzzle), "--output", str(snapshot), "fill-all")
            doc = json.loads(snapshot.read_text(encoding="utf-8"))
        self.assertTrue(doc["correct"])
        self.assertEqual((doc["rows"], doc["cols"]), (2, 2))

    def test_conflicting_puzzle_fails_to_load(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            puzzle = Path(tmpdir) / "puzzle.json"
            puzzle.write_text(json.dumps({
                "across": {"1": {"clue": "apple", "answer": "AB", "row": 0, "col": 0}},
                "down": {"2": {"clue": "gorilla", "answer": "CC", "row": 0, "col": 1}},
            }), encoding="utf-8")
            self.assertEqual(main(["--puzzle", str(puzzle)], stream=io.StringIO()), 1)

    def test_unknown_command_is_usage_error(self) -> None:
        with self.assertRaises(SystemExit):
            main(["dance"], stream=io.StringIO())


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
