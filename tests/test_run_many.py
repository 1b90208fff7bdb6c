import importlib.util
import json
import os
import tempfile
import unittest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))


def load_run_many():
    spec = importlib.util.spec_from_file_location("run_many", os.path.join(ROOT, "scripts", "run_many.py"))
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class RunManyTests(unittest.TestCase):
    def test_runs_games_and_tallies(self):
        run_many = load_run_many()
        summaries = run_many.run_games(games=12, x_kind="random", o_kind="cluster", rows=3, columns=3, swap=True)
        self.assertEqual(len(summaries), 12)
        for s in summaries:
            self.assertIn(s["status"], ("ENDED", "DRAW"))
            self.assertTrue(5 <= s["plies"] <= 9)
            if s["status"] == "DRAW":
                self.assertIsNone(s["winner_symbol"])
        self.assertEqual(summaries[1]["x"], "cluster")
        self.assertEqual(summaries[0]["x"], "random")

    def test_writes_history_files(self):
        run_many = load_run_many()
        with tempfile.TemporaryDirectory() as tmp:
            run_many.run_games(games=2, x_kind="random", o_kind="random", rows=3, columns=3, out_dir=tmp)
            files = sorted(os.listdir(tmp))
            self.assertEqual(files, ["game_0001.json", "game_0002.json"])
            with open(os.path.join(tmp, files[0]), "r", encoding="utf-8") as f:
                self.assertIn(json.load(f)["status"], ("ENDED", "DRAW"))


if __name__ == "__main__":
    unittest.main()
