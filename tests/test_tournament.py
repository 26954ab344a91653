import json
import tempfile
import unittest
from pathlib import Path

import tournament
from HiveEngine.Pieces import Player

FAST = {"depth": 1, "max_root_moves": 2, "time_limit_ms": None}


class TestAgents(unittest.TestCase):

    def test_missing_directory(self):
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(FileNotFoundError):
                tournament.load_agents(Path(tmp) / "players")

    def test_empty_directory(self):
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(FileNotFoundError):
                tournament.load_agents(Path(tmp))

    def test_init_players_round_trip(self):
        with tempfile.TemporaryDirectory() as tmp:
            players = Path(tmp) / "players"
            tournament.main(["--init-players", "--players-dir", str(players)])
            agents = tournament.load_agents(players)
            self.assertEqual(list(agents), ["aggressive", "baseline", "wide"])
            self.assertEqual(agents["wide"]["max_root_moves"], 12)

    def test_init_players_keeps_existing_files(self):
        with tempfile.TemporaryDirectory() as tmp:
            players = Path(tmp)
            (players / "baseline.json").write_text(json.dumps(FAST))
            tournament.init_players(players)
            self.assertEqual(tournament.load_agents(players)["baseline"], FAST)


class TestGames(unittest.TestCase):

    def test_short_game_is_a_draw(self):
        think = {Player.WHITE: [], Player.BLACK: []}
        score = tournament.play_one_game(FAST, FAST, seed=0, max_plies=4, think_times=think)
        self.assertEqual(score, 0)
        self.assertEqual(len(think[Player.WHITE]), 2)
        self.assertEqual(len(think[Player.BLACK]), 2)

    def test_run_tournament(self):
        with tempfile.TemporaryDirectory() as tmp:
            players = Path(tmp)
            for name in ("a", "b"):
                (players / f"{name}.json").write_text(json.dumps(FAST))
            rating = tournament.run_tournament(1, players, max_plies=2)
        self.assertEqual(rating, {"a": 1500.0, "b": 1500.0})


class TestElo(unittest.TestCase):

    def test_expected(self):
        self.assertEqual(tournament.expected(1500, 1500), 0.5)
        self.assertGreater(tournament.expected(1600, 1500), 0.5)

    def test_winner_gains_what_loser_drops(self):
        rating = tournament.elo(["a", "b"], {(0, 1): (2, 0, 0)})
        self.assertEqual(rating["a"], 1508.0)
        self.assertEqual(rating["b"], 1492.0)

    def test_empty_pairing_is_ignored(self):
        rating = tournament.elo(["a", "b"], {(0, 1): (0, 0, 0)})
        self.assertEqual(rating, {"a": 1500.0, "b": 1500.0})

    def test_think_time_summary(self):
        self.assertEqual(tournament.think_time_summary([]), (0.0, 0.0))
        mean, p95 = tournament.think_time_summary([1.0, 2.0, 3.0, 4.0])
        self.assertAlmostEqual(mean, 2.5)
        self.assertAlmostEqual(p95, 3.85)


if __name__ == "__main__":
    unittest.main()
