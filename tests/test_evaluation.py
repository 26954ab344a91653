import random
import unittest

from HiveEngine.HiveGame import HiveGame
from HiveEngine.Pieces import PieceType, Player
from minimax.evaluation import (DEFAULT_WEIGHTS, count_surrounding, evaluate_state,
                                mobility_for_player, queen_pressure, score_move)
from minimax.moves import RelocateMove, generate_moves

W, B = Player.WHITE, Player.BLACK

ONLY = {
    "material": dict(material_factor=1.0, mobility_factor=0.0, queen_pressure_factor=0.0),
    "pressure": dict(material_factor=0.0, mobility_factor=0.0, queen_pressure_factor=8.0),
}


def put(state, entry_id, coord):
    piece = state.bank.take(entry_id)
    state.board.add_piece(piece, coord)
    return piece


class TestEvaluateState(unittest.TestCase):

    def setUp(self):
        self.game = HiveGame()
        self.state = self.game.getInitialState(first_player=W)

    def test_empty_board_is_even(self):
        self.assertEqual(evaluate_state(self.state, W), 0.0)

    def test_score_is_antisymmetric(self):
        put(self.state, "wQ1", (0, 0))
        put(self.state, "bA1", (1, 0))
        put(self.state, "wA1", (-1, 0))
        put(self.state, "bB1", (0, 1))
        self.assertEqual(evaluate_state(self.state, W), -evaluate_state(self.state, B))

    def test_material(self):
        put(self.state, "wQ1", (0, 0))
        put(self.state, "wA1", (-1, 0))
        put(self.state, "bQ1", (1, 0))
        self.assertEqual(evaluate_state(self.state, W, ONLY["material"]), 1.0)
        self.assertEqual(evaluate_state(self.state, B, ONLY["material"]), -1.0)

    def test_queen_pressure(self):
        put(self.state, "wQ1", (0, 0))
        put(self.state, "bA1", (1, 0))
        put(self.state, "bA2", (-1, 0))
        put(self.state, "bA3", (0, 1))
        self.assertEqual(queen_pressure(self.state, W), 3)
        self.assertEqual(queen_pressure(self.state, B), 0)
        self.assertEqual(evaluate_state(self.state, W, ONLY["pressure"]), -24.0)

    def test_partial_weights_fall_back_to_defaults(self):
        put(self.state, "wQ1", (0, 0))
        put(self.state, "bA1", (1, 0))
        self.assertEqual(evaluate_state(self.state, W, {"material_factor": DEFAULT_WEIGHTS["material_factor"]}),
                         evaluate_state(self.state, W))


class TestHelpers(unittest.TestCase):

    def test_count_surrounding(self):
        game = HiveGame()
        state = game.getInitialState()
        put(state, "wQ1", (0, 0))
        self.assertEqual(count_surrounding(state.board, (0, 0)), 0)
        put(state, "bA1", (1, 0))
        put(state, "bA2", (1, -1))
        self.assertEqual(count_surrounding(state.board, (0, 0)), 2)
        self.assertEqual(count_surrounding(state.board, (1, 0)), 2)

    def test_mobility_cap(self):
        game = HiveGame()
        state = game.getInitialState()
        put(state, "wA1", (0, 0))
        put(state, "bQ1", (1, 0))
        self.assertEqual(mobility_for_player(state, W), 5)
        self.assertEqual(mobility_for_player(state, W, cap=3), 3)
        self.assertEqual(mobility_for_player(state, B), 2)


class TestScoreMove(unittest.TestCase):

    def test_seeded_scores_repeat(self):
        game = HiveGame()
        state = game.getInitialState(first_player=W)
        moves = generate_moves(game, state, W)
        first = [score_move(game, state, m, W, random.Random(3)) for m in moves]
        second = [score_move(game, state, m, W, random.Random(3)) for m in moves]
        self.assertEqual(first, second)

    def test_surrounding_move_scores_highest(self):
        game = HiveGame()
        state = game.getInitialState(first_player=B)
        put(state, "wQ1", (0, 0))
        put(state, "bQ1", (1, 0))
        put(state, "bB1", (-1, 0))
        put(state, "bS1", (0, 1))
        put(state, "bG1", (0, -1))
        put(state, "bA2", (1, -1))
        put(state, "bA1", (-2, 1))
        state.turns = {W: 3, B: 3}
        before = state.state_key()

        rng = random.Random(0)
        win = RelocateMove(PieceType.ANT, B, (-2, 1), (-1, 1))
        self.assertGreater(score_move(game, state, win, B, rng), 5000)
        others = [m for m in generate_moves(game, state, B) if m != win]
        best_other = max(score_move(game, state, m, B, rng) for m in others)
        self.assertGreater(score_move(game, state, win, B, rng), best_other)
        self.assertEqual(state.state_key(), before)


if __name__ == "__main__":
    unittest.main()
