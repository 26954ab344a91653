import unittest

from HiveEngine.HiveGame import HiveGame
from HiveEngine.Pieces import PieceType, Player
from minimax.minimax_ai import WIN_SCORE, MinimaxAI, find_best_move
from minimax.moves import PlaceMove, RelocateMove, advance_turn, apply_move

W, B = Player.WHITE, Player.BLACK


def put(state, entry_id, coord):
    piece = state.bank.take(entry_id)
    state.board.add_piece(piece, coord)
    return piece


def opening(game):
    state = game.getInitialState(first_player=W)
    apply_move(game, state, PlaceMove(PieceType.ANT, W, (0, 0)))
    apply_move(game, state, PlaceMove(PieceType.ANT, B, (1, 0)))
    return state


def pinned_white(game):
    """White's only piece is pinned between two black ones and the hand is empty."""
    state = game.getInitialState(first_player=W)
    put(state, "bQ1", (1, 0))
    put(state, "wA1", (0, 0))
    put(state, "bA1", (-1, 0))
    for entry in state.bank.entries_for(W):
        state.bank.remove(entry.entry_id)
    state.turns[W] = 1
    return state


class TestMinimaxAI(unittest.TestCase):

    def setUp(self):
        self.game = HiveGame()

    def test_not_my_turn(self):
        state = opening(self.game)
        ai = MinimaxAI(game=self.game, depth=1, seed=0)
        self.assertIsNone(ai.find_best_move(state, B))
        self.assertIsNone(ai.find_best_move(state, None))

    def test_no_moves(self):
        state = pinned_white(self.game)
        ai = MinimaxAI(game=self.game, depth=2, seed=0)
        self.assertIsNone(ai.find_best_move(state, W))

    def test_opening_move_is_at_the_origin(self):
        state = self.game.getInitialState()
        move = find_best_move(state, W, depth=1, seed=1, time_limit_ms=None)
        self.assertIsInstance(move, PlaceMove)
        self.assertEqual(move.target, (0, 0))
        self.assertEqual(move.color, W)

    def test_finds_the_winning_move(self):
        state = self.game.getInitialState(first_player=W)
        put(state, "bQ1", (0, 0))
        put(state, "wQ1", (1, 0))
        put(state, "wB1", (-1, 0))
        put(state, "wS1", (0, 1))
        put(state, "wG1", (0, -1))
        put(state, "wA2", (1, -1))
        put(state, "wA1", (-2, 1))
        state.turns = {W: 3, B: 3}

        ai = MinimaxAI(game=self.game, depth=2, seed=0, time_limit_ms=None)
        move = ai.find_best_move(state, W)
        self.assertEqual(move, RelocateMove(PieceType.ANT, W, (-2, 1), (-1, 1)))
        self.assertEqual(ai.last_score, WIN_SCORE)

        self.assertTrue(apply_move(self.game, state, move))
        self.assertEqual(self.game.checkWin(state), W)

    def test_search_uses_the_side_to_move(self):
        state = opening(self.game)
        a = MinimaxAI(game=self.game, depth=1, seed=5, time_limit_ms=None)
        b = MinimaxAI(game=self.game, depth=1, seed=5, time_limit_ms=None)
        self.assertEqual(a.search(state), b.find_best_move(state, W))

    def test_pruning_does_not_change_the_result(self):
        state = opening(self.game)
        pruned = MinimaxAI(game=self.game, depth=2, max_root_moves=4, seed=11, time_limit_ms=None)
        full = MinimaxAI(game=self.game, depth=2, max_root_moves=4, seed=11, time_limit_ms=None,
                         alpha_beta=False)

        self.assertEqual(pruned.find_best_move(state, W), full.find_best_move(state, W))
        self.assertEqual(pruned.last_score, full.last_score)
        self.assertLessEqual(pruned.nodes, full.nodes)

    def test_out_of_time_still_answers(self):
        state = opening(self.game)
        ai = MinimaxAI(game=self.game, depth=2, seed=0, time_limit_ms=0)
        move = ai.find_best_move(state, W)
        self.assertIsNotNone(move)
        self.assertTrue(ai.timed_out)

    def test_search_leaves_the_state_alone(self):
        state = opening(self.game)
        before = state.state_key()
        MinimaxAI(game=self.game, depth=2, seed=0, time_limit_ms=None).find_best_move(state, W)
        self.assertEqual(state.state_key(), before)


class TestAdvanceTurn(unittest.TestCase):

    def test_forced_pass_goes_back(self):
        game = HiveGame()
        state = pinned_white(game)
        advance_turn(game, state)
        self.assertEqual(state.current_player, B)
        self.assertEqual(state.turns[W], 1)

    def test_side_with_moves_keeps_the_turn(self):
        game = HiveGame()
        state = opening(game)
        advance_turn(game, state)
        self.assertEqual(state.current_player, W)


if __name__ == "__main__":
    unittest.main()
