from __future__ import annotations

import logging
import math
import random
import time
from typing import Optional

from HiveEngine.HiveGame import HiveGame

from minimax.evaluation import evaluate_state, score_move
from minimax.moves import AIMove, advance_turn, apply_move_on_clone, generate_moves

logger = logging.getLogger(__name__)

WIN_SCORE = 1000
PASS_SCORE = 500

DEFAULT_DEPTH = 2
MAX_ROOT_MOVES = 6
DEFAULT_TIME_LIMIT_MS = 3000


class MinimaxAI:
    """Depth-limited minimax with alpha-beta pruning for Hive.

    Only the ``max_root_moves`` best root moves by the one-ply ordering
    heuristic are searched in full. Every explored position lives in its own
    cloned GameState, so the caller's state is never touched.

    ``time_limit_ms`` is a soft wall-clock budget: once exceeded, every node
    still being visited returns its static evaluation. ``alpha_beta=False``
    searches the same tree full-width, which is only useful for checking the
    pruned search against.
    """

    def __init__(self, game: Optional[HiveGame] = None, depth: int = DEFAULT_DEPTH,
                 max_root_moves: int = MAX_ROOT_MOVES,
                 time_limit_ms: Optional[float] = DEFAULT_TIME_LIMIT_MS,
                 weights: Optional[dict] = None, seed: Optional[int] = None,
                 rng: Optional[random.Random] = None, alpha_beta: bool = True):
        self.game = game if game is not None else HiveGame()
        self.depth = depth
        self.max_root_moves = max_root_moves
        self.time_limit_ms = time_limit_ms
        self.weights = weights
        self.rng = rng if rng is not None else random.Random(seed)
        self.alpha_beta = alpha_beta

        self._deadline = None
        self.nodes = 0
        self.timed_out = False
        self.last_score = None

    # -----------------------------------------------------------------
    # Root --------------------------------------------------------------
    # -----------------------------------------------------------------
    def search(self, state) -> Optional[AIMove]:
        return self.find_best_move(state, state.current_player)

    def order_root_moves(self, state, player, moves):
        scored = [(score_move(self.game, state, m, player, self.rng), m) for m in moves]
        scored.sort(key=lambda item: item[0], reverse=True)
        return [m for _, m in scored[:self.max_root_moves]]

    def find_best_move(self, state, player) -> Optional[AIMove]:
        """Best move for `player`, or None when there is nothing to play."""
        if player is None:
            return None
        if state.current_player is not None and state.current_player != player:
            return None

        self.nodes = 0
        self.timed_out = False
        self.last_score = None
        if self.time_limit_ms is not None:
            self._deadline = time.perf_counter() + self.time_limit_ms / 1000.0
        else:
            self._deadline = None

        moves = generate_moves(self.game, state, player)
        if not moves:
            logger.debug("%s has no legal move", player.value)
            return None

        candidates = self.order_root_moves(state, player, moves)
        logger.debug("Searching %d of %d root moves for %s",
                     len(candidates), len(moves), player.value)

        best_move = None
        best_score = -math.inf
        alpha = -math.inf
        for move in candidates:
            child = state.copy()
            apply_move_on_clone(self.game, child, move, player)
            advance_turn(self.game, child)

            score = self._minimax(child, self.depth - 1, alpha, math.inf,
                                  child.current_player == player, player)
            logger.debug("  %s -> %s", move, score)
            if score > best_score:
                best_score = score
                best_move = move
            if self.alpha_beta:
                alpha = max(alpha, best_score)

        self.last_score = best_score
        logger.debug("Best move %s (score %s, %d nodes)", best_move, best_score, self.nodes)
        return best_move

    # -----------------------------------------------------------------
    # Recursion ---------------------------------------------------------
    # -----------------------------------------------------------------
    def _out_of_time(self) -> bool:
        if self._deadline is None:
            return False
        if time.perf_counter() >= self._deadline:
            if not self.timed_out:
                logger.debug("Search time budget of %sms exhausted", self.time_limit_ms)
            self.timed_out = True
            return True
        return False

    def _minimax(self, state, depth, alpha, beta, maximizing, me) -> float:
        self.nodes += 1

        winner = self.game.checkWin(state)
        if winner is not None:
            return WIN_SCORE if winner == me else -WIN_SCORE

        if depth <= 0 or self._out_of_time():
            return evaluate_state(state, me, self.weights)

        current = state.current_player
        moves = generate_moves(self.game, state, current)
        if not moves:
            # blocked without being surrounded: a pass, not a loss
            return -PASS_SCORE if maximizing else PASS_SCORE

        if maximizing:
            value = -math.inf
            for move in moves:
                child = state.copy()
                apply_move_on_clone(self.game, child, move, current)
                advance_turn(self.game, child)

                score = self._minimax(child, depth - 1, alpha, beta,
                                      child.current_player == me, me)
                value = max(value, score)
                if self.alpha_beta:
                    alpha = max(alpha, value)
                    if alpha >= beta:
                        break
            return value
        else:
            value = math.inf
            for move in moves:
                child = state.copy()
                apply_move_on_clone(self.game, child, move, current)
                advance_turn(self.game, child)

                score = self._minimax(child, depth - 1, alpha, beta,
                                      child.current_player == me, me)
                value = min(value, score)
                if self.alpha_beta:
                    beta = min(beta, value)
                    if alpha >= beta:
                        break
            return value


def find_best_move(state, player, depth=DEFAULT_DEPTH, **kwargs) -> Optional[AIMove]:
    """One-shot search: see MinimaxAI for the keyword arguments."""
    return MinimaxAI(depth=depth, **kwargs).find_best_move(state, player)
