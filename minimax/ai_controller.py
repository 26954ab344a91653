import logging

from HiveEngine.Pieces import Player

from minimax.minimax_ai import MinimaxAI
from minimax.moves import apply_move

logger = logging.getLogger(__name__)


class AIController:
    """Lets the minimax agent play one colour of a live game."""

    def __init__(self, game, state, ai_plays=Player.BLACK, ai=None, depth=2):
        self.game = game
        self.state = state
        self.ai_plays = ai_plays
        self.ai = ai if ai is not None else MinimaxAI(game=game, depth=depth)
        self.is_enabled = False
        self.on_move_complete = None

    def enable(self):
        self.is_enabled = True
        logger.info("AI enabled (%s)", self.ai_plays.value)

    def disable(self):
        self.is_enabled = False
        logger.info("AI disabled")

    def toggle(self):
        if self.is_enabled:
            self.disable()
        else:
            self.enable()
        return self.is_enabled

    def is_game_over(self):
        return self.game.checkWin(self.state) is not None

    def make_move_if_needed(self):
        """
        Play for the AI if it is enabled and on move. Returns the move that
        was applied, or None if nothing was played. When the AI has no legal
        action its turn is passed.
        """
        if not self.is_enabled or self.is_game_over():
            return None
        if self.state.current_player not in (None, self.ai_plays):
            return None

        logger.info("AI thinking...")
        move = self.ai.find_best_move(self.state, self.ai_plays)

        if move is None:
            logger.info("AI: no move found, passing")
            self.game.skipTurn(self.state)
            self._complete()
            return None

        if not apply_move(self.game, self.state, move):
            # search and rules disagree; leave the state as it was
            logger.warning("AI selected an illegal move: %s", move)
            return None

        logger.info("AI selected move: %s", move)
        self._complete()
        return move

    def _complete(self):
        if self.on_move_complete is not None:
            self.on_move_complete()
