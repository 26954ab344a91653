from HiveEngine.Board import Board
from HiveEngine.PieceBank import PieceBank
from HiveEngine.Pieces import Player


class GameState:
    def __init__(self, board=None, bank=None, current_player=None, turns=None):
        self.board = board if board is not None else Board()
        self.bank = bank if bank is not None else PieceBank.full()
        # None until somebody places the first piece
        self.current_player = current_player
        self.turns = dict(turns) if turns is not None else {p: 0 for p in Player}

    def copy(self):
        return GameState(
            board=self.board.copy(),
            bank=self.bank.copy(),
            current_player=self.current_player,
            turns=self.turns,
        )

    def get_current_player(self):
        return self.current_player

    def get_opponent(self):
        if self.current_player is None:
            return None
        return self.current_player.opponent

    def state_key(self):
        """Canonical, hashable serialization of pieces, bank and counters."""
        pieces = tuple(sorted(
            (p.piece_id, p.kind.value, p.owner.value, p.position, p.stack_level)
            for p in self.board.pieces
        ))
        bank = tuple(sorted(self.bank.entries))
        turns = tuple(sorted((p.value, n) for p, n in self.turns.items()))
        current = self.current_player.value if self.current_player is not None else None
        return pieces, bank, turns, current
