from HiveEngine.GameState import GameState
from HiveEngine.HexUtils import DIRECTIONS, are_adjacent, get_adjacent_cells
from HiveEngine.PieceBank import INITIAL_PIECES
from HiveEngine.Pieces import PieceType


class HiveGame:
    """
    Rules of Hive on an unbounded board.

    All mutators take a GameState and return True/False. A rejected
    placement or move leaves the state exactly as it was.
    """
    INITIAL_PIECES = INITIAL_PIECES
    DIRECTIONS = DIRECTIONS

    # a player's Queen must be down before their 4th turn
    QUEEN_DEADLINE = 3

    # ---------------------------------------------------------
    # 1. Initialization & Game State
    # ---------------------------------------------------------
    def getInitialState(self, first_player=None):
        """
        Empty board, full banks. With `first_player` left as None whichever
        side places first opens the game.
        """
        return GameState(current_player=first_player)

    def copyState(self, state):
        return state.copy()

    def getOpponent(self, player):
        return player.opponent

    def getCurrentPlayer(self, state):
        return state.current_player

    def getTurnNumber(self, state, player):
        return state.turns[player]

    def nextTurn(self, state):
        """Hand the move to the opponent and count a turn for the mover."""
        if state.current_player is None:
            return
        state.turns[state.current_player] += 1
        state.current_player = state.current_player.opponent

    def skipTurn(self, state):
        """Forced pass: the side to move has no legal action."""
        if state.current_player is None:
            return
        state.current_player = state.current_player.opponent

    # ---------------------------------------------------------
    # 2. Queen rules
    # ---------------------------------------------------------
    def hasQueen(self, state, player):
        return state.board.find_queen(player) is not None

    def mustPlaceQueen(self, state, player):
        return (not self.hasQueen(state, player)
                and self.getTurnNumber(state, player) >= self.QUEEN_DEADLINE)

    def isQueenSurrounded(self, state, player):
        board = state.board
        queen = board.find_queen(player)
        if queen is None:
            return False
        return all(not board.is_empty(c) for c in get_adjacent_cells(*queen.position))

    def checkWin(self, state):
        """
        The owner of a fully surrounded Queen loses. Queens are checked in
        board order, so if both are surrounded the first one found decides.
        """
        board = state.board
        for piece in board.pieces:
            if piece.kind != PieceType.QUEEN:
                continue
            if all(not board.is_empty(c) for c in get_adjacent_cells(*piece.position)):
                return piece.owner.opponent
        return None

    def isTerminal(self, state):
        return self.checkWin(state) is not None

    # ---------------------------------------------------------
    # 3. Placement
    # ---------------------------------------------------------
    def canPlacePiece(self, state, kind, owner, coord):
        """
        Checks, without touching the state:
          - destination is empty
          - 2nd piece of the game must touch the 1st
          - later pieces touch their own colour and never the opponent's
          - the Queen deadline
        """
        board = state.board
        if not board.is_empty(coord):
            return False

        placed = len(board.pieces)
        if placed == 1:
            if not are_adjacent(board.pieces[0].position, coord):
                return False
        elif placed >= 2:
            touches_own = touches_opponent = False
            for nb in get_adjacent_cells(*coord):
                top = board.top_piece_at(nb)
                if top is None:
                    continue
                if top.owner == owner:
                    touches_own = True
                else:
                    touches_opponent = True
            if not touches_own or touches_opponent:
                return False

        if kind != PieceType.QUEEN and self.mustPlaceQueen(state, owner):
            return False
        return True

    def legalPlacements(self, state, kind, owner):
        return [c for c in state.board.all_coords_around_hive()
                if self.canPlacePiece(state, kind, owner, c)]

    def placePiece(self, state, piece, coord):
        if state.current_player is not None and piece.owner != state.current_player:
            return False
        if any(p is piece for p in state.board.pieces):
            return False
        if not self.canPlacePiece(state, piece.kind, piece.owner, coord):
            return False

        state.board.add_piece(piece, coord)
        if state.current_player is None:
            state.current_player = piece.owner
        self.nextTurn(state)
        return True

    # ---------------------------------------------------------
    # 4. Movement
    # ---------------------------------------------------------
    def legalMoves(self, piece, board):
        return piece.legal_moves(board)

    def movePiece(self, state, piece, to):
        board = state.board
        if piece.owner != state.current_player:
            return False
        if not board.is_top_piece(piece):
            return False
        if self.mustPlaceQueen(state, piece.owner):
            return False
        if to not in piece.legal_moves(board):
            return False

        old = piece.position
        from_stack = piece.kind == PieceType.BEETLE and board.stack_height(old) > 1
        board.relocate(piece, to)
        if len(board.pieces) > 2 and not from_stack and not board.is_connected():
            board.relocate(piece, old)
            return False

        self.nextTurn(state)
        return True

    def hasAvailableMoves(self, state, player):
        """
        Does `player` have at least one legal action if it were their move?
        """
        board = state.board
        around = board.all_coords_around_hive()
        kinds = state.bank.kinds_for(player)

        if self.mustPlaceQueen(state, player):
            return (PieceType.QUEEN in kinds
                    and any(self.canPlacePiece(state, PieceType.QUEEN, player, c) for c in around))

        if kinds and any(self.canPlacePiece(state, kinds[0], player, c) for c in around):
            return True

        for piece in board.pieces:
            if piece.owner != player or not board.is_top_piece(piece):
                continue
            if piece.legal_moves(board):
                return True
        return False

    # ---------------------------------------------------------
    # 5. Print / Debug
    # ---------------------------------------------------------
    def printState(self, state):
        board = state.board
        current = state.current_player.value if state.current_player is not None else "-"
        turns = ", ".join(f"{p.value}={n}" for p, n in state.turns.items())
        print(f"Turns: {turns}, Current Player: {current}")
        if not board.pieces:
            print("Board is empty.")
        else:
            for coord in sorted(board.occupied_cells()):
                labels = [f"{p.owner.prefix}{p.kind.letter}" for p in board.get_stack(coord)]
                print(f"Cell {coord}: {' '.join(labels)}")
        print("Pieces in hand:")
        for player in state.turns:
            ids = [e.entry_id for e in state.bank.entries_for(player)]
            print(f"  {player.value}: {' '.join(ids)}")
        print("-" * 50)
