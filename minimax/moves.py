"""
Move generation and application for the search.

An AIMove is either a PlaceMove (bank -> board) or a RelocateMove
(board -> board). Both are plain immutable values; the ``kind`` tag lets
callers branch without isinstance checks.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, List, Union

from HiveEngine.Pieces import HexCoord, PieceType, Player


@dataclass(frozen=True, slots=True)
class PlaceMove:
    kind: ClassVar[str] = "place"
    piece_type: PieceType
    color: Player
    target: HexCoord


@dataclass(frozen=True, slots=True)
class RelocateMove:
    kind: ClassVar[str] = "move"
    piece_type: PieceType
    color: Player
    from_coord: HexCoord
    to: HexCoord


AIMove = Union[PlaceMove, RelocateMove]


# ---------------------------------------------------------
# Placement validation
# ---------------------------------------------------------
def is_legal_placement(game, state, piece_type, player, target) -> bool:
    """Speculatively place on a clone, as if `player` were to move."""
    clone = state.copy()
    clone.current_player = player
    entry = clone.bank.find(piece_type, player)
    if entry is None:
        return False
    return game.placePiece(clone, clone.bank.create_piece(entry.entry_id), target)


def _touches_only_own(board, coord, player) -> bool:
    touches_own = False
    for nb in board.neighbors(coord):
        top = board.top_piece_at(nb)
        if top is None:
            continue
        if top.owner != player:
            return False
        touches_own = True
    return touches_own


def generate_forced_queen_placements(game, state, player) -> List[AIMove]:
    moves = []
    for coord in state.board.all_coords_around_hive():
        if is_legal_placement(game, state, PieceType.QUEEN, player, coord):
            moves.append(PlaceMove(PieceType.QUEEN, player, coord))
    return moves


def generate_moves(game, state, player) -> List[AIMove]:
    """
    Every legal action for `player` as the side to move: placements first,
    then relocations of pieces on top of their stacks. Once the Queen
    deadline is reached without a Queen on the board, only Queen
    placements are returned.
    """
    if game.mustPlaceQueen(state, player):
        return generate_forced_queen_placements(game, state, player)

    board = state.board
    moves: List[AIMove] = []
    coords = board.all_coords_around_hive()

    for piece_type in state.bank.kinds_for(player):
        for coord in coords:
            if len(board.pieces) >= 2 and not _touches_only_own(board, coord, player):
                continue
            if is_legal_placement(game, state, piece_type, player, coord):
                moves.append(PlaceMove(piece_type, player, coord))

    move_cache = {}
    for piece in board.pieces:
        if piece.owner != player or not board.is_top_piece(piece):
            continue
        if piece.piece_id not in move_cache:
            move_cache[piece.piece_id] = piece.legal_moves(board)
        for dest in move_cache[piece.piece_id]:
            moves.append(RelocateMove(piece.kind, piece.owner, piece.position, dest))

    return moves


# ---------------------------------------------------------
# Applying moves
# ---------------------------------------------------------
def _find_board_piece(board, move):
    top = board.top_piece_at(move.from_coord)
    if top is not None and top.owner == move.color and top.kind == move.piece_type:
        return top
    return None


def apply_move(game, state, move) -> bool:
    """
    Execute `move` against `state`. A placement consumes the matching bank
    entry. Returns False, leaving the state untouched, if the move cannot be
    played.
    """
    if move.kind == "place":
        entry = state.bank.find(move.piece_type, move.color)
        if entry is None:
            return False
        piece = state.bank.create_piece(entry.entry_id)
        if not game.placePiece(state, piece, move.target):
            return False
        state.bank.remove(entry.entry_id)
        return True

    piece = _find_board_piece(state.board, move)
    if piece is None:
        return False
    return game.movePiece(state, piece, move.to)


def apply_move_on_clone(game, state, move, player) -> bool:
    """Search-side application: `player` is made the side to move first."""
    state.current_player = player
    return apply_move(game, state, move)


def advance_turn(game, state):
    """
    After a move has handed the turn over, give it straight back if the new
    side to move has nothing to play (forced pass).
    """
    if state.current_player is None:
        return
    if not game.hasAvailableMoves(state, state.current_player):
        game.skipTurn(state)
