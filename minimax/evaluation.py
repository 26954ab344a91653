from HiveEngine.HexUtils import get_adjacent_cells
from HiveEngine.Pieces import PieceType

from minimax.moves import apply_move_on_clone

DEFAULT_WEIGHTS = dict(
    material_factor=10.0,
    mobility_factor=3.0,
    queen_pressure_factor=8.0,
    mobility_cap=20,
)

MOVE_ORDER_WEIGHTS = dict(
    save_queen=800.0,
    endanger_queen=500.0,
    attack_queen=600.0,
    immediate_win=5000.0,
    own_mobility=20.0,
    enemy_mobility=10.0,
    placement=15.0,
    queen_placement=10.0,
    jitter=2.0,
)


def _merged(weights, base):
    if weights is None:
        return dict(base)
    merged = dict(weights)
    for k, v in base.items():
        merged.setdefault(k, v)
    return merged


def count_surrounding(board, pos):
    """Occupied neighbors of `pos` (0-6)."""
    return sum(1 for c in get_adjacent_cells(*pos) if not board.is_empty(c))


def queen_pressure(state, player):
    """How many cells around `player`'s Queen are taken; 0 if not placed."""
    queen = state.board.find_queen(player)
    if queen is None:
        return 0
    return count_surrounding(state.board, queen.position)


def mobility_for_player(state, player, cap=None):
    """Sum of legal destinations over `player`'s top pieces, optionally clamped."""
    board = state.board
    total = 0
    for piece in board.pieces:
        if piece.owner != player or not board.is_top_piece(piece):
            continue
        total += len(piece.legal_moves(board))
    if cap is not None:
        total = min(total, cap)
    return total


def evaluate_state(state, me, weights=None):
    """
    Static score of `state` from `me`'s point of view:

        material * (my pieces - their pieces)
      + mobility * (my mobility - their mobility)     (each side clamped)
      + pressure * (their queen pressure - my queen pressure)
    """
    weights = _merged(weights, DEFAULT_WEIGHTS)
    board = state.board
    opp = me.opponent

    my_count = len(board.pieces_of(me))
    op_count = len(board.pieces_of(opp))

    cap = weights["mobility_cap"]
    my_mob = mobility_for_player(state, me, cap)
    op_mob = mobility_for_player(state, opp, cap)

    my_press = queen_pressure(state, me)
    op_press = queen_pressure(state, opp)

    score = 0.0
    score += weights["material_factor"] * (my_count - op_count)
    score += weights["mobility_factor"] * (my_mob - op_mob)
    score += weights["queen_pressure_factor"] * (op_press - my_press)
    return score


def score_move(game, state, move, player, rng, weights=None):
    """
    Cheap one-ply ordering score used at the root. `rng` supplies the
    tie-breaking jitter so a seeded generator gives a repeatable order.
    """
    w = _merged(weights, MOVE_ORDER_WEIGHTS)
    enemy = player.opponent
    cap = DEFAULT_WEIGHTS["mobility_cap"]

    my_press_before = queen_pressure(state, player)
    enemy_press_before = queen_pressure(state, enemy)
    my_mob_before = mobility_for_player(state, player, cap)
    enemy_mob_before = mobility_for_player(state, enemy, cap)

    sim = state.copy()
    apply_move_on_clone(game, sim, move, player)

    my_press_after = queen_pressure(sim, player)
    enemy_press_after = queen_pressure(sim, enemy)
    my_mob_after = mobility_for_player(sim, player, cap)
    enemy_mob_after = mobility_for_player(sim, enemy, cap)

    score = 0.0
    if my_press_after < my_press_before:
        score += w["save_queen"]
    if my_press_after > my_press_before:
        score -= w["endanger_queen"]

    if enemy_press_after > enemy_press_before:
        score += w["attack_queen"]
    if enemy_press_after >= 6:
        score += w["immediate_win"]

    score += (my_mob_after - my_mob_before) * w["own_mobility"]
    score -= (enemy_mob_after - enemy_mob_before) * w["enemy_mobility"]

    if move.kind == "place":
        score += w["placement"]
        if move.piece_type == PieceType.QUEEN:
            score += w["queen_placement"]

    score += rng.random() * w["jitter"]
    return score
