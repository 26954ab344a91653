#!/usr/bin/env python3
"""
Hive minimax tournament
=======================

   $ python tournament.py --init-players     # write sample agents to players/
   $ python tournament.py --games 4          # every pair, both colours

Each agent is a JSON file in ``players/`` holding MinimaxAI keyword
arguments (depth, max_root_moves, time_limit_ms, weights, seed).
"""
from __future__ import annotations

import argparse
import json
import logging
import time
from pathlib import Path
from typing import Dict, List, Tuple

import numpy as np

from HiveEngine.HiveGame import HiveGame
from HiveEngine.Pieces import Player
from minimax.minimax_ai import MinimaxAI
from minimax.moves import apply_move

logger = logging.getLogger(__name__)

PLAYERS_DIR = Path("players")
MAX_PLIES = 200


# -----------------------------------------------------
# Player parameter loading
# -----------------------------------------------------

def load_agents(players_dir: Path = PLAYERS_DIR) -> Dict[str, dict]:
    if not players_dir.exists():
        raise FileNotFoundError(f"'{players_dir}/' directory not found. Run --init-players first.")
    param_files = sorted(players_dir.glob("*.json"))
    if not param_files:
        raise FileNotFoundError(f"No *.json files in '{players_dir}/'.")
    agents = {}
    for path in param_files:
        with path.open() as f:
            agents[path.stem] = json.load(f)
    return agents


# -----------------------------------------------------
# Single game execution
# -----------------------------------------------------

def play_one_game(params_white: dict, params_black: dict, seed: int,
                  max_plies: int = MAX_PLIES, think_times: Dict[Player, List[float]] = None) -> int:
    """Return +1/0/-1 from White's perspective. Hitting `max_plies` is a draw."""
    game = HiveGame()
    state = game.getInitialState(first_player=Player.WHITE)
    agents = {
        Player.WHITE: MinimaxAI(game=game, **{"seed": seed, **params_white}),
        Player.BLACK: MinimaxAI(game=game, **{"seed": seed + 1, **params_black}),
    }

    for ply in range(max_plies):
        winner = game.checkWin(state)
        if winner is not None:
            break
        current = state.current_player
        start = time.perf_counter()
        move = agents[current].find_best_move(state, current)
        if think_times is not None:
            think_times[current].append(time.perf_counter() - start)

        if move is None:
            logger.debug("ply %d: %s passes", ply, current.value)
            if not game.hasAvailableMoves(state, current.opponent):
                break
            game.skipTurn(state)
            continue
        if not apply_move(game, state, move):
            raise RuntimeError(f"Agent for {current.value} produced an illegal move: {move}")
        logger.debug("ply %d: %s", ply, move)

    winner = game.checkWin(state)
    return +1 if winner == Player.WHITE else -1 if winner == Player.BLACK else 0


# -----------------------------------------------------
# Elo helper
# -----------------------------------------------------

def expected(r_a, r_b):
    return 1 / (1 + 10 ** ((r_b - r_a) / 400))


def update(r, s, e, k=16):
    return r + k * (s - e)


def elo(names: List[str], results: Dict[Tuple[int, int], Tuple[int, int, int]]):
    rating = {n: 1500.0 for n in names}
    for (i, j), (w, d, l) in results.items():
        tot = w + d + l
        if tot == 0:
            continue
        s_i = (w + 0.5 * d) / tot
        s_j = 1 - s_i
        e_i = expected(rating[names[i]], rating[names[j]])
        rating[names[i]] = update(rating[names[i]], s_i, e_i)
        rating[names[j]] = update(rating[names[j]], s_j, 1 - e_i)
    return rating


def think_time_summary(samples: List[float]) -> Tuple[float, float]:
    """(mean, 95th percentile) of per-move thinking time in seconds."""
    if not samples:
        return 0.0, 0.0
    arr = np.asarray(samples, dtype=float)
    return float(arr.mean()), float(np.percentile(arr, 95))


# -----------------------------------------------------
# Tournament driver
# -----------------------------------------------------

def run_tournament(num_games: int, players_dir: Path = PLAYERS_DIR, max_plies: int = MAX_PLIES):
    agents = load_agents(players_dir)
    names = list(agents)
    n = len(names)
    results = {}
    times = {name: [] for name in names}
    start = time.time()

    for i in range(n):
        for j in range(i + 1, n):
            w = d = l = 0
            for k in range(num_games):
                think = {Player.WHITE: [], Player.BLACK: []}
                score = play_one_game(agents[names[i]], agents[names[j]], k, max_plies, think)
                times[names[i]] += think[Player.WHITE]
                times[names[j]] += think[Player.BLACK]
                if score == 1:
                    w += 1
                elif score == 0:
                    d += 1
                else:
                    l += 1
                # Swap colours
                think = {Player.WHITE: [], Player.BLACK: []}
                score = play_one_game(agents[names[j]], agents[names[i]], k + 10000, max_plies, think)
                times[names[j]] += think[Player.WHITE]
                times[names[i]] += think[Player.BLACK]
                if score == -1:
                    w += 1
                elif score == 0:
                    d += 1
                else:
                    l += 1
            results[(i, j)] = (w, d, l)
            logger.info("%s vs %s -> W/D/L = %d/%d/%d", names[i], names[j], w, d, l)

    rating = elo(names, results)
    logger.info("=== Elo standings ===")
    for name, r in sorted(rating.items(), key=lambda x: -x[1]):
        mean, p95 = think_time_summary(times[name])
        logger.info("%-20s %6.1f   think mean %.2fs p95 %.2fs", name, r, mean, p95)
    logger.info("Tournament time: %.1fs", time.time() - start)
    return rating


# -----------------------------------------------------
# Sample params generator
# -----------------------------------------------------
SAMPLE = {
    "baseline": {"depth": 2, "max_root_moves": 6, "time_limit_ms": 3000},
    "wide": {"depth": 2, "max_root_moves": 12, "time_limit_ms": 3000},
    "aggressive": {
        "depth": 2, "max_root_moves": 6, "time_limit_ms": 3000,
        "weights": {"queen_pressure_factor": 16.0, "mobility_factor": 2.0},
    },
}


def init_players(players_dir: Path = PLAYERS_DIR):
    players_dir.mkdir(exist_ok=True)
    for name, params in SAMPLE.items():
        out = players_dir / f"{name}.json"
        if not out.exists():
            with out.open("w") as f:
                json.dump(params, f, indent=2)
            logger.info("wrote %s", out)


# -----------------------------------------------------
# Main -------------------------------------------------
# -----------------------------------------------------
def main(argv=None):
    parser = argparse.ArgumentParser(description="Round-robin between minimax Hive agents.")
    parser.add_argument("--init-players", action="store_true", help="write sample agent files and exit")
    parser.add_argument("--games", type=int, default=2, help="games per pairing and colour")
    parser.add_argument("--players-dir", type=Path, default=PLAYERS_DIR)
    parser.add_argument("--max-plies", type=int, default=MAX_PLIES)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%H:%M:%S'
    )

    if args.init_players:
        init_players(args.players_dir)
        return
    run_tournament(args.games, args.players_dir, args.max_plies)


if __name__ == "__main__":
    main()
