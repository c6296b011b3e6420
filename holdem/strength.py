"""
Hand-strength estimates in [0, 1] used by the AI seats.

``hand_strength`` is the cheap heuristic the decision bands were tuned on.
``estimate_equity`` is a Monte Carlo win rate against random hands, run on
treys' evaluator for speed.
"""

from __future__ import annotations

import random
from typing import List, Optional, Sequence

from treys import Evaluator

from .cards import RANKS, SUITS, Card, to_treys
from .evaluator import evaluate_hand

EVAL = Evaluator()


def starting_hand_strength(hole: Sequence[Card]) -> float:
    if len(hole) != 2:
        return 0.0

    c1, c2 = hole
    high = max(c1.value, c2.value)
    gap = abs(c1.value - c2.value)

    if c1.value == c2.value:
        return min(1.0, 0.5 + c1.value / 12 * 0.4)  # 22 = 0.5, AA = 0.9

    s = high / 12 * 0.5
    if c1.suit == c2.suit:
        s += 0.1
    if gap <= 1:
        s += 0.1
    elif gap <= 3:
        s += 0.05
    if c1.value >= 9 and c2.value >= 9:
        s += 0.2
    return min(1.0, s)


def hand_strength(hole: Sequence[Card], community: Sequence[Card]) -> float:
    if not community:
        return starting_hand_strength(hole)
    res = evaluate_hand(hole, community)
    high_bonus = max(0, res.values[0]) / 12 * 0.2
    return min(1.0, int(res.category) / 9 + high_bonus)


def estimate_equity(hole: Sequence[Card], community: Sequence[Card], opponents: int = 1,
                    iters: int = 200, rng: Optional[random.Random] = None) -> float:
    """Win probability (ties count half) against ``opponents`` random hands."""
    rng = rng or random.Random()
    known = set(hole) | set(community)
    remain: List[int] = [to_treys(Card(r, s)) for r in RANKS for s in SUITS if Card(r, s) not in known]
    my_hand = [to_treys(c) for c in hole]
    board = [to_treys(c) for c in community]
    need = 5 - len(board)
    n_opp = max(1, opponents)

    wins = ties = 0
    for _ in range(iters):
        rng.shuffle(remain)
        idx = 0
        opp_holes = []
        for _k in range(n_opp):
            opp_holes.append(remain[idx:idx + 2])
            idx += 2
        runout = board + remain[idx:idx + need]

        my_score = EVAL.evaluate(runout, my_hand)
        opp_scores = [EVAL.evaluate(runout, h2) for h2 in opp_holes]
        best = min([my_score] + opp_scores)

        if my_score == best:
            if opp_scores.count(best) == 0:
                wins += 1
            else:
                ties += 1

    return (wins + 0.5 * ties) / iters
