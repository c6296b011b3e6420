"""
Pot accounting at the end of a hand: side-pot layering, showdown payouts and
the uncontested win when everyone else folds.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Sequence

from .evaluator import determine_winners
from .models import HandState, Seat, SidePot, Street

log = logging.getLogger(__name__)


def compute_side_pots(seats: Sequence[Seat]) -> List[SidePot]:
    """Split everything contributed this hand into pots by all-in level.

    Levels are the distinct contributions of seats still in the hand, lowest
    first. Each layer takes every seat's chips between the previous level and
    its own, folded seats included, and can be won by the live seats whose
    contribution reaches it. The first entry is the main pot. Chips a folded
    seat put in above the highest live level land in the last layer, so the
    layers always add up to the pot.
    """
    live = [s for s in seats if not s.folded and s.contribution > 0]
    levels = sorted({s.contribution for s in live})

    pots: List[SidePot] = []
    prev = 0
    for i, level in enumerate(levels):
        top = i == len(levels) - 1
        amount = 0
        for s in seats:
            c = s.contribution
            if c <= prev:
                continue
            amount += (c - prev) if top else (min(c, level) - prev)
        eligible = tuple(s.index for s in live if s.contribution >= level)
        pots.append(SidePot(amount, eligible))
        prev = level
    return pots


def _seat_order_from(hand: HandState, indices: Sequence[int]) -> List[int]:
    """``indices`` ordered clockwise starting left of the dealer."""
    n = len(hand.seats)
    return sorted(indices, key=lambda i: (i - hand.dealer - 1) % n)


def split_pot(hand: HandState, amount: int, winners: Sequence[int]) -> Dict[int, int]:
    """Even split; odd chips go one each to winners closest to the dealer's left."""
    share, rem = divmod(amount, len(winners))
    out = {w: share for w in winners}
    for w in _seat_order_from(hand, winners)[:rem]:
        out[w] += 1
    return out


def resolve_showdown(hand: HandState):
    hand.street = Street.SHOWDOWN
    hand.side_pots = compute_side_pots(hand.seats)
    payouts: Dict[int, int] = {}

    for pot_index, pot in enumerate(hand.side_pots):
        if pot.amount <= 0:
            continue
        eligible = [hand.seats[i] for i in pot.eligible]
        results = determine_winners(eligible, hand.community)
        winners = [s.index for s, _ in results]
        for idx, amt in split_pot(hand, pot.amount, winners).items():
            payouts[idx] = payouts.get(idx, 0) + amt

        pot_name = "Main pot" if pot_index == 0 else f"Side pot #{pot_index}"
        names = ", ".join(hand.seats[i].name for i in winners)
        hand.log.append(f"{pot_name} {pot.amount} ({results[0][1].name}) won by {names}.")

    for idx, amt in payouts.items():
        hand.seats[idx].chips += amt
    hand.payouts = payouts
    hand.pot = 0

    top = max(payouts.values())
    top_winners = [hand.seats[i].name for i, amt in payouts.items() if amt == top]
    if len(top_winners) == 1:
        hand.winner_text = f"{top_winners[0]} wins {top}."
    else:
        hand.winner_text = f"Split pot: {', '.join(top_winners)} ({top} each)."
    hand.log.append(hand.winner_text)
    log.info("hand #%d showdown: %s", hand.hand_no, payouts)


def award_uncontested(hand: HandState):
    (winner,) = hand.in_hand()
    amount = hand.pot
    winner.chips += amount
    hand.payouts = {winner.index: amount}
    hand.pot = 0
    hand.winner_text = f"{winner.name} wins {amount} (everyone else folded)."
    hand.log.append(hand.winner_text)
    log.info("hand #%d uncontested: %s takes %d", hand.hand_no, winner.name, amount)
