"""
Poker hand evaluation: best five cards out of five to seven, hand comparison
and winner selection for showdowns.
"""

from __future__ import annotations

import itertools
from collections import Counter
from dataclasses import dataclass
from enum import IntEnum
from typing import List, Sequence, Tuple

from .cards import Card
from .errors import InsufficientCards

WHEEL = [12, 3, 2, 1, 0]


class HandRank(IntEnum):
    HIGH_CARD = 0
    PAIR = 1
    TWO_PAIR = 2
    THREE_OF_A_KIND = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    FOUR_OF_A_KIND = 7
    STRAIGHT_FLUSH = 8
    ROYAL_FLUSH = 9

    @property
    def label(self) -> str:
        return self.name.replace("_", " ").title()


@dataclass(frozen=True)
class HandResult:
    category: HandRank
    values: Tuple[int, ...]
    cards: Tuple[Card, ...]

    @property
    def name(self) -> str:
        return self.category.label

    @property
    def key(self) -> Tuple[int, Tuple[int, ...]]:
        return (int(self.category), self.values)


def _straight_values(desc: List[int]) -> Tuple[int, ...]:
    """Tie-break values for five distinct descending values, or () if not a straight."""
    if desc == WHEEL:
        # ace plays low: five-high
        return (3, 2, 1, 0, -1)
    if desc[0] - desc[4] == 4:
        return tuple(desc)
    return ()


def evaluate_five(cards: Sequence[Card]) -> HandResult:
    if len(cards) != 5:
        raise ValueError(f"evaluate_five needs exactly 5 cards, got {len(cards)}")

    ordered = tuple(sorted(cards, key=lambda c: c.value, reverse=True))
    desc = [c.value for c in ordered]
    flush = len({c.suit for c in ordered}) == 1
    straight = _straight_values(desc) if len(set(desc)) == 5 else ()

    if flush and straight:
        if straight[0] == 12:
            return HandResult(HandRank.ROYAL_FLUSH, straight, ordered)
        return HandResult(HandRank.STRAIGHT_FLUSH, straight, ordered)

    # (count, value) high to low: quads first, then trips, pairs, kickers
    groups = sorted(((n, v) for v, n in Counter(desc).items()), reverse=True)
    counts = [n for n, _ in groups]
    by_count = tuple(v for _, v in groups)

    if counts[0] == 4:
        return HandResult(HandRank.FOUR_OF_A_KIND, by_count, ordered)
    if counts == [3, 2]:
        return HandResult(HandRank.FULL_HOUSE, by_count, ordered)
    if flush:
        return HandResult(HandRank.FLUSH, tuple(desc), ordered)
    if straight:
        return HandResult(HandRank.STRAIGHT, straight, ordered)
    if counts[0] == 3:
        return HandResult(HandRank.THREE_OF_A_KIND, by_count, ordered)
    if counts[:2] == [2, 2]:
        return HandResult(HandRank.TWO_PAIR, by_count, ordered)
    if counts[0] == 2:
        return HandResult(HandRank.PAIR, by_count, ordered)
    return HandResult(HandRank.HIGH_CARD, tuple(desc), ordered)


def evaluate_hand(hole: Sequence[Card], community: Sequence[Card] = ()) -> HandResult:
    """Best five-card hand from hole + community (5 to 7 cards in total)."""
    cards = list(hole) + list(community)
    if len(cards) < 5:
        raise InsufficientCards(len(cards))
    if len(cards) > 7:
        raise ValueError(f"a hold'em hand has at most 7 cards, got {len(cards)}")

    best = None
    for combo in itertools.combinations(cards, 5):
        res = evaluate_five(combo)
        if best is None or res.key > best.key:
            best = res
    return best


def compare_hands(a: HandResult, b: HandResult) -> int:
    if a.category != b.category:
        return 1 if a.category > b.category else -1
    for x, y in zip(a.values, b.values):
        if x != y:
            return 1 if x > y else -1
    return 0


def determine_winners(seats, community: Sequence[Card]) -> List[Tuple[object, HandResult]]:
    """Every live seat tied for the best hand, paired with its result.

    Seats are anything with ``folded`` and ``hole`` attributes. A seat that is
    all-in has no chips left at showdown but is still live, so liveness is
    "not folded and dealt in" rather than "has chips".
    """
    evaluated = [(s, evaluate_hand(s.hole, community)) for s in seats if not s.folded and s.hole]
    if not evaluated:
        return []

    best = evaluated[0][1]
    for _, res in evaluated[1:]:
        if compare_hands(res, best) > 0:
            best = res
    return [(s, res) for s, res in evaluated if compare_hands(res, best) == 0]
