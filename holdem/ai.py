from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from .actions import Action, Decision
from .strength import estimate_equity, hand_strength

log = logging.getLogger(__name__)


# --------------------------
# Personalities
# --------------------------

@dataclass(frozen=True)
class Personality:
    name: str
    aggression: float      # 0..1 (higher = raises more)
    bluff_freq: float      # 0..1 (chance to raise with junk when facing a bet)
    call_threshold: float  # 0..1 (chance to take a cheap call with a weak hand)
    description: str


def personality_registry() -> Dict[str, Personality]:
    types = [
        Personality("Tight", 0.3, 0.1, 0.6,
                    "Plays few hands, rarely bluffs, calls cheap bets with weak holdings."),
        Personality("Aggressive", 0.7, 0.3, 0.4,
                    "Bets and raises often, bluffs regularly."),
        Personality("Loose", 0.5, 0.4, 0.3,
                    "Bluffs the most; middling aggression."),
        Personality("Conservative", 0.2, 0.05, 0.7,
                    "Passive and honest: almost never bluffs, seldom raises."),
    ]
    return {p.name.lower(): p for p in types}


PERSONALITIES = personality_registry()


def get_personality(name: str) -> Optional[Personality]:
    return PERSONALITIES.get(name.strip().lower())


def random_personality(rng: random.Random) -> Personality:
    return PERSONALITIES[rng.choice(sorted(PERSONALITIES))]


# --------------------------
# Decision
# --------------------------

def decide(strength: float, personality: Personality, pot: int, to_call: int, stack: int,
           rng: random.Random) -> Tuple[Action, int]:
    """Pick an action from a strength estimate in [0, 1].

    Returns ``(action, size)`` where ``size`` is, for a raise, the chips put in
    on top of the call: a fraction of the pot that grows with the strength
    band, floored and capped at ``stack``. ``size`` is 0 for other actions.
    """
    can_check = to_call == 0
    p = personality

    def sized(frac: float) -> Tuple[Action, int]:
        return Action.RAISE, min(int(pot * frac), stack)

    def call_or_check() -> Tuple[Action, int]:
        return (Action.CHECK, 0) if can_check else (Action.CALL, 0)

    # very weak
    if strength < 0.2:
        if can_check:
            return Action.CHECK, 0
        if rng.random() < p.bluff_freq:
            return sized(0.3)
        return Action.FOLD, 0

    # weak
    if strength < 0.4:
        if can_check:
            return Action.CHECK, 0
        if to_call <= stack * 0.1 and rng.random() < p.call_threshold:
            return Action.CALL, 0
        return Action.FOLD, 0

    # medium
    if strength < 0.65:
        if can_check:
            if rng.random() < p.aggression:
                return sized(0.4)
            return Action.CHECK, 0
        if to_call <= stack * 0.2:
            return Action.CALL, 0
        if rng.random() > p.aggression:
            return Action.FOLD, 0
        return Action.CALL, 0

    # strong
    if strength < 0.85:
        if rng.random() < p.aggression + 0.2:
            return sized(0.5 + rng.random() * 0.5)
        if can_check:
            if rng.random() < 0.3:
                return Action.CHECK, 0  # slow play
            return sized(0.5)
        return Action.CALL, 0

    # very strong
    if rng.random() < 0.8:
        return sized(0.7 + rng.random() * 0.8)
    if can_check and rng.random() < 0.2:
        return Action.CHECK, 0
    return call_or_check()


def seat_strength(hand, seat, rng: random.Random, model: str = "heuristic", iters: int = 200) -> float:
    if model == "equity":
        opponents = sum(1 for s in hand.seats if s is not seat and not s.folded and s.hole)
        return estimate_equity(seat.hole, hand.community, opponents, iters=iters, rng=rng)
    return hand_strength(seat.hole, hand.community)


def ai_decide(hand, seat, rng: random.Random, model: str = "heuristic", iters: int = 200) -> Decision:
    """Turn the pure decision into an engine Decision for ``seat``."""
    to_call = max(0, hand.current_bet - seat.bet)
    strength = seat_strength(hand, seat, rng, model=model, iters=iters)
    action, size = decide(strength, seat.personality, hand.pot, to_call, seat.chips, rng)
    log.debug("%s (%s) strength=%.2f to_call=%d -> %s %d",
              seat.name, seat.personality.name, strength, to_call, action.value, size)
    if action is Action.RAISE:
        return Decision(Action.RAISE, hand.current_bet + size)
    return Decision(action)


def think_delay(rng: random.Random, bounds: Tuple[float, float] = (0.5, 2.0)) -> float:
    lo, hi = bounds
    return lo + rng.random() * (hi - lo)
