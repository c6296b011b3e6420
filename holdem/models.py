from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from .ai import Personality
from .cards import Card
from .config import TableConfig
from .evaluator import evaluate_hand


class Street(str, Enum):
    PRE_FLOP = "pre-flop"
    FLOP = "flop"
    TURN = "turn"
    RIVER = "river"
    SHOWDOWN = "showdown"

    @property
    def title(self) -> str:
        return self.value.title()


NEXT_STREET = {
    Street.PRE_FLOP: Street.FLOP,
    Street.FLOP: Street.TURN,
    Street.TURN: Street.RIVER,
    Street.RIVER: Street.SHOWDOWN,
}

STREET_CARDS = {Street.FLOP: 3, Street.TURN: 1, Street.RIVER: 1}


@dataclass
class Seat:
    index: int
    name: str
    is_human: bool
    chips: int
    personality: Optional[Personality] = None

    hole: List[Card] = field(default_factory=list)
    bet: int = 0          # this betting round
    total_bet: int = 0    # earlier rounds of this hand
    folded: bool = False
    all_in: bool = False
    has_acted: bool = False

    @property
    def contribution(self) -> int:
        return self.total_bet + self.bet

    @property
    def live(self) -> bool:
        """Still able to make decisions this hand."""
        return not self.folded and not self.all_in and self.chips > 0

    def reset_for_hand(self):
        self.hole = []
        self.bet = 0
        self.total_bet = 0
        self.all_in = False
        self.has_acted = False
        self.folded = self.chips == 0

    def commit(self, amount: int) -> int:
        """Move up to ``amount`` chips from the stack to the current bet."""
        paid = max(0, min(amount, self.chips))
        self.chips -= paid
        self.bet += paid
        if self.chips == 0 and not self.folded:
            self.all_in = True
        return paid


@dataclass(frozen=True)
class SidePot:
    amount: int
    eligible: Tuple[int, ...]


@dataclass
class HandState:
    hand_no: int
    seats: List[Seat]
    dealer: int
    small_blind: int
    big_blind: int
    deck: List[Card]
    sb_seat: int = -1
    bb_seat: int = -1
    community: List[Card] = field(default_factory=list)
    pot: int = 0
    current_bet: int = 0
    street: Street = Street.PRE_FLOP
    acting: Optional[int] = None
    round_active: bool = False
    awaiting_human: bool = False
    hand_done: bool = False

    side_pots: List[SidePot] = field(default_factory=list)
    payouts: Dict[int, int] = field(default_factory=dict)
    winner_text: Optional[str] = None
    log: List[str] = field(default_factory=list)

    @property
    def acting_seat(self) -> Optional[Seat]:
        return None if self.acting is None else self.seats[self.acting]

    def in_hand(self) -> List[Seat]:
        return [s for s in self.seats if not s.folded]


@dataclass
class TableState:
    config: TableConfig
    seats: List[Seat]
    rng: random.Random
    dealer: int = 0
    hand_no: int = 0
    total_chips: int = 0
    game_over: bool = False
    winner: Optional[int] = None

    def with_chips(self) -> List[Seat]:
        return [s for s in self.seats if s.chips > 0]


# --------------------------
# Read-only views for adapters
# --------------------------

@dataclass(frozen=True)
class SeatView:
    index: int
    name: str
    is_human: bool
    chips: int
    bet: int
    contribution: int
    folded: bool
    all_in: bool
    is_dealer: bool
    is_acting: bool
    personality: Optional[str]
    hole: Optional[Tuple[Card, ...]]  # None when hidden from the viewer
    dealt: bool
    hand_name: Optional[str] = None
    won: int = 0


@dataclass(frozen=True)
class TableView:
    hand_no: int
    street: Street
    pot: int
    current_bet: int
    community: Tuple[Card, ...]
    seats: Tuple[SeatView, ...]
    acting: Optional[int]
    awaiting_human: bool
    hand_done: bool
    winner_text: Optional[str]
    log: Tuple[str, ...]
    side_pots: Tuple[SidePot, ...]
    game_over: bool


def snapshot(hand: HandState, table: TableState) -> TableView:
    """Freeze the table for rendering.

    A seat's hole cards are visible only if it is a human seat or the hand
    reached showdown.
    """
    showdown = hand.street is Street.SHOWDOWN
    views = []
    for s in hand.seats:
        visible = bool(s.hole) and (s.is_human or showdown)
        hand_name = None
        if showdown and not s.folded and s.hole and len(hand.community) == 5:
            hand_name = evaluate_hand(s.hole, hand.community).name
        views.append(SeatView(
            index=s.index,
            name=s.name,
            is_human=s.is_human,
            chips=s.chips,
            bet=s.bet,
            contribution=s.contribution,
            folded=s.folded,
            all_in=s.all_in,
            is_dealer=s.index == hand.dealer,
            is_acting=s.index == hand.acting and not hand.hand_done,
            personality=s.personality.name if s.personality else None,
            hole=tuple(s.hole) if visible else None,
            dealt=bool(s.hole),
            hand_name=hand_name,
            won=hand.payouts.get(s.index, 0),
        ))
    return TableView(
        hand_no=hand.hand_no,
        street=hand.street,
        pot=hand.pot,
        current_bet=hand.current_bet,
        community=tuple(hand.community),
        seats=tuple(views),
        acting=hand.acting,
        awaiting_human=hand.awaiting_human,
        hand_done=hand.hand_done,
        winner_text=hand.winner_text,
        log=tuple(hand.log),
        side_pots=tuple(hand.side_pots),
        game_over=table.game_over,
    )
