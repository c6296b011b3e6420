"""
Betting engine: one session (TableState) plays a sequence of hands
(HandState). The driver, ``advance_until_wait``, runs AI seats one at a time
and returns whenever a human seat has to act or the hand is over; adapters
then feed the human's choice back with ``submit_human_action``.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Callable, List, Optional

from .actions import ALL_IN, CALL, CHECK, Action, Decision, raise_to
from .ai import ai_decide, get_personality, random_personality, think_delay
from .cards import burn, cards_short, deal, new_deck
from .config import TableConfig
from .errors import ChipIntegrityError, HoldemError, IllegalAction
from .models import NEXT_STREET, STREET_CARDS, HandState, Seat, Street, TableState
from .pots import award_uncontested, resolve_showdown

log = logging.getLogger(__name__)

Pause = Callable[[float], None]
Listener = Callable[[HandState], None]


# --------------------------
# Session
# --------------------------

def new_table(config: Optional[TableConfig] = None, rng: Optional[random.Random] = None) -> TableState:
    config = (config or TableConfig()).validate()
    rng = rng or random.Random(config.seed)
    fixed = get_personality(config.ai_personality) if config.ai_personality else None

    seats: List[Seat] = []
    for i in range(config.seats):
        human = i == config.human_seat
        seats.append(Seat(
            index=i,
            name=config.human_name if human else f"Player {i + 1}",
            is_human=human,
            chips=config.starting_chips,
            personality=None if human else (fixed or random_personality(rng)),
        ))
    return TableState(config=config, seats=seats, rng=rng,
                      total_chips=sum(s.chips for s in seats))


def next_index(seats: List[Seat], start: int, pred: Callable[[Seat], bool]) -> Optional[int]:
    """First seat clockwise after ``start`` matching ``pred``."""
    n = len(seats)
    for step in range(1, n + 1):
        i = (start + step) % n
        if pred(seats[i]):
            return i
    return None


def rotate_dealer(t: TableState) -> int:
    nxt = next_index(t.seats, t.dealer, lambda s: s.chips > 0)
    if nxt is None:
        raise IllegalAction("no seat has chips")
    t.dealer = nxt
    return nxt


def check_chip_integrity(h: HandState, t: TableState):
    actual = sum(s.chips for s in t.seats) + h.pot
    if actual != t.total_chips:
        log.error("hand #%d: chip drift %d != %d", h.hand_no, actual, t.total_chips)
        raise ChipIntegrityError(t.total_chips, actual)


# --------------------------
# Dealing / progression
# --------------------------

def start_hand(t: TableState) -> HandState:
    if t.game_over:
        raise IllegalAction("the game is over")
    if len(t.with_chips()) < 2:
        _end_game(t)
        raise IllegalAction("the game is over")

    t.hand_no += 1
    for s in t.seats:
        s.reset_for_hand()
    dealer = rotate_dealer(t)

    cfg = t.config
    h = HandState(hand_no=t.hand_no, seats=t.seats, dealer=dealer,
                  small_blind=cfg.small_blind, big_blind=cfg.big_blind,
                  deck=new_deck(t.rng))
    h.log.append(f"Hand #{h.hand_no} (dealer: {t.seats[dealer].name})")

    i = dealer
    for _ in range(len(t.seats)):
        i = (i + 1) % len(t.seats)
        if not t.seats[i].folded:
            t.seats[i].hole = deal(h.deck, 2)

    post_blinds(h)
    h.round_active = True
    h.acting = first_to_act(h)
    check_chip_integrity(h, t)
    log.debug("hand #%d started, dealer %d, blinds %d/%d",
              h.hand_no, dealer, h.sb_seat, h.bb_seat)
    return h


def post_blinds(h: HandState):
    in_hand = lambda s: not s.folded  # noqa: E731
    h.sb_seat = next_index(h.seats, h.dealer, in_hand)
    h.bb_seat = next_index(h.seats, h.sb_seat, in_hand)
    sb = h.seats[h.sb_seat]
    bb = h.seats[h.bb_seat]

    sb_amt = sb.commit(h.small_blind)
    bb_amt = bb.commit(h.big_blind)
    h.pot += sb_amt + bb_amt
    h.current_bet = max(sb.bet, bb.bet)

    h.log.append(f"{sb.name} posts SB {sb_amt}. {bb.name} posts BB {bb_amt}.")
    for s in (sb, bb):
        if s.all_in:
            h.log.append(f"{s.name} is all-in from the blind.")


def first_to_act(h: HandState) -> Optional[int]:
    start = h.bb_seat if h.street is Street.PRE_FLOP else h.dealer
    return next_index(h.seats, start, lambda s: s.live)


def deal_next_street(h: HandState):
    nxt = NEXT_STREET[h.street]
    if nxt is Street.SHOWDOWN:
        raise IllegalAction("no street left to deal")
    burn(h.deck)
    h.community.extend(deal(h.deck, STREET_CARDS[nxt]))
    h.street = nxt
    h.log.append(f"{nxt.title}: {cards_short(h.community)}")
    h.round_active = True
    h.acting = first_to_act(h)


def end_betting_round(h: HandState):
    for s in h.seats:
        s.total_bet += s.bet
        s.bet = 0
        s.has_acted = False
    h.current_bet = 0
    h.round_active = False
    h.acting = None


def run_out_board(h: HandState):
    """No more betting is possible: deal whatever is left of the board."""
    end_betting_round(h)
    if h.street is not Street.RIVER:
        h.log.append("No more betting: running out the board.")
    while h.street is not Street.RIVER:
        deal_next_street(h)
        h.round_active = False
        h.acting = None


# --------------------------
# Betting rules
# --------------------------

def amount_owed(h: HandState, seat: Seat) -> int:
    return max(0, h.current_bet - seat.bet)


def min_raise_to(h: HandState) -> int:
    if h.current_bet > 0:
        return h.current_bet + h.big_blind
    return h.big_blind


def others_can_respond(h: HandState, seat: Seat) -> bool:
    return any(s.live for s in h.seats if s is not seat)


def is_round_complete(h: HandState) -> bool:
    """Every seat that can still act has acted since the last raise and matched it."""
    contesting = [s for s in h.seats if s.live]
    if not contesting:
        return True
    if len(contesting) == 1:
        s = contesting[0]
        return s.has_acted and s.bet >= h.current_bet
    return all(s.has_acted and s.bet == h.current_bet for s in contesting)


def betting_closed(h: HandState) -> bool:
    """True when nobody is left with a decision: at most one seat with chips
    behind, and it owes nothing."""
    contesting = [s for s in h.seats if s.live]
    if not contesting:
        return True
    if len(contesting) == 1:
        return contesting[0].bet >= h.current_bet
    return False


@dataclass(frozen=True)
class ActionOptions:
    to_call: int
    can_check: bool
    can_raise: bool
    min_raise_to: int
    max_raise_to: int


def action_options(h: HandState, seat: Seat) -> ActionOptions:
    owed = amount_owed(h, seat)
    max_to = seat.bet + seat.chips
    can_raise = others_can_respond(h, seat) and max_to > h.current_bet
    return ActionOptions(
        to_call=min(owed, seat.chips),
        can_check=owed == 0,
        can_raise=can_raise,
        min_raise_to=min(min_raise_to(h), max_to),
        max_raise_to=max_to,
    )


def validate_action(h: HandState, seat: Seat, decision: Decision) -> Decision:
    """Normalize ``decision`` for ``seat`` or raise IllegalAction. Never mutates."""
    if h.hand_done:
        raise IllegalAction("the hand is over")
    if h.acting != seat.index:
        raise IllegalAction(f"it is not {seat.name}'s turn")
    if not seat.live:
        raise IllegalAction(f"{seat.name} cannot act")

    owed = amount_owed(h, seat)
    act = decision.action

    if act is Action.CHECK and owed > 0:
        raise IllegalAction(f"{seat.name} cannot check facing a bet of {owed}")
    if act is Action.CALL and owed == 0:
        return CHECK

    if act in (Action.RAISE, Action.ALL_IN) and not others_can_respond(h, seat):
        # everyone else is all-in or folded: raising is closed
        return CALL if owed > 0 else CHECK

    if act is Action.RAISE:
        max_to = seat.bet + seat.chips
        total = min(max(decision.amount, min_raise_to(h)), max_to)
        if total != decision.amount:
            log.warning("%s raise to %d clamped to %d", seat.name, decision.amount, total)
        if total >= max_to:
            return ALL_IN
        return raise_to(total)

    return decision


def _raise(h: HandState, seat: Seat):
    h.current_bet = seat.bet
    for s in h.seats:
        if s is not seat and s.live:
            s.has_acted = False


def apply_action(h: HandState, decision: Decision) -> Decision:
    """Validate and apply ``decision`` for the acting seat. Returns what was applied."""
    seat = h.acting_seat
    if seat is None:
        raise IllegalAction("nobody is to act")
    d = validate_action(h, seat, decision)
    owed = amount_owed(h, seat)

    if d.action is Action.FOLD:
        seat.folded = True
        h.log.append(f"{seat.name} folds.")

    elif d.action is Action.CHECK:
        h.log.append(f"{seat.name} checks.")

    elif d.action is Action.CALL:
        paid = seat.commit(owed)
        h.pot += paid
        h.log.append(f"{seat.name} calls {paid}" + (" and is all-in." if seat.all_in else "."))

    elif d.action is Action.RAISE:
        paid = seat.commit(d.amount - seat.bet)
        h.pot += paid
        _raise(h, seat)
        h.log.append(f"{seat.name} raises to {h.current_bet}.")

    elif d.action is Action.ALL_IN:
        paid = seat.commit(seat.chips)
        h.pot += paid
        if seat.bet > h.current_bet:
            _raise(h, seat)
            h.log.append(f"{seat.name} goes all-in to {seat.bet}.")
        else:
            h.log.append(f"{seat.name} goes all-in for {paid}.")

    seat.has_acted = True
    h.awaiting_human = False
    h.acting = next_index(h.seats, seat.index, lambda s: s.live)
    log.debug("hand #%d %s: %s %s (pot %d, bet %d)",
              h.hand_no, h.street.value, seat.name, d, h.pot, h.current_bet)
    return d


# --------------------------
# Driver
# --------------------------

def _end_game(t: TableState):
    left = t.with_chips()
    if len(left) == 1 and not t.game_over:
        t.game_over = True
        t.winner = left[0].index
        log.info("game over: %s wins with %d", left[0].name, left[0].chips)


def finish_hand(h: HandState, t: TableState):
    for s in h.seats:
        s.total_bet += s.bet
        s.bet = 0
    h.hand_done = True
    h.round_active = False
    h.awaiting_human = False
    h.acting = None
    check_chip_integrity(h, t)
    _end_game(t)
    if t.game_over:
        h.log.append(f"Game over: {t.seats[t.winner].name} has all the chips.")


def advance_until_wait(h: HandState, t: TableState, pause: Optional[Pause] = None,
                       on_change: Optional[Listener] = None) -> HandState:
    """Advance the hand until it needs human input or ends."""
    cfg = t.config

    def changed():
        if on_change is not None:
            on_change(h)

    while not h.hand_done:
        if len(h.in_hand()) == 1:
            award_uncontested(h)
            finish_hand(h, t)
            break

        if betting_closed(h):
            run_out_board(h)
            resolve_showdown(h)
            finish_hand(h, t)
            break

        if is_round_complete(h):
            end_betting_round(h)
            if h.street is Street.RIVER:
                resolve_showdown(h)
                finish_hand(h, t)
                break
            deal_next_street(h)
            changed()
            continue

        seat = h.acting_seat
        if seat is None or not seat.live or (seat.has_acted and seat.bet == h.current_bet):
            nxt = next_index(h.seats, h.acting if h.acting is not None else h.dealer,
                             lambda s: s.live and not (s.has_acted and s.bet == h.current_bet))
            if nxt is None:
                raise HoldemError(f"hand #{h.hand_no}: open betting round with nobody to act")
            h.acting = nxt
            continue

        if seat.is_human:
            h.awaiting_human = True
            changed()
            return h

        if pause is not None:
            pause(think_delay(t.rng, cfg.think_delay))
        apply_action(h, ai_decide(h, seat, t.rng, cfg.strength_model, cfg.equity_iters))
        check_chip_integrity(h, t)
        changed()

    changed()
    return h


def submit_human_action(h: HandState, t: TableState, decision: Decision,
                        pause: Optional[Pause] = None,
                        on_change: Optional[Listener] = None) -> HandState:
    seat = h.acting_seat
    if not h.awaiting_human or seat is None or not seat.is_human:
        raise IllegalAction("no human decision is pending")
    apply_action(h, decision)
    check_chip_integrity(h, t)
    if on_change is not None:
        on_change(h)
    return advance_until_wait(h, t, pause=pause, on_change=on_change)


def play_hand(t: TableState, pause: Optional[Pause] = None,
              on_change: Optional[Listener] = None) -> HandState:
    """Start a hand and run it as far as it goes without a human."""
    h = start_hand(t)
    if on_change is not None:
        on_change(h)
    return advance_until_wait(h, t, pause=pause, on_change=on_change)
