from .actions import Action, Decision
from .cards import Card, deal, new_deck, shuffle
from .config import TableConfig
from .engine import (
    advance_until_wait,
    apply_action,
    new_table,
    play_hand,
    start_hand,
    submit_human_action,
)
from .evaluator import HandRank, HandResult, compare_hands, determine_winners, evaluate_hand
from .models import HandState, Seat, SidePot, Street, TableState, snapshot
from .pots import compute_side_pots

__version__ = "0.1.0"
