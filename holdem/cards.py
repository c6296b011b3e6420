from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterable, List, Optional

from treys import Card as TreysCard

from .errors import DeckExhausted

RANKS = "23456789TJQKA"
SUITS = "shdc"

SUIT_SYMBOL = {"s": "♠", "h": "♥", "d": "♦", "c": "♣"}
SUIT_NAME = {"s": "Spades", "h": "Hearts", "d": "Diamonds", "c": "Clubs"}
RANK_NAME = {
    "2": "2", "3": "3", "4": "4", "5": "5", "6": "6", "7": "7", "8": "8", "9": "9",
    "T": "10", "J": "Jack", "Q": "Queen", "K": "King", "A": "Ace"
}


@dataclass(frozen=True)
class Card:
    rank: str
    suit: str

    def __post_init__(self):
        if self.rank not in RANKS or self.suit not in SUITS:
            raise ValueError(f"bad card {self.rank!r}{self.suit!r}")

    @property
    def value(self) -> int:
        """0 for a deuce up to 12 for an ace."""
        return RANKS.index(self.rank)

    @property
    def is_red(self) -> bool:
        return self.suit in ("h", "d")

    @property
    def face(self) -> str:
        return f"{self.rank}{SUIT_SYMBOL[self.suit]}"

    @property
    def label(self) -> str:
        return f"{RANK_NAME[self.rank]} of {SUIT_NAME[self.suit]}"

    @classmethod
    def parse(cls, text: str) -> "Card":
        s = text.strip()
        if s[:2] == "10":
            s = "T" + s[2:]
        if len(s) != 2:
            raise ValueError(f"bad card {text!r}")
        return cls(s[0].upper(), s[1].lower())

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"


def parse_cards(text: str) -> List[Card]:
    return [Card.parse(tok) for tok in text.split()]


def cards_short(cards: Iterable[Card]) -> str:
    """Compact card strings for logs, like 'Ah Kd 7s'."""
    return " ".join(str(c) for c in cards)


def to_treys(card: Card) -> int:
    return TreysCard.new(str(card))


def shuffle(deck: List[Card], rng: random.Random) -> List[Card]:
    for i in range(len(deck) - 1, 0, -1):
        j = rng.randint(0, i)
        deck[i], deck[j] = deck[j], deck[i]
    return deck


def new_deck(rng: Optional[random.Random] = None) -> List[Card]:
    deck = [Card(r, s) for s in SUITS for r in RANKS]
    return shuffle(deck, rng or random.Random())


def deal(deck: List[Card], n: int) -> List[Card]:
    if len(deck) < n:
        raise DeckExhausted(n, len(deck))
    return [deck.pop() for _ in range(n)]


def burn(deck: List[Card]) -> Card:
    return deal(deck, 1)[0]
