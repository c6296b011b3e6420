from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .ai import get_personality
from .errors import ConfigError

MAX_SEATS = 8
STRENGTH_MODELS = ("heuristic", "equity")


@dataclass
class TableConfig:
    seats: int = 8
    starting_chips: int = 1000
    small_blind: int = 10
    big_blind: int = 20
    human_seat: Optional[int] = 0   # None for an all-AI table
    human_name: str = "You"
    think_delay: Tuple[float, float] = (0.5, 2.0)  # seconds, AI pacing only
    seed: Optional[int] = None
    strength_model: str = "heuristic"
    equity_iters: int = 200
    ai_personality: Optional[str] = None  # every AI seat plays this type; None draws at random

    def validate(self) -> "TableConfig":
        if not 2 <= self.seats <= MAX_SEATS:
            raise ConfigError(f"seats must be between 2 and {MAX_SEATS}, got {self.seats}")
        if self.starting_chips <= 0:
            raise ConfigError("starting_chips must be positive")
        if self.small_blind <= 0 or self.big_blind < self.small_blind:
            raise ConfigError(f"bad blinds {self.small_blind}/{self.big_blind}")
        if self.human_seat is not None and not 0 <= self.human_seat < self.seats:
            raise ConfigError(f"human_seat {self.human_seat} is not a seat index")
        lo, hi = self.think_delay
        if lo < 0 or hi < lo:
            raise ConfigError(f"bad think_delay {self.think_delay}")
        if self.strength_model not in STRENGTH_MODELS:
            raise ConfigError(f"strength_model must be one of {', '.join(STRENGTH_MODELS)}")
        if self.equity_iters <= 0:
            raise ConfigError("equity_iters must be positive")
        if self.ai_personality is not None and get_personality(self.ai_personality) is None:
            raise ConfigError(f"unknown AI personality {self.ai_personality!r}")
        return self
