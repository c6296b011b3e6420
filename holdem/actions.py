from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Action(str, Enum):
    FOLD = "fold"
    CHECK = "check"
    CALL = "call"
    RAISE = "raise"
    ALL_IN = "all-in"


@dataclass(frozen=True)
class Decision:
    action: Action
    amount: int = 0  # RAISE only: the seat's total bet for the round

    def __str__(self) -> str:
        if self.action is Action.RAISE:
            return f"raise to {self.amount}"
        return self.action.value


FOLD = Decision(Action.FOLD)
CHECK = Decision(Action.CHECK)
CALL = Decision(Action.CALL)
ALL_IN = Decision(Action.ALL_IN)


def raise_to(amount: int) -> Decision:
    return Decision(Action.RAISE, int(amount))
