class HoldemError(Exception):
    """Base class for engine errors."""


class DeckExhausted(HoldemError):
    def __init__(self, wanted: int, left: int):
        super().__init__(f"deck exhausted: wanted {wanted} card(s), {left} left")
        self.wanted = wanted
        self.left = left


class InsufficientCards(HoldemError):
    def __init__(self, count: int):
        super().__init__(f"need at least 5 cards to evaluate a hand, got {count}")
        self.count = count


class IllegalAction(HoldemError):
    pass


class ChipIntegrityError(HoldemError):
    def __init__(self, expected: int, actual: int):
        super().__init__(f"chip supply drifted: expected {expected}, found {actual}")
        self.expected = expected
        self.actual = actual


class ConfigError(HoldemError):
    pass
