"""Errors raised by the Coup engine.

Every error is a caller mistake or a rule violation. The engine raises them
at the point of violation and never recovers from them internally.
"""


class CoupError(Exception):
    """Base class for all engine errors."""


class IllegalAction(CoupError, ValueError):
    """The operation violates a game rule."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Illegal action: {message}")


class OutOfCoins(CoupError):
    """The actor cannot afford the action or veto."""

    def __init__(self, message: str = "Not enough coins") -> None:
        super().__init__(f"Out of coins: {message}")


class NotYourTurn(CoupError):
    """The acting player is not the current player."""

    def __init__(self, message: str = "Not your turn") -> None:
        super().__init__(f"Not your turn: {message}")


class GameStillActive(CoupError):
    """The winner was requested while more than one player remains."""

    def __init__(self, message: str = "Game is still active") -> None:
        super().__init__(f"Game still active: {message}")
