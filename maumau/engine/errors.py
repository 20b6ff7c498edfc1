"""Engine exceptions.

Every error carries a short machine-readable ``code`` next to its message so
a hosting application can map failures without parsing text.
"""

from typing import Sequence


class MauMauError(Exception):
    """Base exception for rule-engine errors."""

    code = "MAUMAU_ERROR"

    def __init__(self, message: str):
        self.message = message
        super().__init__(f"[{self.code}] {message}")


class InvalidMoveError(MauMauError):
    """A play that is not allowed: card not in hand or not matching."""

    code = "INVALID_MOVE"


class NotYourTurnError(InvalidMoveError):
    code = "NOT_YOUR_TURN"


class GameNotInProgressError(MauMauError):
    code = "GAME_NOT_IN_PROGRESS"


class RoundInProgressError(MauMauError):
    code = "ROUND_IN_PROGRESS"


class MatchEndedError(MauMauError):
    """Fewer than two players are left to start another round.

    ``standings`` holds every player of the finished round, best score first.
    """

    code = "MATCH_ENDED"

    def __init__(self, message: str, standings: Sequence = ()):
        self.standings = tuple(standings)
        super().__init__(message)
