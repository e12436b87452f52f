"""Exceptions raised by the chess rules engine."""


class ChessRulesError(Exception):
    """Base class for all rules engine errors."""
    pass


class OutOfRangeError(ChessRulesError, IndexError):
    """A row or column outside the 8x8 board was used."""
    pass


class InvariantViolation(ChessRulesError):
    """The board is malformed (e.g. a side has no king)."""
    pass


class IllegalMoveError(ChessRulesError):
    """A move was committed that the validator rejects."""
    pass


class GameOverError(ChessRulesError):
    """A move was attempted after the game ended."""
    pass
