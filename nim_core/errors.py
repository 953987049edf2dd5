from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    WRONG_TURN = "wrong_turn"
    INVALID_MOVE = "invalid_move"
    INVALID_CONFIGURATION = "invalid_configuration"
    INVALID_INDEX = "invalid_index"


class NimError(Exception):
    """Base class for every error the engine reports to its caller.

    Errors are raised before any state is touched, so a caller can catch
    one, fix its input and retry on the same game.
    """
    kind: ErrorKind

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class WrongTurn(NimError):
    """A move was attempted by the player who is not on turn."""
    kind = ErrorKind.WRONG_TURN


class InvalidMove(NimError, ValueError):
    """Row out of range, or a count outside 1..sticks in that row."""
    kind = ErrorKind.INVALID_MOVE


class InvalidConfiguration(NimError, ValueError):
    """Malformed initial row list."""
    kind = ErrorKind.INVALID_CONFIGURATION


class InvalidIndex(NimError, IndexError):
    kind = ErrorKind.INVALID_INDEX
