"""
Error taxonomy for the game core.

- InvalidMoveError and its subclasses are recoverable: the move is rejected and
  the same player is asked again.
- GameOverError, UnknownPlayerVariantError and EmptyStrategyDomainError signal
  caller-contract violations.
"""
from __future__ import annotations


class TicTacToeError(Exception):
    """Base class for every error raised by the tictactoe package."""


class InvalidMoveError(TicTacToeError):
    """A proposed move cannot be applied. The same player should be re-prompted."""

    def __init__(self, message: str, row: int | None = None, column: int | None = None):
        super().__init__(message)
        self.row = row
        self.column = column


class IllegalMoveError(InvalidMoveError):
    """Target cell is already occupied."""


class OutOfRangeError(InvalidMoveError):
    """Coordinates fall outside the board."""


class MoveParseError(InvalidMoveError):
    """Text (console input or LLM reply) did not contain a row/column pair."""

    def __init__(self, message: str, raw: str | None = None):
        super().__init__(message)
        self.raw = raw


class GameOverError(TicTacToeError):
    """make_move() was called after the game reached a terminal status."""


class UnknownPlayerVariantError(TicTacToeError):
    """Object registered as a player does not implement the Player interface."""


class EmptyStrategyDomainError(TicTacToeError):
    """A strategy was asked to move on a board with no available cells."""
