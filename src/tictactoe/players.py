"""
Players and the user identities that tag human players.

- Player: interface, play(board) -> Move. The Game only dispatches through it.
- HumanPlayer: reads "row column" from an input channel and answers on an output
  channel; repeats until parseable.
- Bot: delegates to an injected PlayingStrategy.
- PlayerBuilder/UserBuilder: fluent construction helpers.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from .board import Board, Move
from .errors import MoveParseError
from .move_parser import parse_move_text
from .strategies import PlayingStrategy


@dataclass(frozen=True)
class User:
    username: str
    email: str = ""
    photo: bytes = b""


class UserBuilder:
    def __init__(self):
        self._username: str | None = None
        self._email = ""
        self._photo = b""

    def with_username(self, username: str) -> "UserBuilder":
        self._username = username
        return self

    def with_email(self, email: str) -> "UserBuilder":
        self._email = email
        return self

    def with_photo(self, photo: bytes) -> "UserBuilder":
        self._photo = photo
        return self

    def build(self) -> User:
        if not self._username:
            raise ValueError("User requires a username")
        return User(username=self._username, email=self._email, photo=self._photo)


class Player:
    """Interface for anything that can take a turn."""

    symbol: str

    def play(self, board: Board) -> Move:
        raise NotImplementedError

    @property
    def label(self) -> str:
        return str(self.symbol)


class HumanPlayer(Player):
    """Interactive player; blocks on input_fn until a row/column pair is entered."""

    PROMPT = "Enter the row and column: "

    def __init__(self, symbol: str, user: Optional[User] = None, input_fn: Callable[[str], str] = input,
                 output_fn: Callable[[str], None] = print):
        self.symbol = symbol
        self.user = user
        self.input_fn = input_fn
        self.output_fn = output_fn

    @property
    def label(self) -> str:
        if self.user:
            return f"{self.user.username} ({self.symbol})"
        return f"Human ({self.symbol})"

    def play(self, board: Board) -> Move:
        while True:
            raw = self.input_fn(self.PROMPT)
            try:
                return parse_move_text(raw)
            except MoveParseError:
                self.notify("Please enter two numbers: the row and the column (e.g. 0 2).")

    def notify(self, message: str) -> None:
        """Show a message to the person at the console."""
        self.output_fn(message)


class Bot(Player):
    def __init__(self, symbol: str, playing_strategy: PlayingStrategy):
        self.symbol = symbol
        self.playing_strategy = playing_strategy

    @property
    def label(self) -> str:
        return f"Bot ({self.symbol}, {self.playing_strategy.name})"

    def play(self, board: Board) -> Move:
        return self.playing_strategy.play(board)


class PlayerBuilder:
    """Fluent builder: a user makes a HumanPlayer, a strategy makes a Bot."""

    def __init__(self):
        self._symbol: str | None = None
        self._user: User | None = None
        self._strategy: PlayingStrategy | None = None
        self._input_fn: Callable[[str], str] = input
        self._output_fn: Callable[[str], None] = print

    def with_symbol(self, symbol: str) -> "PlayerBuilder":
        self._symbol = symbol
        return self

    def with_user(self, user: User) -> "PlayerBuilder":
        self._user = user
        self._strategy = None
        return self

    def with_input(self, input_fn: Callable[[str], str]) -> "PlayerBuilder":
        self._input_fn = input_fn
        return self

    def with_output(self, output_fn: Callable[[str], None]) -> "PlayerBuilder":
        self._output_fn = output_fn
        return self

    def with_playing_strategy(self, strategy: PlayingStrategy) -> "PlayerBuilder":
        self._strategy = strategy
        self._user = None
        return self

    def build(self) -> Player:
        if not self._symbol:
            raise ValueError("Player requires a symbol")
        if self._strategy is not None:
            return Bot(symbol=self._symbol, playing_strategy=self._strategy)
        if self._user is not None:
            return HumanPlayer(symbol=self._symbol, user=self._user, input_fn=self._input_fn,
                               output_fn=self._output_fn)
        raise ValueError("Player requires either a user (human) or a playing strategy (bot)")
