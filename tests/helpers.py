from __future__ import annotations

from typing import Iterable, Tuple

from tictactoe.board import Board, Move
from tictactoe.players import Player


class ScriptedPlayer(Player):
    """Plays a fixed sequence of (row, column) pairs and remembers the boards it was shown."""

    def __init__(self, symbol: str, moves: Iterable[Tuple[int, int]]):
        self.symbol = symbol
        self._moves = list(moves)
        self.seen_boards: list[Board] = []

    def play(self, board: Board) -> Move:
        self.seen_boards.append(board)
        row, column = self._moves.pop(0)
        return Move(row, column)

    @property
    def remaining(self) -> int:
        return len(self._moves)


def fill(board: Board, layout: list[str]) -> Board:
    """Write marks from strings like 'XO-' row by row ('-' stays empty)."""
    for r, line in enumerate(layout):
        for c, ch in enumerate(line):
            if ch != "-":
                board.set_mark(r, c, ch)
    return board
