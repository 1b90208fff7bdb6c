"""
Game state machine and builder.

- GameConfig: knobs for invalid-move retries, history export and console logging.
- Game: owns one Board and the ordered Player list; make_move() is the only
  operation that mutates board marks, status, turn index and winner.
  - IN_PROGRESS -> ENDED on a completed line, IN_PROGRESS -> DRAW on a full board.
  - Rejected moves (out of range, occupied, unparseable) leave state unchanged;
    the same player is asked again on the next make_move().
  - play() drives turns to a terminal status; export_history() returns a
    structured record of the game for inspection or tests.
- GameBuilder: fluent construction that fixes dimensions and play order.

"""
from __future__ import annotations

import json
import logging
import os
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Tuple

from .board import Board, Move
from .config import SETTINGS
from .errors import (
    GameOverError,
    IllegalMoveError,
    InvalidMoveError,
    OutOfRangeError,
    UnknownPlayerVariantError,
)
from .players import Bot, HumanPlayer, Player


class GameStatus(str, Enum):
    IN_PROGRESS = "IN_PROGRESS"
    DRAW = "DRAW"
    ENDED = "ENDED"

    def __str__(self) -> str:
        return self.value


@dataclass
class GameConfig:
    # A Bot rejected this many times in a row lets the last error propagate.
    # Human players are always re-prompted.
    max_invalid_attempts: int = SETTINGS.max_invalid_attempts
    # Optional path for the structured history JSON written when play() finishes
    history_path: str | None = None
    # Console logging of moves as they happen
    game_log: bool = False


class Game:
    def __init__(self, board: Board, players: List[Player], cfg: GameConfig | None = None):
        players = list(players)
        self._check_players(players)
        self.log = logging.getLogger("Game")
        self.board = board
        self.players = players
        self.cfg = cfg or GameConfig()
        self.status = GameStatus.IN_PROGRESS
        self.next_player_idx = 0
        self.winner: Optional[Player] = None
        self.records: list[dict] = []
        self.start_ts = time.time()

    @staticmethod
    def _check_players(players: List[Player]) -> None:
        if not players:
            raise ValueError("A game needs at least one player")
        for p in players:
            if not isinstance(p, Player):
                raise UnknownPlayerVariantError(f"Unknown player type: {type(p).__name__}")
        symbols = [str(p.symbol) for p in players]
        if len(set(symbols)) != len(symbols):
            raise ValueError(f"Players must have distinct symbols, got {symbols}")

    # ---------------- Accessors -----------------
    def get_next_player(self) -> Player:
        return self.players[self.next_player_idx]

    def is_over(self) -> bool:
        return self.status != GameStatus.IN_PROGRESS

    def ply_count(self) -> int:
        return sum(1 for r in self.records if r["ok"])

    # ---------------- Turn -----------------
    def make_move(self) -> Move:
        """Ask the current player for a move, apply it and update status.

        Raises GameOverError on a finished game, UnknownPlayerVariantError for a
        non-Player entry, and an InvalidMoveError subclass for a rejected move.
        Rejections leave board, status and turn index untouched.
        """
        if self.is_over():
            raise GameOverError(f"Game is already over (status={self.status.value})")
        player = self.get_next_player()
        if not isinstance(player, Player):
            raise UnknownPlayerVariantError(f"Unknown player type: {type(player).__name__}")

        try:
            move = player.play(self.board.copy())
            self._validate(move)
        except InvalidMoveError as e:
            self._record(player, getattr(e, "row", None), getattr(e, "column", None), ok=False, reason=str(e))
            self.log.warning("Rejected move from %s: %s", player.label, e)
            raise

        self.board.set_mark(move.row, move.column, player.symbol)
        self._record(player, move.row, move.column, ok=True)
        if self.cfg.game_log:
            self.log.info("[ply %d] %s -> %s", self.ply_count(), player.label, move)
        else:
            self.log.debug("Ply %d %s -> %s", self.ply_count(), player.label, move)

        if self.check_winner(player.symbol):
            self.status = GameStatus.ENDED
            self.winner = player
            self.log.info("%s wins after %d plies", player.label, self.ply_count())
            return move

        if self.check_draw():
            self.status = GameStatus.DRAW
            self.log.info("Game drawn after %d plies", self.ply_count())
            return move

        self.next_player_idx = (self.next_player_idx + 1) % len(self.players)
        return move

    def _validate(self, move: Move) -> None:
        if not self.board.in_bounds(move.row, move.column):
            raise OutOfRangeError(
                f"Cell {move} is outside the {self.board.rows}x{self.board.columns} board", move.row, move.column
            )
        if not self.board.is_empty(move.row, move.column):
            raise IllegalMoveError(f"Cell {move} is not empty", move.row, move.column)

    def _record(self, player: Player, row: int | None, column: int | None, ok: bool, reason: str | None = None) -> None:
        self.records.append({
            "player": player.label,
            "symbol": str(player.symbol),
            "row": row,
            "column": column,
            "ok": ok,
            "reason": reason,
        })

    # ---------------- Win / Draw -----------------
    def check_winner(self, symbol: str) -> bool:
        return self.check_rows(symbol) or self.check_columns(symbol) or self.check_diagonals(symbol)

    def check_rows(self, symbol: str) -> bool:
        return any(all(cell.symbol == symbol for cell in row) for row in self.board.cells)

    def check_columns(self, symbol: str) -> bool:
        cells = self.board.cells
        return any(
            all(cells[r][c].symbol == symbol for r in range(self.board.rows))
            for c in range(self.board.columns)
        )

    def check_diagonals(self, symbol: str) -> bool:
        # Diagonal lines only exist on square boards
        if not self.board.is_square:
            return False
        return any(all(self.board.cells[r][c].symbol == symbol for r, c in line) for line in self._diagonals())

    def check_draw(self) -> bool:
        return not self.board.available_cells()

    def _diagonals(self) -> List[List[Tuple[int, int]]]:
        n = self.board.rows
        return [[(i, i) for i in range(n)], [(i, n - 1 - i) for i in range(n)]]

    def _lines(self) -> List[List[Tuple[int, int]]]:
        rows, cols = self.board.rows, self.board.columns
        lines = [[(r, c) for c in range(cols)] for r in range(rows)]
        lines += [[(r, c) for r in range(rows)] for c in range(cols)]
        if self.board.is_square:
            lines += self._diagonals()
        return lines

    def winning_line(self) -> Optional[List[Tuple[int, int]]]:
        """Coordinates of the first completed line, or None."""
        for line in self._lines():
            first = self.board.cells[line[0][0]][line[0][1]].symbol
            if first is not None and all(self.board.cells[r][c].symbol == first for r, c in line):
                return line
        return None

    # ---------------- Driver -----------------
    def play(self, presenter: Callable[[Board], None] | None = None) -> GameStatus:
        """Run make_move() until the game ends.

        Rejected moves re-solicit the same player. Once a Bot has been rejected
        cfg.max_invalid_attempts times in a row, the last error propagates.
        """
        self.log.info("Game started: %dx%d, players=%s", self.board.rows, self.board.columns,
                      ", ".join(p.label for p in self.players))
        attempts = 0
        while not self.is_over():
            player = self.get_next_player()
            try:
                self.make_move()
            except InvalidMoveError as e:
                attempts += 1
                if isinstance(player, HumanPlayer):
                    player.notify(f"Invalid move: {e}. Try again.")
                    continue
                if attempts >= self.cfg.max_invalid_attempts:
                    self.log.error("%s exceeded %d invalid attempts", player.label, self.cfg.max_invalid_attempts)
                    raise
                continue
            attempts = 0
            if presenter is not None:
                presenter(self.board)
        self.log.info("Game finished status=%s winner=%s plies=%d", self.status.value,
                      self.winner.label if self.winner else None, self.ply_count())
        if self.cfg.history_path:
            self.dump_history_json(self.cfg.history_path)
        return self.status

    # ---------------- History export -----------------
    def export_history(self) -> dict:
        """Structured record of the game: dimensions, players, every attempt and the result."""
        line = self.winning_line() if self.status == GameStatus.ENDED else None
        return {
            "rows": self.board.rows,
            "columns": self.board.columns,
            "players": [
                {
                    "label": p.label,
                    "symbol": str(p.symbol),
                    "type": "human" if isinstance(p, HumanPlayer) else "bot" if isinstance(p, Bot) else "other",
                }
                for p in self.players
            ],
            "status": self.status.value,
            "winner": self.winner.label if self.winner else None,
            "winning_line": [list(pos) for pos in line] if line else None,
            "moves": [dict(r, attempt=i + 1) for i, r in enumerate(self.records)],
            "plies": self.ply_count(),
            "duration_s": round(time.time() - self.start_ts, 2),
            "final_board": [[cell.symbol and str(cell.symbol) for cell in row] for row in self.board.cells],
        }

    def dump_history_json(self, path: str) -> None:
        dir_path = os.path.dirname(path)
        if dir_path:
            os.makedirs(dir_path, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.export_history(), f, ensure_ascii=False, indent=2)
        self.log.info("Wrote game history to %s", path)


class GameBuilder:
    """Fluent builder; dimensions default to SETTINGS.board_size squared."""

    def __init__(self):
        self._rows = SETTINGS.board_size
        self._columns = SETTINGS.board_size
        self._players: List[Player] = []
        self._cfg: GameConfig | None = None

    def with_dimensions(self, rows: int, columns: int) -> "GameBuilder":
        self._rows = rows
        self._columns = columns
        return self

    def with_player(self, player: Player) -> "GameBuilder":
        self._players.append(player)
        return self

    def with_config(self, cfg: GameConfig) -> "GameBuilder":
        self._cfg = cfg
        return self

    def build(self) -> Game:
        # Game.__init__ validates the player list
        board = Board(self._rows, self._columns)
        return Game(board=board, players=self._players, cfg=self._cfg)
