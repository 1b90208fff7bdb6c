"""
Playing strategies used by Bot players.

- PlayingStrategy: interface, play(board) -> Move, pure over the board.
- RandomPlayingStrategy: uniformly random empty cell.
- ClusterPlayingStrategy: random empty cell touching an occupied one.
- create_strategy(name): registry lookup used by the CLIs.

All strategies draw from one process-lifetime random.Random unless a
generator is injected; nothing reseeds per move.
"""
from __future__ import annotations

import random
from typing import Dict, List, Type

from .board import Board, Cell, Move
from .config import SETTINGS
from .errors import EmptyStrategyDomainError

_DEFAULT_RNG = random.Random(SETTINGS.random_seed)


def default_rng() -> random.Random:
    return _DEFAULT_RNG


class PlayingStrategy:
    """Interface for move selection by automated players."""

    name: str = "base"

    def play(self, board: Board) -> Move:
        raise NotImplementedError

    @staticmethod
    def _require_available(board: Board) -> List[Cell]:
        available = board.available_cells()
        if not available:
            raise EmptyStrategyDomainError("No available cells to choose from")
        return available


class RandomPlayingStrategy(PlayingStrategy):
    """Picks a uniformly random empty cell.
    Useful as a fast baseline and for bulk bot-vs-bot runs.
    """

    name = "random"

    def __init__(self, rng: random.Random | None = None):
        self.rng = rng or default_rng()

    def play(self, board: Board) -> Move:
        cell = self.rng.choice(self._require_available(board))
        return Move(row=cell.row, column=cell.column)


class ClusterPlayingStrategy(PlayingStrategy):
    """Plays next to existing marks.

    Candidates are empty cells with at least one occupied neighbour (including
    diagonals). On an empty board, or when nothing qualifies, any empty cell is
    a candidate.
    """

    name = "cluster"

    def __init__(self, rng: random.Random | None = None):
        self.rng = rng or default_rng()

    @staticmethod
    def _touches_mark(board: Board, cell: Cell) -> bool:
        for dr in (-1, 0, 1):
            for dc in (-1, 0, 1):
                if dr == 0 and dc == 0:
                    continue
                r, c = cell.row + dr, cell.column + dc
                if board.in_bounds(r, c) and not board.is_empty(r, c):
                    return True
        return False

    def candidates(self, board: Board) -> List[Cell]:
        available = self._require_available(board)
        clustered = [cell for cell in available if self._touches_mark(board, cell)]
        return clustered or available

    def play(self, board: Board) -> Move:
        cell = self.rng.choice(self.candidates(board))
        return Move(row=cell.row, column=cell.column)


_STRATEGIES: Dict[str, Type[PlayingStrategy]] = {
    RandomPlayingStrategy.name: RandomPlayingStrategy,
    "default": RandomPlayingStrategy,
    ClusterPlayingStrategy.name: ClusterPlayingStrategy,
}


def available_strategies() -> List[str]:
    return sorted(_STRATEGIES)


def create_strategy(name: str | None, rng: random.Random | None = None) -> PlayingStrategy:
    key = (name or "random").lower()
    cls = _STRATEGIES.get(key)
    if cls is None:
        raise ValueError(f"Unknown strategy '{name}'. Choose one of: {', '.join(available_strategies())}")
    return cls(rng=rng)
