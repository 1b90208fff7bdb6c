"""
Board model: a fixed grid of cells, each holding an optional symbol.

- Cell/Move are frozen values; set_mark() replaces the cell in the grid so
  nothing handed out by the board aliases its state.
- available_cells() is row-major and drives both draw detection and the
  candidate set for strategies.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional

from .errors import IllegalMoveError, OutOfRangeError


class GameSymbol(str, Enum):
    X = "X"
    O = "O"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Cell:
    row: int
    column: int
    symbol: Optional[str] = None

    def is_empty(self) -> bool:
        return self.symbol is None


@dataclass(frozen=True)
class Move:
    """Target cell chosen by a player for one turn."""

    row: int
    column: int

    def __str__(self) -> str:
        return f"({self.row}, {self.column})"


class Board:
    def __init__(self, rows: int, columns: int):
        if rows <= 0 or columns <= 0:
            raise ValueError(f"Board dimensions must be positive, got {rows}x{columns}")
        self.rows = rows
        self.columns = columns
        self.cells: List[List[Cell]] = [
            [Cell(row=r, column=c) for c in range(columns)] for r in range(rows)
        ]

    @property
    def is_square(self) -> bool:
        return self.rows == self.columns

    # ---------------- Queries -----------------
    def in_bounds(self, row: int, column: int) -> bool:
        return 0 <= row < self.rows and 0 <= column < self.columns

    def cell(self, row: int, column: int) -> Cell:
        if not self.in_bounds(row, column):
            raise OutOfRangeError(
                f"Cell ({row}, {column}) is outside the {self.rows}x{self.columns} board", row, column
            )
        return self.cells[row][column]

    def symbol_at(self, row: int, column: int) -> Optional[str]:
        return self.cell(row, column).symbol

    def is_empty(self, row: int, column: int) -> bool:
        return self.cell(row, column).is_empty()

    def iter_cells(self) -> Iterator[Cell]:
        for row in self.cells:
            yield from row

    def available_cells(self) -> List[Cell]:
        """Empty cells, top-to-bottom then left-to-right."""
        return [cell for cell in self.iter_cells() if cell.is_empty()]

    def occupied_cells(self, symbol: Optional[str] = None) -> List[Cell]:
        if symbol is None:
            return [cell for cell in self.iter_cells() if not cell.is_empty()]
        return [cell for cell in self.iter_cells() if cell.symbol == symbol]

    def is_full(self) -> bool:
        return not self.available_cells()

    # ---------------- Mutation -----------------
    def set_mark(self, row: int, column: int, symbol: str) -> None:
        if not symbol:
            raise ValueError("Symbol must be a non-empty string")
        if not self.is_empty(row, column):
            raise IllegalMoveError(
                f"Cell ({row}, {column}) is already occupied by {self.cells[row][column].symbol}", row, column
            )
        self.cells[row][column] = Cell(row=row, column=column, symbol=symbol)

    def copy(self) -> "Board":
        new_board = Board(self.rows, self.columns)
        # Cells are immutable, so sharing them between grids is safe
        new_board.cells = [list(row) for row in self.cells]
        return new_board

    def __str__(self) -> str:
        return "\n".join(
            " ".join(cell.symbol or "-" for cell in row) for row in self.cells
        )
