"""Text presenter for boards. Reads the board only."""
from __future__ import annotations

from typing import Iterable, Tuple

from .board import Board

EMPTY_MARK = "-"


def render_board(board: Board, highlight: Iterable[Tuple[int, int]] | None = None) -> str:
    """Render rows as '| X | - | O |', with a column index header.

    Cells listed in highlight (e.g. a winning line) are wrapped in brackets.
    """
    marked = set(highlight or ())
    width = max([len(EMPTY_MARK)] + [len(str(c.symbol)) for c in board.occupied_cells()])
    header = "    " + " ".join(f" {c:^{width}} " for c in range(board.columns))
    lines = [header]
    for r, row in enumerate(board.cells):
        parts = []
        for cell in row:
            mark = str(cell.symbol) if cell.symbol is not None else EMPTY_MARK
            mark = f"{mark:^{width}}"
            parts.append(f"[{mark}]" if (cell.row, cell.column) in marked else f" {mark} ")
        lines.append(f"{r:>2} |" + "|".join(parts) + "|")
    return "\n".join(lines)


def print_board(board: Board) -> None:
    print(render_board(board))
