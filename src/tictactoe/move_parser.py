"""
Move parsing helpers for console input and LLM replies.

Accepts any text whose first two integers are the row and column, e.g.
"1 2", "1,2", "(1, 2)", "row 1 col 2" or a reply wrapped in ``` fences.
Bounds and occupancy are not checked here; the Game does that so the caller
gets an OutOfRangeError/IllegalMoveError instead of a parse failure.
"""
from __future__ import annotations

import re
from typing import TypedDict

from .board import Move
from .errors import MoveParseError

INT_RE = re.compile(r"-?\d+")


class ParsedMove(TypedDict, total=False):
    ok: bool
    row: int
    column: int
    reason: str


def _strip_code_fence(text: str) -> str:
    """Remove simple ``` fences if present."""
    text = text.strip()
    if text.startswith("```") and text.endswith("```"):
        inner = text.split("\n", 1)
        if len(inner) == 2:
            return inner[1].rsplit("\n", 1)[0].strip()
    return text


def parse_coordinates(raw_text: str | None) -> ParsedMove:
    """Return ParsedMove with ok/row/column or a reason on failure."""
    if raw_text is None:
        return {"ok": False, "reason": "empty_reply"}
    text = _strip_code_fence(raw_text)
    if not text:
        return {"ok": False, "reason": "empty_reply"}
    numbers = INT_RE.findall(text)
    if len(numbers) < 2:
        return {"ok": False, "reason": "missing_coordinates"}
    return {"ok": True, "row": int(numbers[0]), "column": int(numbers[1])}


def parse_move_text(raw_text: str | None) -> Move:
    """Parse text into a Move or raise MoveParseError."""
    parsed = parse_coordinates(raw_text)
    if not parsed.get("ok"):
        raise MoveParseError(f"Could not read a row and column from {raw_text!r} ({parsed['reason']})", raw=raw_text)
    return Move(row=parsed["row"], column=parsed["column"])


__all__ = [
    "parse_coordinates",
    "parse_move_text",
    "ParsedMove",
]
