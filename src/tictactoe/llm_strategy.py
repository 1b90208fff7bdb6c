"""
LLM-backed playing strategy.

- PromptConfig: system instructions plus a template with {BOARD}, {AVAILABLE},
  {SYMBOL}, {ROWS}, {COLUMNS} placeholders substituted per turn.
- LLMPlayingStrategy: renders the board, asks the model, parses "row column"
  out of the reply. An unreadable reply raises MoveParseError, which Game.play
  treats like any other rejected move and re-asks.

"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict, List

from .board import Board, Move
from .llm_client import ask_for_move
from .move_parser import parse_move_text
from .render import render_board
from .strategies import PlayingStrategy

DEFAULT_SYSTEM = (
    "You are a tic-tac-toe player. When asked for a move, answer with the row and column "
    "of one empty cell, zero-based, as two integers separated by a space. Return only the move."
)
DEFAULT_TEMPLATE = """Board ({ROWS}x{COLUMNS}, '-' is empty):
{BOARD}
You play {SYMBOL}. A line is a full row, column or diagonal of one symbol.
Empty cells (row column): {AVAILABLE}
Reply with only your move as: row column"""


@dataclass
class PromptConfig:
    """Configuration for shaping move prompts using a custom template."""

    system_instructions: str = DEFAULT_SYSTEM
    template: str = DEFAULT_TEMPLATE


def render_custom_prompt(template: str, values: Dict[str, str]) -> str:
    """Replace known placeholders in the template. Unknown tokens are left intact."""
    rendered = template or ""
    for key, val in values.items():
        rendered = rendered.replace(f"{{{key}}}", val)
    return rendered


def build_prompt_messages_for_board(board: Board, symbol: str | None, prompt_cfg: PromptConfig) -> List[Dict[str, str]]:
    values = {
        "BOARD": render_board(board),
        "AVAILABLE": ", ".join(f"{c.row} {c.column}" for c in board.available_cells()),
        "SYMBOL": str(symbol) if symbol else "the side to move",
        "ROWS": str(board.rows),
        "COLUMNS": str(board.columns),
    }
    return [
        {"role": "system", "content": prompt_cfg.system_instructions},
        {"role": "user", "content": render_custom_prompt(prompt_cfg.template, values)},
    ]


class LLMPlayingStrategy(PlayingStrategy):
    name = "llm"

    def __init__(self, model: str, symbol: str | None = None, prompt_cfg: PromptConfig | None = None,
                 ask_fn: Callable[..., str] | None = None):
        if not model:
            raise ValueError("LLMPlayingStrategy requires a model name")
        self.model = model
        self.symbol = symbol
        self.prompt_cfg = prompt_cfg or PromptConfig()
        self.ask_fn = ask_fn or ask_for_move
        self.log = logging.getLogger("LLMPlayingStrategy")
        self.last_raw: str | None = None
        self.last_latency_ms: int | None = None

    def play(self, board: Board) -> Move:
        self._require_available(board)
        messages = build_prompt_messages_for_board(board, self.symbol, self.prompt_cfg)
        t0 = time.time()
        raw = self.ask_fn(messages, model=self.model)
        self.last_latency_ms = int((time.time() - t0) * 1000)
        self.last_raw = raw
        self.log.debug("model=%s latency_ms=%d raw=%r", self.model, self.last_latency_ms, raw)
        return parse_move_text(raw)
