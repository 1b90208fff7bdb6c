"""
Tic-tac-toe engine package.

Components:
- board: grid of cells, Move and GameSymbol values
- players/strategies: human and bot players, pluggable move-selection strategies
- game: turn sequencing, validation, win/draw detection (Game, GameBuilder)
- move_parser/render: text in (console, LLM replies) and text out (board presenter)
- llm_client/llm_strategy: optional OpenAI-compatible bot strategy
"""
# Package exports are intentionally minimal; import modules directly as needed.
