"""
RUN_MANY.py — Bot-vs-bot batch runner
- Plays N games between two strategies (random, cluster, or llm) and tallies X wins, O wins and draws.
- Optionally alternates which strategy moves first and writes per-game summaries as JSONL.
- Per-game history JSON can be written under --out-dir.
Usage: python -u scripts/run_many.py --games 200 --x random --o cluster
Env knobs: TICTACTOE_RANDOM_SEED, TICTACTOE_BOARD_SIZE, TICTACTOE_MAX_INVALID_ATTEMPTS, etc.
"""
import argparse, json, logging, os, statistics, time
from typing import Dict, List

from tictactoe.board import GameSymbol
from tictactoe.config import SETTINGS
from tictactoe.game import GameBuilder, GameConfig, GameStatus
from tictactoe.llm_strategy import LLMPlayingStrategy
from tictactoe.players import Bot
from tictactoe.strategies import available_strategies, create_strategy


def _parse_log_level(name: str | None) -> int:
    name = (name or "INFO").upper()
    return getattr(logging, name, logging.INFO)


def make_bot(kind: str, symbol: str, model: str | None) -> Bot:
    if kind == "llm":
        return Bot(symbol, LLMPlayingStrategy(model=model, symbol=symbol))
    return Bot(symbol, create_strategy(kind))


def run_games(games: int, x_kind: str, o_kind: str, rows: int, columns: int, model: str | None = None,
              swap: bool = False, out_dir: str | None = None, max_invalid: int | None = None) -> List[Dict]:
    """Play games sequentially and return one summary dict per game."""
    log = logging.getLogger("run_many")
    summaries: List[Dict] = []
    for i in range(games):
        first, second = (o_kind, x_kind) if (swap and i % 2 == 1) else (x_kind, o_kind)
        history_path = os.path.join(out_dir, f"game_{i + 1:04d}.json") if out_dir else None
        cfg = GameConfig(history_path=history_path)
        if max_invalid is not None:
            cfg.max_invalid_attempts = max_invalid
        game = (
            GameBuilder()
            .with_dimensions(rows, columns)
            .with_player(make_bot(first, GameSymbol.X, model))
            .with_player(make_bot(second, GameSymbol.O, model))
            .with_config(cfg)
            .build()
        )
        status = game.play()
        winner_symbol = str(game.winner.symbol) if game.winner else None
        winner_kind = None
        if winner_symbol == GameSymbol.X:
            winner_kind = first
        elif winner_symbol == GameSymbol.O:
            winner_kind = second
        summaries.append({
            "game": i + 1,
            "x": first,
            "o": second,
            "status": status.value,
            "winner_symbol": winner_symbol,
            "winner_strategy": winner_kind,
            "plies": game.ply_count(),
            "rejected_moves": sum(1 for r in game.records if not r["ok"]),
        })
        log.debug("Game %d: %s", i + 1, summaries[-1])
    return summaries


def main():
    kinds = ["llm"] + available_strategies()
    ap = argparse.ArgumentParser(description="Run many bot-vs-bot games and print a tally.")
    ap.add_argument("--games", type=int, default=100)
    ap.add_argument("--x", dest="x_kind", choices=kinds, default="random", help="Strategy playing X")
    ap.add_argument("--o", dest="o_kind", choices=kinds, default="random", help="Strategy playing O")
    ap.add_argument("--rows", type=int, default=SETTINGS.board_size)
    ap.add_argument("--columns", type=int, default=None)
    ap.add_argument("--model", default=None, help="Model name when a side is 'llm'")
    ap.add_argument("--swap", action="store_true", help="Alternate which strategy moves first")
    ap.add_argument("--max-invalid", type=int, default=None)
    ap.add_argument("--out-jsonl", default=None, help="Path to write per-game summaries as JSONL")
    ap.add_argument("--out-dir", default=None, help="Directory for per-game history JSON files")
    ap.add_argument("--log-level", default=None, help="Python logging level")
    args = ap.parse_args()

    logging.basicConfig(level=_parse_log_level(args.log_level or "WARNING"),
                        format='%(asctime)s %(levelname)s %(name)s: %(message)s')
    if "llm" in (args.x_kind, args.o_kind) and not args.model:
        ap.error("--model is required when a side is 'llm'")

    t0 = time.time()
    summaries = run_games(
        games=args.games,
        x_kind=args.x_kind,
        o_kind=args.o_kind,
        rows=args.rows,
        columns=args.columns or args.rows,
        model=args.model,
        swap=args.swap,
        out_dir=args.out_dir,
        max_invalid=args.max_invalid,
    )

    if args.out_jsonl:
        dir_path = os.path.dirname(args.out_jsonl)
        if dir_path:
            os.makedirs(dir_path, exist_ok=True)
        with open(args.out_jsonl, 'w', encoding='utf-8') as f:
            for s in summaries:
                f.write(json.dumps(s) + '\n')

    x_wins = sum(1 for s in summaries if s["winner_symbol"] == GameSymbol.X)
    o_wins = sum(1 for s in summaries if s["winner_symbol"] == GameSymbol.O)
    draws = sum(1 for s in summaries if s["status"] == GameStatus.DRAW.value)
    by_strategy: Dict[str, int] = {}
    for s in summaries:
        if s["winner_strategy"]:
            by_strategy[s["winner_strategy"]] = by_strategy.get(s["winner_strategy"], 0) + 1
    avg_plies = statistics.mean([s["plies"] for s in summaries]) if summaries else 0

    print('\nSummary:')
    print(f"Games: {len(summaries)}  X={x_wins} O={o_wins} D={draws}")
    print(f"Wins by strategy: {by_strategy or '-'}")
    print(f"Avg plies: {avg_plies:.1f}")
    print(f"Wall time: {time.time()-t0:.1f}s")


if __name__ == '__main__':
    main()
