import argparse
import json
import logging
from typing import List, Optional, Tuple

from tictactoe.board import GameSymbol
from tictactoe.config import SETTINGS
from tictactoe.game import Game, GameBuilder, GameConfig, GameStatus
from tictactoe.llm_strategy import LLMPlayingStrategy
from tictactoe.players import PlayerBuilder, UserBuilder
from tictactoe.render import print_board, render_board
from tictactoe.strategies import available_strategies, create_strategy

OPPONENT_KINDS = ["llm"] + available_strategies()
PLAYER_KINDS = ["human"] + OPPONENT_KINDS


def load_json_config(path: str) -> dict:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logging.getLogger("play_one").error("Failed to read config %s: %s", path, e)
        return {}


def build_player(kind: str, symbol: str, username: str | None, model: str | None):
    pb = PlayerBuilder().with_symbol(symbol)
    if kind == "human":
        user = UserBuilder().with_username(username or f"player-{symbol}").build()
        return pb.with_user(user).build()
    if kind == "llm":
        if not model:
            raise ValueError("An llm player requires --model (or 'model' in the JSON config).")
        return pb.with_playing_strategy(LLMPlayingStrategy(model=model, symbol=symbol)).build()
    return pb.with_playing_strategy(create_strategy(kind)).build()


def build_arg_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Play one game of tic-tac-toe on the console.")
    ap.add_argument("--config", default=None, help="Optional JSON config file to load defaults from.")
    ap.add_argument("--rows", type=int, default=None, help="Board rows (default: TICTACTOE_BOARD_SIZE)")
    ap.add_argument("--columns", type=int, default=None, help="Board columns (default: same as rows)")
    side = ap.add_mutually_exclusive_group()
    side.add_argument("--human", action="store_true", help="X is played from the console (default)")
    side.add_argument("--bots", action="store_true", help="X is a bot too (strategy from --x, else random)")
    ap.add_argument("--opponent", dest="o_player", choices=OPPONENT_KINDS, default=None, help="Who plays O")
    ap.add_argument("--x", dest="x_player", choices=PLAYER_KINDS, default=None, help="Who plays X (moves first)")
    ap.add_argument("--o", dest="o_player", choices=PLAYER_KINDS, default=None, help="Alias of --opponent that also accepts 'human'")
    ap.add_argument("--username", default=None, help="Username attached to human players")
    ap.add_argument("--model", default=None, help="Model name for llm players")
    ap.add_argument("--max-invalid", type=int, default=None, help="Rejected bot moves tolerated in a row before aborting")
    ap.add_argument("--history-out", default=None, help="Optional path to write the structured game history JSON")
    ap.add_argument("--game-log", action="store_true", help="Log every move at INFO level")
    ap.add_argument("--log-level", default=None, help="Python logging level (e.g., INFO, DEBUG)")
    return ap


def pick(args: argparse.Namespace, cfg_dict: dict, *keys, default=None):
    """CLI arg if provided -> config -> default."""
    for k in keys:
        v = getattr(args, k, None)
        if v is not None:
            return v
        if k in cfg_dict and cfg_dict[k] is not None:
            return cfg_dict[k]
    return default


def resolve_player_kinds(args: argparse.Namespace, cfg_dict: dict) -> Tuple[str, str]:
    """Map --human/--bots/--x and --opponent/--o onto the (X, O) player kinds."""
    o_kind = pick(args, cfg_dict, "o_player", "opponent", "o", default="random")
    if args.human:
        return "human", o_kind
    x_kind = pick(args, cfg_dict, "x_player", "x", default=None)
    if args.bots or cfg_dict.get("bots"):
        if x_kind in (None, "human"):
            x_kind = "random"
        return x_kind, o_kind
    return x_kind or "human", o_kind


def main(argv: Optional[List[str]] = None) -> Game:
    ap = build_arg_parser()
    args = ap.parse_args(argv)

    # Load config defaults
    cfg_dict = load_json_config(args.config) if args.config else {}

    # Logging setup
    log_level = str(pick(args, cfg_dict, "log_level", default="WARNING")).upper()
    logging.basicConfig(level=getattr(logging, log_level, logging.WARNING), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    log = logging.getLogger("play_one")

    rows = int(pick(args, cfg_dict, "rows", default=SETTINGS.board_size))
    columns = int(pick(args, cfg_dict, "columns", default=rows))
    x_kind, o_kind = resolve_player_kinds(args, cfg_dict)
    username = pick(args, cfg_dict, "username", default=None)
    model = pick(args, cfg_dict, "model", default=None)
    if "llm" in (x_kind, o_kind) and not model:
        ap.error("--model is required when a side is 'llm'")
    max_invalid = int(pick(args, cfg_dict, "max_invalid", default=SETTINGS.max_invalid_attempts))
    history_out = pick(args, cfg_dict, "history_out", default=None)
    game_log = args.game_log or bool(cfg_dict.get("game_log", False))

    gcfg = GameConfig(max_invalid_attempts=max_invalid, history_path=history_out, game_log=game_log)
    game = (
        GameBuilder()
        .with_dimensions(rows, columns)
        .with_player(build_player(x_kind, GameSymbol.X, username, model))
        .with_player(build_player(o_kind, GameSymbol.O, username, model))
        .with_config(gcfg)
        .build()
    )
    log.info("Starting game: %dx%d X=%s O=%s", rows, columns, x_kind, o_kind)

    print("Game Started")
    print_board(game.board)
    status = game.play(presenter=lambda board: print("\n" + render_board(board)))

    if status == GameStatus.ENDED:
        print("\n" + render_board(game.board, highlight=game.winning_line()))
        print(f"\n{game.winner.label} wins!")
    else:
        print("\nGame Drawn")
    return game


if __name__ == "__main__":
    main()
