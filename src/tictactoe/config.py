"""
Configuration and environment loading for the tictactoe package.

- Loads settings.yml (YAML) from repo root if present; falls back to environment variables.
- Exposes SETTINGS with keys used across the project (LLM endpoint, retry knobs, RNG seed, board defaults).
"""
from dataclasses import dataclass
import os
from typing import Any, Callable

import yaml
from dotenv import load_dotenv

# .env feeds os.environ; settings.yml still takes precedence over both
load_dotenv()


def _repo_root() -> str:
    # this file: src/tictactoe/config.py → repo root is two levels up
    return os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))


def _load_yaml(path: str) -> dict:
    try:
        if os.path.isfile(path):
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
                if isinstance(data, dict):
                    return data
    except (OSError, yaml.YAMLError):
        pass
    return {}


_cfg = _load_yaml(os.path.join(_repo_root(), "settings.yml"))


def _get(name: str, default: Any, cast: Callable[[Any], Any] | None = None) -> Any:
    val = _cfg.get(name)
    if val is not None and val != "":
        return cast(val) if cast else val
    env = os.environ.get(name)
    if env is not None and env != "":
        return cast(env) if cast else env
    return default


def _optional_int(val: Any) -> int | None:
    if val is None or str(val).strip().lower() in ("", "none", "null"):
        return None
    return int(val)


@dataclass(frozen=True)
class Settings:
    # Auth / endpoint (OpenAI-compatible chat completions)
    llm_api_key: str
    api_base: str

    # Tuning knobs
    responses_timeout_s: float
    responses_retries: int

    # Game defaults
    random_seed: int | None
    max_invalid_attempts: int
    board_size: int


SETTINGS = Settings(
    llm_api_key=_get("TICTACTOE_LLM_API_KEY", _get("OPENAI_API_KEY", "")),
    api_base=_get("TICTACTOE_LLM_BASE_URL", "https://api.openai.com/v1"),
    responses_timeout_s=float(_get("TICTACTOE_RESPONSES_TIMEOUT_S", 60.0, cast=float)),
    responses_retries=int(_get("TICTACTOE_RESPONSES_RETRIES", 2, cast=int)),
    random_seed=_get("TICTACTOE_RANDOM_SEED", None, cast=_optional_int),
    max_invalid_attempts=int(_get("TICTACTOE_MAX_INVALID_ATTEMPTS", 3, cast=int)),
    board_size=int(_get("TICTACTOE_BOARD_SIZE", 3, cast=int)),
)
