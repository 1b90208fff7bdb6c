"""
LLM client facade over an OpenAI-compatible chat completions endpoint (configurable base URL).

- get_client(): the SDK client, created on first use so importing the package
  never needs credentials.
- ask_for_move(): one chat round-trip that answers with the model's text;
  failed or empty attempts are retried with jittered exponential backoff.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional
import logging
import random
import time

from openai import OpenAI

from .config import SETTINGS

log = logging.getLogger("llm_client")

BASE_DELAY_S = 0.5
MAX_DELAY_S = 10.0

_CLIENT: OpenAI | None = None


def get_client() -> OpenAI:
    global _CLIENT
    if _CLIENT is None:
        _CLIENT = OpenAI(api_key=SETTINGS.llm_api_key or None, base_url=SETTINGS.api_base or None)
    return _CLIENT


def _backoff_seconds(attempt: int) -> float:
    """Delay before retry number `attempt` (1-based), +/-20% jitter, capped."""
    jitter = random.uniform(0.8, 1.2)
    return min(BASE_DELAY_S * (2 ** (attempt - 1)) * jitter, MAX_DELAY_S)


# ------------------------- Chat wrapper -------------------------
def _complete(model: str, messages: List[Dict[str, str]]) -> str:
    rsp = get_client().chat.completions.create(
        model=model,
        messages=messages,
        timeout=SETTINGS.responses_timeout_s,
    )
    return _extract_text(rsp).strip()


def ask_for_move(messages: List[Dict[str, str]], model: Optional[str] = None) -> str:
    """Send the conversation to `model` and return its stripped reply.

    Makes up to TICTACTOE_RESPONSES_RETRIES + 1 attempts. Returns "" when none
    of them produced text; the caller's parser then rejects the move.
    """
    if not model:
        raise ValueError("Model is required; set it in your JSON config (key 'model') or CLI.")
    attempts = SETTINGS.responses_retries + 1
    last_error: Exception | None = None
    for attempt in range(1, attempts + 1):
        try:
            reply = _complete(model, messages)
        except Exception as e:
            last_error = e
            log.warning("Chat attempt %d/%d to %s failed: %s", attempt, attempts, model, e)
        else:
            if reply:
                return reply
            log.warning("Chat attempt %d/%d to %s returned no text", attempt, attempts, model)
        if attempt < attempts:
            time.sleep(_backoff_seconds(attempt))
    log.error("No reply from %s after %d attempts (last error: %s)", model, attempts, last_error)
    return ""


# ------------------------- Reply text -------------------------
def _part_text(part: Any) -> Optional[str]:
    # Content parts arrive as dicts from raw JSON, objects from the SDK
    if isinstance(part, dict):
        return part.get("text") if part.get("type") == "text" else None
    return getattr(part, "text", None)


def _extract_text(rsp: Any) -> str:
    choices = getattr(rsp, "choices", None)
    if not choices:
        return ""
    content = getattr(choices[0].message, "content", None)
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        texts = [_part_text(p) for p in content]
        return "\n".join(t for t in texts if isinstance(t, str))
    return ""
