import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

DEFAULT_REVEAL_TICK_SECONDS = 1.0
DEFAULT_ANSWER_MAX_LENGTH = 500
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class EngineConfig:
    reveal_tick_seconds: float = DEFAULT_REVEAL_TICK_SECONDS
    answer_max_length: int = DEFAULT_ANSWER_MAX_LENGTH
    log_level: str = DEFAULT_LOG_LEVEL


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _log_level_env(name: str, default: str) -> str:
    level = os.getenv(name, default).upper()
    # getLevelName maps known names to their numeric level
    if not isinstance(logging.getLevelName(level), int):
        return default
    return level


def engine_config() -> EngineConfig:
    """
    Build the engine configuration from environment variables.

    Environment variables:
        REVEAL_TICK_SECONDS: Seconds between reveal-gate ticks. Defaults to 1.0.
        ANSWER_MAX_LENGTH: Maximum accepted answer length. Defaults to 500.
        LOG_LEVEL: Logging level name. Defaults to "INFO".

    Invalid numeric values and unknown level names fall back to their
    defaults. Values are re-read on every call so tests can patch the
    environment.
    """
    tick = _float_env("REVEAL_TICK_SECONDS", DEFAULT_REVEAL_TICK_SECONDS)
    max_length = _int_env("ANSWER_MAX_LENGTH", DEFAULT_ANSWER_MAX_LENGTH)

    return EngineConfig(
        reveal_tick_seconds=tick if tick > 0 else DEFAULT_REVEAL_TICK_SECONDS,
        answer_max_length=max_length if max_length > 0 else DEFAULT_ANSWER_MAX_LENGTH,
        log_level=_log_level_env("LOG_LEVEL", DEFAULT_LOG_LEVEL),
    )
