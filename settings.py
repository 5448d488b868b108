# settings.py

import logging
import os
import sys

from dataclasses import dataclass
from functools import lru_cache

import structlog

from dotenv import load_dotenv

from hash_family import DEFAULT_ALGORITHM, DEFAULT_FUNCTION_COUNT

load_dotenv()

DEFAULT_BITS = 2_400_000
DEFAULT_WORDLIST = "wordlist.txt"


def _get_env_int(name: str, default: int) -> int:
    val = os.getenv(name)
    if val is None or val.strip() == "":
        return default
    try:
        return int(val)
    except ValueError:
        return default


def _get_env_str(name: str, default: str) -> str:
    val = os.getenv(name)
    return default if val is None or val.strip() == "" else val.strip()


@dataclass(frozen=True)
class Settings:
    """Filter defaults loaded from environment variables (and .env)."""

    hash_algorithm: str
    function_count: int
    bits_amount: int
    wordlist_path: str
    log_level: str


def load_settings() -> Settings:
    return Settings(
        hash_algorithm=_get_env_str("BLOOM_HASH_ALGORITHM", DEFAULT_ALGORITHM),
        function_count=_get_env_int("BLOOM_FUNCTION_COUNT", DEFAULT_FUNCTION_COUNT),
        bits_amount=_get_env_int("BLOOM_BITS", DEFAULT_BITS),
        wordlist_path=_get_env_str("BLOOM_WORDLIST", DEFAULT_WORDLIST),
        log_level=_get_env_str("BLOOM_LOG_LEVEL", "INFO").upper(),
    )


@lru_cache
def get_settings() -> Settings:
    return load_settings()


def configure_logging(level: str) -> None:
    """
    Filter structlog output at `level` and send it to stderr.

    Library callers that skip this get structlog's defaults, which print
    every event (debug included) to stdout.
    """
    # stdout is reserved for driver output
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper(), logging.INFO)
        ),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )
