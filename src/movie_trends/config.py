"""Configuration helpers and Settings container.

This module provides a small `Settings` dataclass and `get_settings` which
reads the pipeline options from the environment (a `.env` file at the project
root is loaded first). Every option has a default.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import os

from dotenv import load_dotenv

from movie_trends import __version__

# Explicitly load .env from project root
PROJECT_ROOT = Path(__file__).resolve().parents[2]
load_dotenv(PROJECT_ROOT / ".env")

DEFAULT_YEAR_FLOOR = 2010
DEFAULT_TOP_K = 5

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    """Container for pipeline configuration read from the environment.

    Attributes:
        movies_source: Local CSV path or HTTP(S) URL of the movie dataset.
        cache_dir: Local cache directory for downloaded datasets.
        user_agent: User-Agent header sent when downloading.
        year_floor: Inclusive minimum year for both trend series.
        top_k: Number of countries kept in the multi-line trend.
        strict: Raise `DataFormatError` instead of dropping malformed records.
        log_path: File the CLI writes its log to.
    """
    movies_source: str
    cache_dir: Path
    user_agent: str
    year_floor: int
    top_k: int
    strict: bool
    log_path: Path


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}") from None


def get_settings() -> Settings:
    """Read environment variables and return a frozen `Settings` object.

    Raises:
        RuntimeError: if `TREND_YEAR_FLOOR` or `TREND_TOP_K` is not an
            integer, or `TREND_TOP_K` is negative.
    """
    movies_source = os.getenv("MOVIES_SOURCE", "data/movies.csv").strip()
    cache_dir = Path(os.getenv("MOVIES_CACHE_DIR", "data/cache"))
    user_agent = os.getenv("MOVIES_USER_AGENT", "").strip() or f"movie-trends/{__version__}"
    year_floor = _int_env("TREND_YEAR_FLOOR", DEFAULT_YEAR_FLOOR)
    top_k = _int_env("TREND_TOP_K", DEFAULT_TOP_K)
    strict = os.getenv("MOVIES_STRICT", "").strip().lower() in _TRUTHY
    log_path = Path(os.getenv("MOVIES_LOG_PATH", "logs/pipeline.log"))

    if top_k < 0:
        raise RuntimeError(f"TREND_TOP_K must be >= 0, got {top_k}")

    return Settings(
        movies_source=movies_source,
        cache_dir=cache_dir,
        user_agent=user_agent,
        year_floor=year_floor,
        top_k=top_k,
        strict=strict,
        log_path=log_path,
    )
