"""Utilities to fetch and read the movie dataset.

The dataset is a CSV with at least the columns listed in `SOURCE_COLUMNS`.
It can live on disk or behind an HTTP(S) URL; remote files are downloaded once
into a local cache and read from there.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, cast
from urllib.parse import urlparse

import dask.dataframe as dd
import requests

from movie_trends.errors import LoadError

log = logging.getLogger(__name__)

SOURCE_COLUMNS = ["imdb_score", "title_year", "gross", "country"]


def is_url(source: str) -> bool:
    """Return True when `source` is an HTTP(S) URL."""
    return urlparse(source).scheme in ("http", "https")


def cache_path_for(url: str, out_dir: Path) -> Path:
    """Return the cache file used for `url` (named after the URL's last segment)."""
    name = Path(urlparse(url).path).name or "movies.csv"
    return out_dir / name


def download_movies_csv(url: str, out_dir: Path, user_agent: str, force: bool = False) -> Path:
    """Download or return the cached movie CSV behind `url`.

    Args:
        url: HTTP(S) location of the CSV.
        out_dir: Local directory to cache the downloaded file.
        user_agent: User-Agent header value to send with the request.
        force: Download again even when a cached copy exists.

    Returns:
        Path to the downloaded (or cached) CSV file.

    Raises:
        LoadError: if the request fails or returns a non-2xx status.
    """
    out_dir.mkdir(parents=True, exist_ok=True)
    out_path = cache_path_for(url, out_dir)

    if not force and out_path.exists() and out_path.stat().st_size > 0:
        log.info("Cache hit: %s", out_path)
        return out_path

    log.info("Downloading %s", url)
    try:
        r = requests.get(url, headers={"User-Agent": user_agent}, timeout=60)
        r.raise_for_status()
    except requests.RequestException as exc:
        raise LoadError(f"Could not download movie dataset from {url}: {exc}") from exc

    out_path.write_bytes(r.content)
    log.info("Saved: %s (%d bytes)", out_path, out_path.stat().st_size)
    return out_path


def resolve_source(source: str, cache_dir: Path, user_agent: str) -> Path:
    """Turn a configured source into a local CSV path, downloading URLs."""
    if is_url(source):
        return download_movies_csv(source, cache_dir, user_agent)
    return Path(source)


def read_movies_csv(path: Path, blocksize: str | int | None = "64MB", encoding: str = "utf-8") -> Any:
    """Read the movie CSV into a Dask DataFrame of text columns.

    Every column is read as a string so that numeric coercion (and detection
    of malformed values) happens in the cleaning step.

    Args:
        path: Local CSV file.
        blocksize: Dask partition size in bytes (None for a single partition).
        encoding: File encoding.

    Returns:
        Dask DataFrame restricted to `SOURCE_COLUMNS`.

    Raises:
        LoadError: if the file is missing, unreadable, or lacks a required column.
    """
    if not path.is_file():
        raise LoadError(f"Movie dataset not found: {path}")

    dd_mod = cast(Any, dd)
    try:
        ddf = dd_mod.read_csv(str(path), dtype=str, blocksize=blocksize, encoding=encoding)
    except (OSError, ValueError) as exc:
        raise LoadError(f"Could not parse movie dataset {path}: {exc}") from exc

    missing = [c for c in SOURCE_COLUMNS if c not in ddf.columns]
    if missing:
        raise LoadError(f"Movie dataset {path} is missing column(s): {', '.join(missing)}")

    log.info("Reading %s in %d partition(s)", path, ddf.npartitions)
    return ddf[SOURCE_COLUMNS]
