"""End-to-end pipeline: load the dataset once, clean it, build the report.

The load is a lazy Dask graph that is materialized by a single `compute()`
call; aggregation only starts after it succeeded.
"""

from __future__ import annotations

import logging

import pandas as pd

from movie_trends.aggregate.report import build_trend_report
from movie_trends.clean.transform import clean_raw_ddf
from movie_trends.clean.validate import check_format_errors
from movie_trends.config import Settings
from movie_trends.errors import LoadError
from movie_trends.ingest.load_movies import read_movies_csv, resolve_source
from movie_trends.models import TrendReport

log = logging.getLogger(__name__)


def load_records(settings: Settings) -> pd.DataFrame:
    """Load and clean the configured movie dataset.

    Returns:
        pandas.DataFrame with columns `score`, `year`, `gross`, `country` in
        source order, with a fresh RangeIndex.

    Raises:
        LoadError: if the source cannot be fetched, read, or parsed.
        DataFormatError: in strict mode, if a year or gross is malformed.
    """
    path = resolve_source(settings.movies_source, settings.cache_dir, settings.user_agent)
    ddf = clean_raw_ddf(read_movies_csv(path))

    try:
        pdf = ddf.compute()
    except (OSError, ValueError) as exc:
        raise LoadError(f"Could not parse movie dataset {path}: {exc}") from exc

    log.info("Loaded %d movie records from %s", len(pdf), path)
    return check_format_errors(pdf, strict=settings.strict).reset_index(drop=True)


def run(settings: Settings) -> TrendReport:
    """Load the dataset and build the trend report."""
    records = load_records(settings)
    return build_trend_report(records, settings.year_floor, settings.top_k)
