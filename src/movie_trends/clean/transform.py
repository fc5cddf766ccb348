"""Cleaning and normalization utilities.

This module contains transformations that are applied partition-wise using
Dask. The output is a Dask DataFrame whose schema is stable and ready for the
aggregation step once materialized.
"""
from __future__ import annotations

import logging
from typing import Any

import numpy as np
import pandas as pd

log = logging.getLogger(__name__)

RENAMES = {"imdb_score": "score", "title_year": "year"}

CLEAN_META = pd.DataFrame(
    {
        "score": pd.Series(dtype="float64"),
        "year": pd.Series(dtype="float64"),
        "gross": pd.Series(dtype="float64"),
        "country": pd.Series(dtype="object"),
        "format_error": pd.Series(dtype="bool"),
    }
)


def _is_malformed(raw: pd.Series, parsed: pd.Series) -> pd.Series:
    """Flag values that were present in the source but did not parse."""
    present = raw.fillna("").astype(str).str.strip() != ""
    return present & parsed.isna()


def clean_movies_partition(pdf: pd.DataFrame) -> pd.DataFrame:
    """Clean one pandas partition of raw movie rows.

    Args:
        pdf: Partition with the raw source columns (all text).

    Returns:
        DataFrame with columns `score`, `year`, `gross`, `country`,
        `format_error`, same index as the input.
    """
    pdf = pdf.rename(columns=RENAMES)
    out = pd.DataFrame(index=pdf.index)

    out["score"] = pd.to_numeric(pdf["score"], errors="coerce").astype("float64")

    # years must be finite whole numbers
    year = pd.to_numeric(pdf["year"], errors="coerce").astype("float64")
    year = year.where(year.isna() | (np.isfinite(year) & (year == year.round())))
    out["year"] = year

    out["gross"] = pd.to_numeric(pdf["gross"], errors="coerce").astype("float64")

    country = (
        pdf["country"]
        .str.strip()
        .str.replace(r"\s+", " ", regex=True)
    )
    out["country"] = country.mask(country.fillna("") == "").astype(object)

    out["format_error"] = (
        _is_malformed(pdf["year"], out["year"]) | _is_malformed(pdf["gross"], out["gross"])
    ).astype(bool)

    return out


def clean_raw_ddf(ddf: Any) -> Any:
    """Clean the raw movie dataset.

    Performs column renaming, numeric coercion, and country normalization, and
    flags rows with a malformed `year` or `gross` in a `format_error` column.

    Returns:
        Transformed Dask DataFrame with a stable schema for downstream steps.
    """
    log.info("Starting clean_raw_ddf transformation")
    return ddf.map_partitions(clean_movies_partition, meta=CLEAN_META)
