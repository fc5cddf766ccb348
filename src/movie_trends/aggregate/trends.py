"""Trend aggregation functions.

Functions in this module derive the two chart datasets from cleaned movie
records:

- the single-line trend: total gross per year from a year floor on;
- the multi-line trend: mean gross per country per year for the countries
  with the highest average gross.

Expectations:
- Input: a pandas DataFrame with columns `score`, `year`, `gross`, `country`,
  or a sequence of `MovieRecord`s / mappings (converted by `records_to_frame`).
  Numeric columns are coerced on entry; non-numeric values and years that are
  not finite whole numbers become NaN and are treated as missing.
- Records with a missing `gross` or `year` never contribute to a sum or mean.
- Country order is the order of first appearance in the input.
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

import numpy as np
import pandas as pd

from movie_trends.config import DEFAULT_TOP_K, DEFAULT_YEAR_FLOOR
from movie_trends.models import MovieRecord, TopCountrySeries, YearGross

RECORD_COLUMNS = ["score", "year", "gross", "country"]

Records = pd.DataFrame | Iterable[MovieRecord | Mapping[str, Any]]
CountryYearMeans = dict[str, dict[int, float]]


def records_to_frame(records: Iterable[MovieRecord | Mapping[str, Any]]) -> pd.DataFrame:
    """Build an aggregation input frame from already-parsed records.

    Args:
        records: `MovieRecord` instances or mappings with the record fields.

    Returns:
        pandas.DataFrame with columns `score`, `year`, `gross`, `country`, one
        row per record in input order.
    """
    rows = [
        (r if isinstance(r, MovieRecord) else MovieRecord.model_validate(r)).model_dump()
        for r in records
    ]
    return _prepare(pd.DataFrame(rows, columns=RECORD_COLUMNS))


def _prepare(records: Records) -> pd.DataFrame:
    """Return a frame with the record columns present and numerics coerced.

    Anything other than a DataFrame goes through `records_to_frame`. Years
    that are not finite whole numbers and blank countries become missing.
    """
    if not isinstance(records, pd.DataFrame):
        return records_to_frame(records)

    out = records.reindex(columns=RECORD_COLUMNS).copy()
    for col in ("score", "year", "gross"):
        out[col] = pd.to_numeric(out[col], errors="coerce").astype("float64")

    year = out["year"]
    out["year"] = year.where(np.isfinite(year) & (year == year.round()))

    country = out["country"]
    out["country"] = country.where(country.notna() & (country.astype(str).str.strip() != ""))
    return out


def _contributing(pdf: pd.DataFrame) -> pd.DataFrame:
    """Rows that may contribute to a sum or mean."""
    return pdf[pdf["gross"].notna() & pdf["year"].notna()]


def compute_yearly_totals(records: Records, year_floor: int = DEFAULT_YEAR_FLOOR) -> pd.DataFrame:
    """Return total gross per year for years >= `year_floor`.

    Args:
        records: Movie records.
        year_floor: Inclusive minimum year.

    Returns:
        pandas.DataFrame with columns `year` (int) and `gross` (float), one row
        per year, ascending by year. Empty when nothing passes the filters.
    """
    df = _contributing(_prepare(records))
    df = df[df["year"] >= year_floor]

    if df.empty:
        return pd.DataFrame(
            {"year": pd.Series(dtype="int64"), "gross": pd.Series(dtype="float64")}
        )

    out = (
        df.groupby("year", as_index=False)["gross"]
        .sum()
        .sort_values("year", kind="stable")
        .reset_index(drop=True)
    )
    out["year"] = out["year"].astype("int64")
    return out


def compute_country_year_means(records: Records) -> CountryYearMeans:
    """Return the mean gross of every (country, year) group.

    No year floor is applied here. Groups without a single contributing record
    are absent. Records with a missing or blank country are left out rather
    than grouped under an empty country name.

    Returns:
        Mapping country -> year -> mean gross. Countries and, within a country,
        years appear in order of first appearance in `records`.
    """
    df = _contributing(_prepare(records))
    df = df[df["country"].notna()]

    means: CountryYearMeans = {}
    if df.empty:
        return means

    grouped = df.groupby(["country", "year"], sort=False)["gross"].mean()
    for (country, year), gross in grouped.items():
        means.setdefault(str(country), {})[int(year)] = float(gross)
    return means


def compute_country_averages(country_year_means: Mapping[str, Mapping[int, float]]) -> pd.DataFrame:
    """Average each country's per-year means.

    This is a mean of means: every year weighs the same regardless of how many
    records it holds.

    Returns:
        pandas.DataFrame with columns `country`, `average_gross`, in the order
        of `country_year_means`.
    """
    rows = [
        {"country": country, "average_gross": sum(years.values()) / len(years)}
        for country, years in country_year_means.items()
        if years
    ]
    return pd.DataFrame(rows, columns=["country", "average_gross"])


def select_top_countries(country_averages: pd.DataFrame, k: int = DEFAULT_TOP_K) -> list[str]:
    """Return up to `k` countries with the highest average gross.

    Ties keep their order in `country_averages`. Fewer than `k` countries
    yields all of them.

    Raises:
        ValueError: if `k` is negative.
    """
    if k < 0:
        raise ValueError(f"k must be >= 0, got {k}")

    ranked = country_averages.sort_values("average_gross", ascending=False, kind="stable")
    return [str(c) for c in ranked["country"].head(k)]


def build_top_country_series(
    top_countries: Iterable[str],
    country_year_means: Mapping[str, Mapping[int, float]],
    year_floor: int = DEFAULT_YEAR_FLOOR,
) -> list[TopCountrySeries]:
    """Build the multi-line chart series for the selected countries.

    Args:
        top_countries: Countries in display order.
        country_year_means: Output of `compute_country_year_means`.
        year_floor: Inclusive minimum year.

    Returns:
        One `TopCountrySeries` per country, values ascending by year. A country
        missing from `country_year_means` gets an empty series.
    """
    series: list[TopCountrySeries] = []
    for country in top_countries:
        years = country_year_means.get(country, {})
        values = [
            YearGross(year=year, gross=gross)
            for year, gross in sorted(years.items())
            if year >= year_floor
        ]
        series.append(TopCountrySeries(country=country, values=values))
    return series
