"""Assemble every trend dataset into one validated `TrendReport`."""

from __future__ import annotations

import logging

import pandas as pd

from movie_trends.aggregate.trends import (
    build_top_country_series,
    compute_country_averages,
    compute_country_year_means,
    compute_yearly_totals,
    select_top_countries,
)
from movie_trends.config import DEFAULT_TOP_K, DEFAULT_YEAR_FLOOR
from movie_trends.models import TrendReport

log = logging.getLogger(__name__)


def build_trend_report(
    records: pd.DataFrame,
    year_floor: int = DEFAULT_YEAR_FLOOR,
    top_k: int = DEFAULT_TOP_K,
) -> TrendReport:
    """Run the aggregation steps in order and bundle their outputs.

    Args:
        records: Cleaned movie records (`score`, `year`, `gross`, `country`).
        year_floor: Inclusive minimum year for both series.
        top_k: Number of countries in the multi-line trend.

    Returns:
        A `TrendReport` ready to be serialized for the rendering layer.
    """
    log.info("Building trend report from %d records (year_floor=%d, top_k=%d)", len(records), year_floor, top_k)

    yearly = compute_yearly_totals(records, year_floor)
    means = compute_country_year_means(records)
    averages = compute_country_averages(means)
    top = select_top_countries(averages, top_k)
    series = build_top_country_series(top, means, year_floor)

    log.info("Yearly totals: %d years; countries with gross data: %d", len(yearly), len(means))
    log.info("Top countries: %s", ", ".join(top) if top else "(none)")

    return TrendReport.model_validate(
        {
            "year_floor": year_floor,
            "top_k": top_k,
            "yearly_totals": yearly.to_dict("records"),
            "country_year_means": means,
            "country_averages": averages.to_dict("records"),
            "top_countries": top,
            "top_country_series": series,
        }
    )
