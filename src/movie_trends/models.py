"""Pydantic models for input records and the derived trend report.

`MovieRecord` is the shape of one cleaned input row. The remaining models
describe the structures handed to the rendering layer.
"""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _to_number(value: Any) -> float | None:
    """Return `value` as a float, or None when it is missing or non-numeric."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return None if math.isnan(number) else number


class MovieRecord(BaseModel):
    """Schema for one movie row after column renaming.

    Attributes:
        score: IMDB score.
        year: Release year (`title_year` in the source).
        gross: Box-office gross; None when unknown.
        country: Production country.
    """
    model_config = ConfigDict(extra="ignore", frozen=True)
    score: float | None = None
    year: int | None = None
    gross: float | None = None
    country: str | None = None

    @field_validator("score", "gross", mode="before")
    @classmethod
    def _coerce_decimal(cls, v: Any) -> float | None:
        return _to_number(v)

    @field_validator("year", mode="before")
    @classmethod
    def _coerce_year(cls, v: Any) -> int | None:
        number = _to_number(v)
        if number is None or not number.is_integer():
            return None
        return int(number)

    @field_validator("country", mode="before")
    @classmethod
    def _blank_country(cls, v: Any) -> str | None:
        if v is None or (isinstance(v, float) and math.isnan(v)):
            return None
        text = " ".join(str(v).split())
        return text or None


class YearlyTotal(BaseModel):
    """Total gross of all records released in `year`."""
    model_config = ConfigDict(extra="forbid")
    year: int
    gross: float


class YearGross(BaseModel):
    """One point of a country series."""
    model_config = ConfigDict(extra="forbid")
    year: int
    gross: float


class CountryAverage(BaseModel):
    """Mean of a country's per-year mean gross values."""
    model_config = ConfigDict(extra="forbid")
    country: str
    average_gross: float


class TopCountrySeries(BaseModel):
    """Per-year mean gross for one selected country, ascending by year."""
    model_config = ConfigDict(extra="forbid")
    country: str
    values: list[YearGross] = Field(default_factory=list)


class TrendReport(BaseModel):
    """Everything the rendering layer needs to draw both trend charts.

    Attributes:
        year_floor: Inclusive minimum year applied to both series.
        top_k: Requested number of top countries.
        yearly_totals: Single-line chart data, ascending by year.
        country_year_means: country -> year -> mean gross (no year floor).
        country_averages: Two-stage average per country, in input order.
        top_countries: Selected countries, highest average first.
        top_country_series: Multi-line chart data, one entry per top country.
    """
    model_config = ConfigDict(extra="forbid")
    year_floor: int
    top_k: int = Field(..., ge=0)
    yearly_totals: list[YearlyTotal]
    country_year_means: dict[str, dict[int, float]]
    country_averages: list[CountryAverage]
    top_countries: list[str]
    top_country_series: list[TopCountrySeries]
