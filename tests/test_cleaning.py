from __future__ import annotations

import pandas as pd
import dask.dataframe as dd
import pytest

from movie_trends.clean.transform import clean_raw_ddf
from movie_trends.clean.validate import check_format_errors
from movie_trends.errors import DataFormatError

RAW = pd.DataFrame([
    {"imdb_score": "7.9", "title_year": "2009", "gross": "760505847", "country": "  USA "},
    {"imdb_score": "7.1", "title_year": "2012", "gross": None, "country": "New   Zealand"},
    {"imdb_score": "6.4", "title_year": "twenty", "gross": "100", "country": "UK"},
    {"imdb_score": "5.0", "title_year": "2015", "gross": "lots", "country": ""},
    {"imdb_score": "8.0", "title_year": "2014.5", "gross": "5", "country": "UK"},
])


def _clean() -> pd.DataFrame:
    ddf = dd.from_pandas(RAW, npartitions=2)
    return clean_raw_ddf(ddf).compute()


def test_cleaning_renames_and_coerces_columns() -> None:
    out = _clean()
    assert list(out.columns) == ["score", "year", "gross", "country", "format_error"]
    assert out.loc[0, "score"] == pytest.approx(7.9)
    assert out.loc[0, "year"] == 2009
    assert out.loc[0, "gross"] == 760505847


def test_cleaning_normalizes_country_whitespace() -> None:
    out = _clean()
    assert out.loc[0, "country"] == "USA"
    assert out.loc[1, "country"] == "New Zealand"
    assert pd.isna(out.loc[3, "country"])


def test_cleaning_flags_malformed_numbers_only() -> None:
    out = _clean()
    # missing gross is not a format error; text or fractional years are
    assert out["format_error"].tolist() == [False, False, True, True, True]
    assert pd.isna(out.loc[1, "gross"])
    assert pd.isna(out.loc[4, "year"])


def test_check_format_errors_drops_flagged_rows() -> None:
    out = check_format_errors(_clean())
    assert "format_error" not in out.columns
    assert out.index.tolist() == [0, 1]


def test_check_format_errors_strict_raises() -> None:
    with pytest.raises(DataFormatError) as info:
        check_format_errors(_clean(), strict=True)
    assert info.value.bad_count == 3
    assert info.value.first_row is not None
    assert info.value.first_row["country"] == "UK"


def test_cleaning_flags_infinite_years() -> None:
    raw = pd.DataFrame([
        {"imdb_score": "7", "title_year": "2012", "gross": "100", "country": "USA"},
        {"imdb_score": "7", "title_year": "inf", "gross": "5", "country": "USA"},
        {"imdb_score": "7", "title_year": "-inf", "gross": "5", "country": "USA"},
    ])
    out = clean_raw_ddf(dd.from_pandas(raw, npartitions=1)).compute()
    assert out["format_error"].tolist() == [False, True, True]
    assert pd.isna(out.loc[1, "year"])
    assert pd.isna(out.loc[2, "year"])
