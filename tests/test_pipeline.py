from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import pytest

from movie_trends.aggregate.report import build_trend_report
from movie_trends.aggregate.trends import records_to_frame
from movie_trends.config import Settings
from movie_trends.errors import DataFormatError, LoadError
from movie_trends.pipeline import load_records, run


def test_load_records_drops_malformed_rows(settings: Settings) -> None:
    pdf = load_records(settings)
    assert list(pdf.columns) == ["score", "year", "gross", "country"]
    assert len(pdf) == 6
    assert pdf.index.tolist() == list(range(6))


def test_load_records_strict(settings: Settings) -> None:
    with pytest.raises(DataFormatError):
        load_records(replace(settings, strict=True))


def test_load_records_missing_source(settings: Settings, tmp_path: Path) -> None:
    with pytest.raises(LoadError):
        load_records(replace(settings, movies_source=str(tmp_path / "missing.csv")))


def test_run_builds_report(settings: Settings) -> None:
    report = run(settings)

    assert [(t.year, t.gross) for t in report.yearly_totals] == [
        (2011, 50.0),
        (2012, 400.0),
        (2013, 900.0),
    ]
    assert report.country_year_means["USA"] == {2009: 760505847.0, 2012: 200.0}
    assert "France" not in report.country_year_means
    assert report.top_countries == ["USA", "Japan", "UK"]

    usa = report.top_country_series[0]
    assert usa.country == "USA"
    assert [(v.year, v.gross) for v in usa.values] == [(2012, 200.0)]


def test_report_serializes_for_rendering() -> None:
    pdf = records_to_frame([
        {"year": 2010, "gross": 100, "country": "US"},
        {"year": 2010, "gross": 200, "country": "US"},
        {"year": 2011, "gross": 50, "country": "UK"},
    ])
    payload = build_trend_report(pdf, 2010, 5).model_dump(mode="json")
    assert payload["yearly_totals"] == [{"year": 2010, "gross": 300.0}, {"year": 2011, "gross": 50.0}]
    assert payload["country_year_means"] == {"US": {"2010": 150.0}, "UK": {"2011": 50.0}}
    assert payload["top_countries"] == ["US", "UK"]
    assert payload["country_averages"] == [
        {"country": "US", "average_gross": 150.0},
        {"country": "UK", "average_gross": 50.0},
    ]


def test_report_for_empty_records() -> None:
    report = build_trend_report(records_to_frame([]))
    assert report.yearly_totals == []
    assert report.top_countries == []
    assert report.top_country_series == []


def test_run_excludes_infinite_and_fractional_years(settings: Settings, tmp_path: Path) -> None:
    path = tmp_path / "odd_years.csv"
    path.write_text(
        "imdb_score,title_year,gross,country\n"
        "7,2012,100,USA\n"
        "7,inf,5,USA\n"
        "7,2012.5,40,USA\n",
        encoding="utf-8",
    )
    report = run(replace(settings, movies_source=str(path)))
    assert [(t.year, t.gross) for t in report.yearly_totals] == [(2012, 100.0)]
    assert report.country_year_means == {"USA": {2012: 100.0}}

    with pytest.raises(DataFormatError) as info:
        run(replace(settings, movies_source=str(path), strict=True))
    assert info.value.bad_count == 2
