from __future__ import annotations

from pathlib import Path

import pytest

from movie_trends.config import Settings

MOVIES_CSV = """\
color,director_name,imdb_score,title_year,gross,country,movie_title
Color,A,7.9,2009,760505847,USA,Avatar
Color,B,7.1,2012,100,USA,One
Color,C,6.0,2012,300,USA,Two
Color,D,6.5,2011,50,UK,Three
Color,E,5.5,2013,,France,Four
Color,F,8.1,2013,900,Japan,Five
Color,G,6.2,2014,abc,UK,Six
"""


@pytest.fixture
def movies_csv(tmp_path: Path) -> Path:
    path = tmp_path / "movies.csv"
    path.write_text(MOVIES_CSV, encoding="utf-8")
    return path


@pytest.fixture
def settings(tmp_path: Path, movies_csv: Path) -> Settings:
    return Settings(
        movies_source=str(movies_csv),
        cache_dir=tmp_path / "cache",
        user_agent="tests",
        year_floor=2010,
        top_k=5,
        strict=False,
        log_path=tmp_path / "logs" / "pipeline.log",
    )
