"""Exceptions raised by the movie_trends pipeline."""

from __future__ import annotations


class MovieTrendsError(Exception):
    """Base class for pipeline errors."""


class LoadError(MovieTrendsError):
    """The movie dataset could not be fetched, read, or parsed.

    Fatal: the pipeline stops before any aggregation runs.
    """


class DataFormatError(MovieTrendsError):
    """Records carry a non-numeric `year` or `gross` value.

    Only raised in strict mode; by default such records are excluded.
    """

    def __init__(self, bad_count: int, first_row: dict[str, object] | None = None) -> None:
        self.bad_count = bad_count
        self.first_row = first_row
        msg = f"{bad_count} record(s) have a non-numeric year or gross"
        if first_row is not None:
            msg += f" (first: {first_row})"
        super().__init__(msg)
