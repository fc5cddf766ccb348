"""Data-format checks for cleaned movie records.

Rows flagged by the cleaning step carry a `year` or `gross` that was present
but not a number. By default they are dropped; strict mode refuses the dataset.
"""
from __future__ import annotations

import logging

import pandas as pd

from movie_trends.errors import DataFormatError

log = logging.getLogger(__name__)


def check_format_errors(pdf: pd.DataFrame, strict: bool = False) -> pd.DataFrame:
    """Apply the malformed-number policy to a cleaned frame.

    Args:
        pdf: Output of the cleaning step, with a boolean `format_error` column.
        strict: Raise instead of dropping flagged rows.

    Returns:
        The frame without flagged rows and without the `format_error` column.

    Raises:
        DataFormatError: in strict mode, when at least one row is flagged.
    """
    if "format_error" not in pdf.columns:
        return pdf

    bad = pdf["format_error"].fillna(False).astype(bool)
    bad_count = int(bad.sum())

    if bad_count and strict:
        first = pdf.loc[bad].drop(columns=["format_error"]).iloc[0].to_dict()
        raise DataFormatError(bad_count, first)

    if bad_count:
        log.warning("Excluding %d record(s) with a non-numeric year or gross", bad_count)

    return pdf.loc[~bad].drop(columns=["format_error"])
