"""Command-line interface for orchestrating the pipeline.

Provides subcommands: `fetch` and `report`. Each command is implemented as a
`cmd_*` function that accepts an argparse namespace.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from typing import Any

from dotenv import load_dotenv

from movie_trends.config import Settings, get_settings
from movie_trends.errors import MovieTrendsError
from movie_trends.ingest.load_movies import download_movies_csv, is_url
from movie_trends.logging_config import configure_logging
from movie_trends.pipeline import run

log = logging.getLogger(__name__)

SECTIONS = {
    "yearly": ["year_floor", "yearly_totals"],
    "countries": ["year_floor", "top_k", "country_averages", "top_countries", "top_country_series"],
}


# --------------------------------------------------
# Helpers
# --------------------------------------------------
def _settings_from_args(args: argparse.Namespace) -> Settings:
    """Return settings from the environment with CLI overrides applied."""
    s = get_settings()
    overrides: dict[str, Any] = {}
    if getattr(args, "source", None):
        overrides["movies_source"] = args.source
    if getattr(args, "year_floor", None) is not None:
        overrides["year_floor"] = args.year_floor
    if getattr(args, "top_k", None) is not None:
        overrides["top_k"] = args.top_k
    if getattr(args, "strict", False):
        overrides["strict"] = True
    return replace(s, **overrides)


def _non_negative(value: str) -> int:
    n = int(value)
    if n < 0:
        raise argparse.ArgumentTypeError("must be >= 0")
    return n


# --------------------------------------------------
# FETCH
# --------------------------------------------------
def cmd_fetch(args: argparse.Namespace) -> None:
    """Download the configured dataset URL into the local cache."""
    s = _settings_from_args(args)
    if not is_url(s.movies_source):
        log.info("Source %s is a local file; nothing to fetch.", s.movies_source)
        return
    download_movies_csv(s.movies_source, s.cache_dir, s.user_agent, force=args.force)


# --------------------------------------------------
# REPORT
# --------------------------------------------------
def cmd_report(args: argparse.Namespace) -> None:
    """Build the trend report and print it (or one section) as JSON."""
    s = _settings_from_args(args)
    payload = run(s).model_dump(mode="json")

    if args.section != "all":
        payload = {k: payload[k] for k in SECTIONS[args.section]}

    sys.stdout.write(json.dumps(payload, indent=2) + "\n")


# --------------------------------------------------
# CLI
# --------------------------------------------------
def build_parser() -> argparse.ArgumentParser:
    """Build and return the top-level argument parser for the CLI.

    Returns:
        Configured argparse.ArgumentParser instance.
    """
    p = argparse.ArgumentParser(prog="movie-trends")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_fetch = sub.add_parser("fetch")
    p_fetch.add_argument("--source", default=None)
    p_fetch.add_argument("--force", action="store_true")

    p_report = sub.add_parser("report")
    p_report.add_argument("--source", default=None)
    p_report.add_argument("--year-floor", type=int, default=None)
    p_report.add_argument("--top-k", type=_non_negative, default=None)
    p_report.add_argument("--strict", action="store_true")
    p_report.add_argument("--section", choices=["all", *SECTIONS], default="all")

    return p


def main(argv: list[str] | None = None) -> None:
    """CLI entry point: parse args, configure logging and dispatch commands."""
    load_dotenv()
    args = build_parser().parse_args(argv)

    try:
        log_path = get_settings().log_path
    except RuntimeError as exc:
        configure_logging(None, stream=sys.stderr)
        log.error("Invalid configuration: %s", exc)
        raise SystemExit(1) from exc
    configure_logging(log_path, stream=sys.stderr)

    try:
        if args.cmd == "fetch":
            cmd_fetch(args)
        elif args.cmd == "report":
            cmd_report(args)
        else:
            raise SystemExit(2)
    except MovieTrendsError as exc:
        log.error("%s", exc)
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
