"""Trend aggregation helpers.

This package turns cleaned movie records into the small, chart-ready datasets
consumed by the rendering layer: yearly gross totals and per-country mean
gross series for the top-grossing countries.
"""
