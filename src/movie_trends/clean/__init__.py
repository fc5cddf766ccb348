"""Cleaning utilities for the pipeline.

Provides functions to rename source columns, coerce numeric fields, normalize
country names, and decide what happens to records with malformed numbers.
"""
