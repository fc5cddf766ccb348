"""movie_trends package.

Contains modules for loading a movie dataset (IMDB-style CSV), cleaning and
checking its numeric fields, and deriving chart-ready revenue trends for an
external rendering layer.

Architecture:
- Load → Clean → Aggregate, with the report handed off as JSON
- Dask is used for the partitioned load and cleaning
- Pydantic models validate records and the derived report
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
