"""Loading utilities: fetch the movie CSV and read it with Dask."""
