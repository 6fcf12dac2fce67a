"""Scanner mapping media source query results to song and playlist records."""

__version__ = "0.1.0"
