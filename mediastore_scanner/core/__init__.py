"""Core functionality for the media scanner."""

from .columns import QueryContext, SongField, song_column
from .scanner import MediaScanner
from .source import MediaSource, ResultHandle, members_collection

__all__ = [
    "MediaScanner",
    "MediaSource",
    "QueryContext",
    "ResultHandle",
    "SongField",
    "members_collection",
    "song_column",
]
