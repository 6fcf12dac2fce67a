"""Column naming per query context and null-safe cell access."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from .source import ResultHandle

MISSING_COLUMN = -1


class QueryContext(str, Enum):
    """Which collection a song row comes from."""

    LIBRARY = "library"
    MEMBERSHIP = "membership"


class SongField(str, Enum):
    """Semantic song fields read from a row."""

    ID = "id"
    TITLE = "title"
    ARTIST = "artist"
    ALBUM = "album"
    YEAR = "year"
    TRACK = "track"
    COMPOSER = "composer"
    DURATION = "duration"
    SIZE = "size"
    PATH = "path"
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"


_LIBRARY_COLUMNS: Dict[SongField, str] = {
    SongField.ID: "_id",
    SongField.TITLE: "title",
    SongField.ARTIST: "artist",
    SongField.ALBUM: "album",
    SongField.YEAR: "year",
    SongField.TRACK: "track",
    SongField.COMPOSER: "composer",
    SongField.DURATION: "duration",
    SongField.SIZE: "_size",
    SongField.PATH: "_data",
    SongField.CREATED_AT: "date_added",
    SongField.UPDATED_AT: "date_modified",
}

# In the membership view `_id` and the unprefixed dates belong to the
# membership row, not to the song.
_MEMBERSHIP_COLUMNS: Dict[SongField, str] = {
    **_LIBRARY_COLUMNS,
    SongField.ID: "audio_id",
    SongField.CREATED_AT: "audio_date_added",
    SongField.UPDATED_AT: "audio_date_modified",
}

SONG_COLUMNS: Dict[QueryContext, Dict[SongField, str]] = {
    QueryContext.LIBRARY: _LIBRARY_COLUMNS,
    QueryContext.MEMBERSHIP: _MEMBERSHIP_COLUMNS,
}

PLAYLIST_ID_COLUMN = "_id"
PLAYLIST_NAME_COLUMN = "name"
PLAYLIST_CREATED_COLUMN = "date_added"
PLAYLIST_UPDATED_COLUMN = "date_modified"


def song_column(context: QueryContext, song_field: SongField) -> str:
    """Column name holding a song field in the given context."""
    return SONG_COLUMNS[context][song_field]


def resolve_offsets(
    handle: ResultHandle,
    context: QueryContext
) -> Dict[SongField, int]:
    """Look up the offset of every song field once for a result."""
    return {
        song_field: handle.column_offset(name)
        for song_field, name in SONG_COLUMNS[context].items()
    }


@dataclass(frozen=True)
class RowReader:
    """Typed get-or-default access to the current row of a handle."""

    handle: ResultHandle

    def text(self, offset: int, default: str = "") -> str:
        value = self.optional_text(offset)
        return default if value is None else value

    def optional_text(self, offset: int) -> Optional[str]:
        if offset == MISSING_COLUMN:
            return None
        return self.handle.get_text(offset)

    def integer(self, offset: int, default: int = 0) -> int:
        if offset == MISSING_COLUMN:
            return default
        value = self.handle.get_int(offset)
        return default if value is None else value
