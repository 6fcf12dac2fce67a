"""Contract of the external tabular media source."""

from typing import Optional, Protocol

SONGS_COLLECTION = "audio/media"
PLAYLISTS_COLLECTION = "audio/playlists"

IS_MUSIC_SELECTION = "is_music != 0"
TITLE_ARTIST_SORT = "title ASC, artist ASC"


def members_collection(playlist_id: int) -> str:
    """Collection identifier of one playlist's membership view."""
    return f"{PLAYLISTS_COLLECTION}/{playlist_id}/members"


class ResultHandle(Protocol):
    """Cursor over the rows of one query.

    The handle starts positioned before the first row.
    """

    def has_rows(self) -> bool: ...

    def advance(self) -> bool: ...

    def column_offset(self, name: str) -> int:
        """Offset of a column, or -1 if the result has no such column."""
        ...

    def get_text(self, offset: int) -> Optional[str]: ...

    def get_int(self, offset: int) -> Optional[int]: ...

    def release(self) -> None: ...


class MediaSource(Protocol):
    """Read-only query capability over the media collections."""

    def query(
        self,
        collection: str,
        selection: Optional[str] = None,
        sort_order: Optional[str] = None
    ) -> Optional[ResultHandle]:
        """Run a query.

        Returns:
            A result handle, or None if the source produced no result
        """
        ...
