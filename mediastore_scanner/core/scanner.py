"""Mapping of media source query results to song and playlist records."""

import logging
from contextlib import contextmanager
from typing import Callable, Iterator, List, Optional, TypeVar

from ..models.playlist import Playlist
from ..models.record import Identity
from ..models.song import Song
from .columns import (
    PLAYLIST_CREATED_COLUMN,
    PLAYLIST_ID_COLUMN,
    PLAYLIST_NAME_COLUMN,
    PLAYLIST_UPDATED_COLUMN,
    QueryContext,
    RowReader,
    SongField,
    resolve_offsets,
)
from .source import (
    IS_MUSIC_SELECTION,
    PLAYLISTS_COLLECTION,
    SONGS_COLLECTION,
    TITLE_ARTIST_SORT,
    MediaSource,
    ResultHandle,
    members_collection,
)

T = TypeVar('T')
RowMapper = Callable[[], T]


class MediaScanner:
    """Scans songs and playlists from a media source.

    Every operation issues read-only queries, maps each row to a fully
    built record and returns a fresh list. A missing result, an empty
    result and a failing source all produce an empty list.
    """

    def __init__(
        self,
        source: MediaSource,
        logger: Optional[logging.Logger] = None
    ):
        """Initialize the scanner.

        Args:
            source: Media source to query
            logger: Logger instance (module logger if None)
        """
        self.source = source
        self.logger = logger or logging.getLogger(__name__)

    def scan_songs(self) -> List[Song]:
        """Get every music track, ordered by title then artist."""
        songs = self._scan(
            SONGS_COLLECTION,
            IS_MUSIC_SELECTION,
            TITLE_ARTIST_SORT,
            lambda handle: self._song_mapper(handle, QueryContext.LIBRARY),
        )
        self.logger.debug(f"Scanned {len(songs)} song(s)")
        return songs

    def scan_playlists(self) -> List[Playlist]:
        """Get every playlist with its songs resolved.

        Each playlist's songs are fetched with a separate membership query
        that completes before the next playlist row is read.
        """
        playlists = self._scan(PLAYLISTS_COLLECTION, None, None, self._playlist_mapper)
        self.logger.debug(f"Scanned {len(playlists)} playlist(s)")
        return playlists

    def get_songs_from_playlist(self, playlist_id: int) -> List[Song]:
        """Get the music tracks of one playlist in playlist order.

        Args:
            playlist_id: Playlist ID

        Returns:
            List of Song objects (empty if the playlist is unknown)
        """
        return self._scan(
            members_collection(playlist_id),
            IS_MUSIC_SELECTION,
            None,
            lambda handle: self._song_mapper(handle, QueryContext.MEMBERSHIP),
        )

    @contextmanager
    def _open_query(
        self,
        collection: str,
        selection: Optional[str],
        sort_order: Optional[str]
    ) -> Iterator[Optional[ResultHandle]]:
        """Run a query and release its handle when the block exits."""
        handle = self.source.query(collection, selection, sort_order)
        if handle is None:
            yield None
            return
        try:
            yield handle
        finally:
            handle.release()

    def _scan(
        self,
        collection: str,
        selection: Optional[str],
        sort_order: Optional[str],
        make_mapper: Callable[[ResultHandle], RowMapper]
    ) -> List[T]:
        records: List[T] = []
        try:
            with self._open_query(collection, selection, sort_order) as handle:
                if handle is None:
                    self.logger.debug(f"No result for {collection}")
                    return records
                if handle.has_rows():
                    map_row = make_mapper(handle)
                    while handle.advance():
                        records.append(map_row())
        except Exception as e:
            self.logger.error(f"Failed to scan {collection}: {e}")
            return []
        return records

    def _song_mapper(
        self,
        handle: ResultHandle,
        context: QueryContext
    ) -> RowMapper:
        offsets = resolve_offsets(handle, context)
        row = RowReader(handle)

        def map_row() -> Song:
            return Song(
                identity=Identity(
                    id=row.integer(offsets[SongField.ID]),
                    created_at=row.integer(offsets[SongField.CREATED_AT]),
                    updated_at=row.integer(offsets[SongField.UPDATED_AT]),
                ),
                title=row.text(offsets[SongField.TITLE]),
                artist=row.text(offsets[SongField.ARTIST]),
                album=row.text(offsets[SongField.ALBUM]),
                composer=row.optional_text(offsets[SongField.COMPOSER]),
                year=row.optional_text(offsets[SongField.YEAR]),
                track=row.integer(offsets[SongField.TRACK]),
                duration=row.integer(offsets[SongField.DURATION]),
                size=row.integer(offsets[SongField.SIZE]),
                path=row.optional_text(offsets[SongField.PATH]),
            )

        return map_row

    def _playlist_mapper(self, handle: ResultHandle) -> RowMapper:
        id_offset = handle.column_offset(PLAYLIST_ID_COLUMN)
        name_offset = handle.column_offset(PLAYLIST_NAME_COLUMN)
        created_offset = handle.column_offset(PLAYLIST_CREATED_COLUMN)
        updated_offset = handle.column_offset(PLAYLIST_UPDATED_COLUMN)
        row = RowReader(handle)

        def map_row() -> Playlist:
            playlist_id = row.integer(id_offset)
            return Playlist(
                identity=Identity(
                    id=playlist_id,
                    created_at=row.integer(created_offset),
                    updated_at=row.integer(updated_offset),
                ),
                name=row.text(name_offset),
                songs=self.get_songs_from_playlist(playlist_id),
            )

        return map_row
