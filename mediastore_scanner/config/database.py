"""Sqlite-backed media source."""

import logging
import re
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from ..core.source import PLAYLISTS_COLLECTION, SONGS_COLLECTION

_MEMBERS_PATTERN = re.compile(r"^audio/playlists/(\d+)/members$")


def _decode_text(value: bytes) -> str:
    """Decode a TEXT cell, replacing bytes that are not valid UTF-8."""
    return value.decode("utf-8", errors="replace")


SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS audio_media (
        _id INTEGER PRIMARY KEY,
        title TEXT,
        artist TEXT,
        album TEXT,
        year TEXT,
        track INTEGER,
        composer TEXT,
        duration INTEGER,
        _size INTEGER,
        _data TEXT,
        date_added INTEGER,
        date_modified INTEGER,
        is_music INTEGER DEFAULT 1
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS audio_playlists (
        _id INTEGER PRIMARY KEY,
        name TEXT,
        date_added INTEGER,
        date_modified INTEGER
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS audio_playlists_map (
        _id INTEGER PRIMARY KEY AUTOINCREMENT,
        playlist_id INTEGER NOT NULL,
        audio_id INTEGER NOT NULL,
        play_order INTEGER NOT NULL,
        date_added INTEGER,
        date_modified INTEGER,
        FOREIGN KEY (playlist_id) REFERENCES audio_playlists(_id),
        FOREIGN KEY (audio_id) REFERENCES audio_media(_id)
    )
    """,
    """
    CREATE VIEW IF NOT EXISTS audio_playlist_members AS
    SELECT
        m._id, m.playlist_id, m.audio_id, m.play_order,
        m.date_added, m.date_modified,
        a.title, a.artist, a.album, a.year, a.track, a.composer,
        a.duration, a._size, a._data, a.is_music,
        a.date_added AS audio_date_added,
        a.date_modified AS audio_date_modified
    FROM audio_playlists_map m
    JOIN audio_media a ON a._id = m.audio_id
    """,
    "CREATE INDEX IF NOT EXISTS idx_playlists_map_playlist ON audio_playlists_map(playlist_id)",
)


class SqliteResultHandle:
    """Result handle over rows fetched from one sqlite query."""

    def __init__(self, conn: sqlite3.Connection, columns: Sequence[str], rows: List[tuple]):
        self._conn: Optional[sqlite3.Connection] = conn
        self._columns = list(columns)
        self._rows = rows
        self._position = -1

    def has_rows(self) -> bool:
        return bool(self._rows)

    def advance(self) -> bool:
        if self._position + 1 >= len(self._rows):
            self._position = len(self._rows)
            return False
        self._position += 1
        return True

    def column_offset(self, name: str) -> int:
        try:
            return self._columns.index(name)
        except ValueError:
            return -1

    def _cell(self, offset: int):
        if not 0 <= self._position < len(self._rows):
            raise IndexError("Result handle is not positioned on a row")
        return self._rows[self._position][offset]

    def get_text(self, offset: int) -> Optional[str]:
        value = self._cell(offset)
        return None if value is None else str(value)

    def get_int(self, offset: int) -> Optional[int]:
        value = self._cell(offset)
        if value is None:
            return None
        try:
            return int(value)
        except (TypeError, ValueError):
            return None

    @property
    def released(self) -> bool:
        return self._conn is None

    def release(self) -> None:
        """Close the underlying connection (safe to call more than once)."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None


class MediaDatabase:
    """Read-only media source backed by a sqlite database file."""

    def __init__(self, db_path: Path, logger: Optional[logging.Logger] = None):
        """Initialize the media database.

        Args:
            db_path: Path to SQLite database file
            logger: Logger instance (module logger if None)
        """
        self.db_path = Path(db_path)
        self.logger = logger or logging.getLogger(__name__)

    @contextmanager
    def get_connection(self):
        """Context manager for read-write database connections.

        Yields:
            sqlite3.Connection: Database connection
        """
        conn = sqlite3.connect(self.db_path)
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def ensure_schema(self) -> None:
        """Create the media tables and views if they are missing."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        with self.get_connection() as conn:
            cursor = conn.cursor()
            for statement in SCHEMA:
                cursor.execute(statement)

    def _connect_read_only(self) -> sqlite3.Connection:
        uri = self.db_path.resolve().as_uri() + "?mode=ro"
        conn = sqlite3.connect(uri, uri=True)
        # Badly tagged files can carry non UTF-8 text
        conn.text_factory = _decode_text
        return conn

    def _build_query(
        self,
        collection: str,
        selection: Optional[str],
        sort_order: Optional[str]
    ) -> Optional[Tuple[str, tuple]]:
        params: tuple = ()
        default_order = None

        if collection == SONGS_COLLECTION:
            sql = "SELECT * FROM audio_media"
            conditions = []
        elif collection == PLAYLISTS_COLLECTION:
            sql = "SELECT * FROM audio_playlists"
            conditions = []
        else:
            match = _MEMBERS_PATTERN.match(collection)
            if not match:
                return None
            sql = "SELECT * FROM audio_playlist_members"
            conditions = ["playlist_id = ?"]
            params = (int(match.group(1)),)
            default_order = "play_order ASC"

        if selection:
            conditions.append(f"({selection})")
        if conditions:
            sql += " WHERE " + " AND ".join(conditions)

        order = sort_order or default_order
        if order:
            sql += f" ORDER BY {order}"

        return sql, params

    def query(
        self,
        collection: str,
        selection: Optional[str] = None,
        sort_order: Optional[str] = None
    ) -> Optional[SqliteResultHandle]:
        """Query one media collection.

        Selection and sort order are trusted SQL fragments.

        Args:
            collection: Collection identifier
            selection: WHERE clause fragment (optional)
            sort_order: ORDER BY clause fragment (optional)

        Returns:
            Result handle, or None if the database or collection is unavailable
        """
        built = self._build_query(collection, selection, sort_order)
        if built is None:
            self.logger.warning(f"Unknown collection: {collection}")
            return None
        sql, params = built

        try:
            conn = self._connect_read_only()
        except sqlite3.Error as e:
            self.logger.warning(f"Cannot open media database {self.db_path}: {e}")
            return None

        try:
            cursor = conn.execute(sql, params)
            columns = [description[0] for description in cursor.description]
            rows = cursor.fetchall()
        except sqlite3.Error as e:
            conn.close()
            self.logger.error(f"Query on {collection} failed: {e}")
            return None

        return SqliteResultHandle(conn, columns, rows)
