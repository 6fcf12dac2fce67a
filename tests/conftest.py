"""Shared fixtures: an in-memory fake media source and a seeded sqlite library."""

import sqlite3
from pathlib import Path
from typing import List

import pytest

from mediastore_scanner.config.database import MediaDatabase
from mediastore_scanner.core.source import (
    PLAYLISTS_COLLECTION,
    SONGS_COLLECTION,
    members_collection,
)

from .fakes import (
    LIBRARY_COLUMNS,
    MEMBERSHIP_COLUMNS,
    PLAYLIST_COLUMNS,
    FakeMediaSource,
    library_row,
    membership_row,
)


@pytest.fixture(autouse=True)
def isolated_config_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep default config paths inside the test's temp directory."""
    config_home = tmp_path / "xdg"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    monkeypatch.setenv("APPDATA", str(config_home))
    return config_home


@pytest.fixture
def fake_source() -> FakeMediaSource:
    return FakeMediaSource()


@pytest.fixture
def road_trip_source() -> FakeMediaSource:
    """One playlist (id 7) holding songs A and B."""
    return FakeMediaSource({
        PLAYLISTS_COLLECTION: (PLAYLIST_COLUMNS, [(7, "Road Trip", 1000, 2000)]),
        members_collection(7): (MEMBERSHIP_COLUMNS, [
            membership_row(1, 7, 101, 0, "A", track=1),
            membership_row(2, 7, 102, 1, "B", track=2),
        ]),
        SONGS_COLLECTION: (LIBRARY_COLUMNS, [
            library_row(101, "A", track=1),
            library_row(102, "B", track=2),
        ]),
    })


def insert_songs(conn: sqlite3.Connection, rows: List[tuple]) -> None:
    placeholders = ", ".join("?" for _ in LIBRARY_COLUMNS)
    conn.executemany(
        f"INSERT INTO audio_media ({', '.join(LIBRARY_COLUMNS)}) VALUES ({placeholders})",
        rows,
    )


@pytest.fixture
def library_db(tmp_path: Path) -> MediaDatabase:
    """A sqlite media database with songs and two playlists.

    Playlist 7 "Road Trip" holds songs 2 then 1 plus a non-music entry;
    playlist 8 "Empty" holds nothing.
    """
    db = MediaDatabase(tmp_path / "media.db")
    db.ensure_schema()

    conn = sqlite3.connect(db.db_path)
    try:
        insert_songs(conn, [
            library_row(1, "Yellow", artist="Coldplay", track=5, year="2000"),
            library_row(2, "Angie", artist="The Rolling Stones", track=1),
            library_row(3, "Angie", artist="Cover Band", track=2, composer="Jagger/Richards"),
            library_row(4, None, artist=None, album=None, track=None, path=None),
            library_row(5, "Voice Memo", is_music=0),
        ])
        conn.executemany(
            "INSERT INTO audio_playlists (_id, name, date_added, date_modified) VALUES (?, ?, ?, ?)",
            [(7, "Road Trip", 1000, 2000), (8, "Empty", 3000, 4000)],
        )
        conn.executemany(
            "INSERT INTO audio_playlists_map (playlist_id, audio_id, play_order, date_added, date_modified)"
            " VALUES (?, ?, ?, ?, ?)",
            [(7, 1, 1, 11, 12), (7, 2, 0, 13, 14), (7, 5, 2, 15, 16)],
        )
        conn.commit()
    finally:
        conn.close()

    return db
