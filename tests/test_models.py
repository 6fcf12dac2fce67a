"""
Tests for the record models.

These tests verify:
- Song and Playlist defaults
- Identity fields exposed on records
- JSON serialization and its empty-object fallback
"""

import json
import logging
from dataclasses import dataclass, field

import pytest

from mediastore_scanner.models import (
    EMPTY_JSON,
    Identity,
    Playlist,
    Record,
    Song,
    encode_json,
    now_millis,
    serialize,
)


class TestDefaults:
    """Tests for default field values."""

    def test_song_defaults(self) -> None:
        song = Song()
        assert song.title == ""
        assert song.artist == ""
        assert song.album == ""
        assert song.composer is None
        assert song.year is None
        assert song.track == 0
        assert song.duration == 0
        assert song.size == 0
        assert song.path is None

    def test_playlist_defaults(self) -> None:
        playlist = Playlist()
        assert playlist.name == ""
        assert playlist.songs == []

    def test_playlists_do_not_share_song_lists(self) -> None:
        first = Playlist()
        second = Playlist()
        first.songs.append(Song(title="A"))
        assert second.songs == []

    def test_identity_defaults_to_creation_time(self) -> None:
        before = now_millis()
        identity = Identity()
        after = now_millis()
        assert before <= identity.id <= after
        assert before <= identity.created_at <= after
        assert before <= identity.updated_at <= after

    def test_record_exposes_identity_fields(self) -> None:
        song = Song(identity=Identity(id=3, created_at=10, updated_at=20))
        assert song.id == 3
        assert song.created_at == 10
        assert song.updated_at == 20

    def test_record_without_to_dict_cannot_be_created(self) -> None:
        @dataclass
        class Album(Record):
            identity: Identity = field(default_factory=Identity)
            title: str = ""

        with pytest.raises(TypeError):
            Album()

    def test_equal_records_are_distinct_objects(self) -> None:
        first = Song(identity=Identity(id=1, created_at=2, updated_at=3), title="A")
        second = Song(identity=Identity(id=1, created_at=2, updated_at=3), title="A")
        assert first == second
        assert first is not second


class TestSerialize:
    """Tests for serialize() and the JSON encoder."""

    def test_song_round_trip(self) -> None:
        song = Song(
            identity=Identity(id=42, created_at=1000, updated_at=2000),
            title="Angie",
            artist="The Rolling Stones",
            album="Goats Head Soup",
            composer="Jagger/Richards",
            year="1973",
            track=6,
            duration=271000,
            size=5_400_000,
            path="/music/angie.mp3",
        )

        data = json.loads(song.serialize())

        assert data == {
            "id": 42,
            "created_at": 1000,
            "updated_at": 2000,
            "title": "Angie",
            "artist": "The Rolling Stones",
            "album": "Goats Head Soup",
            "composer": "Jagger/Richards",
            "year": "1973",
            "track": 6,
            "duration": 271000,
            "size": 5_400_000,
            "path": "/music/angie.mp3",
        }

    def test_null_optionals_serialize_as_null(self) -> None:
        data = json.loads(Song(identity=Identity(id=1, created_at=1, updated_at=1)).serialize())
        assert data["composer"] is None
        assert data["year"] is None
        assert data["path"] is None
        assert data["title"] == ""

    def test_playlist_serializes_nested_songs(self) -> None:
        playlist = Playlist(
            identity=Identity(id=7, created_at=1000, updated_at=2000),
            name="Road Trip",
            songs=[Song(title="A", track=1), Song(title="B", track=2)],
        )

        data = json.loads(playlist.serialize())

        assert data["id"] == 7
        assert data["name"] == "Road Trip"
        assert [song["title"] for song in data["songs"]] == ["A", "B"]
        assert [song["track"] for song in data["songs"]] == [1, 2]

    def test_non_ascii_text_is_kept(self) -> None:
        text = Song(title="Für Elise").serialize()
        assert "Für Elise" in text

    def test_encode_json_raises_on_unencodable_value(self) -> None:
        with pytest.raises(TypeError):
            encode_json(Song(title=object()))

    def test_unencodable_value_falls_back(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.ERROR):
            assert Song(title=object()).serialize() == EMPTY_JSON
        assert len(caplog.records) == 1

    def test_nan_falls_back(self) -> None:
        assert Song(duration=float("nan")).serialize() == "{}"

    def test_encoder_failure_logs_once(self, caplog: pytest.LogCaptureFixture) -> None:
        def broken_encoder(record):
            raise RuntimeError("encoder exploded")

        with caplog.at_level(logging.DEBUG):
            result = serialize(Song(title="A"), encoder=broken_encoder)

        assert result == "{}"
        assert len(caplog.records) == 1
        assert caplog.records[0].levelno == logging.ERROR
        assert "encoder exploded" in caplog.records[0].getMessage()

    def test_failure_goes_to_injected_logger(self) -> None:
        calls = []

        class RecordingLogger:
            def error(self, message, exc_info=False):
                calls.append(message)

        def broken_encoder(record):
            raise ValueError("bad value")

        result = serialize(Playlist(name="X"), encoder=broken_encoder, logger=RecordingLogger())

        assert result == "{}"
        assert len(calls) == 1
        assert "Playlist" in calls[0]

    def test_custom_encoder_is_used(self) -> None:
        assert serialize(Song(title="A"), encoder=lambda record: record.title) == "A"
