"""Data models for the media scanner."""

from .playlist import Playlist
from .record import EMPTY_JSON, Identity, Record, encode_json, now_millis, serialize
from .song import Song

__all__ = [
    "EMPTY_JSON",
    "Identity",
    "Playlist",
    "Record",
    "Song",
    "encode_json",
    "now_millis",
    "serialize",
]
