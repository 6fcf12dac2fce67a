"""Playlist data model."""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from .record import Identity, Record
from .song import Song


@dataclass
class Playlist(Record):
    """Playlist metadata model with its resolved songs."""

    identity: Identity = field(default_factory=Identity)
    name: str = ""
    songs: List[Song] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        data = self._identity_dict()
        data['name'] = self.name
        data['songs'] = [song.to_dict() for song in self.songs]
        return data
