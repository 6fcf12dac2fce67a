"""Song data model."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .record import Identity, Record


@dataclass
class Song(Record):
    """Song metadata model."""

    identity: Identity = field(default_factory=Identity)
    title: str = ""
    artist: str = ""
    album: str = ""
    composer: Optional[str] = None
    year: Optional[str] = None
    track: int = 0
    duration: int = 0  # Milliseconds
    size: int = 0  # Bytes
    path: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = self._identity_dict()
        data.update({
            'title': self.title,
            'artist': self.artist,
            'album': self.album,
            'composer': self.composer,
            'year': self.year,
            'track': self.track,
            'duration': self.duration,
            'size': self.size,
            'path': self.path,
        })
        return data
