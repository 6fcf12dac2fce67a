"""Service wiring settings, logging, the media database and the scanner."""

from pathlib import Path
from typing import Dict, List, Optional, Sequence

from .config.database import MediaDatabase
from .config.settings import Settings
from .core.scanner import MediaScanner
from .models.playlist import Playlist
from .models.record import Record
from .models.song import Song
from .utils.logger import setup_logger


class MediaLibraryService:
    """Read-only access to the songs and playlists of a media database."""

    def __init__(
        self,
        config_path: Optional[Path] = None,
        settings: Optional[Settings] = None,
        console_logging: bool = True
    ):
        """Initialize the service.

        Args:
            config_path: Path to configuration file (optional)
            settings: Preloaded settings (takes precedence over config_path)
            console_logging: Whether to log to the console
        """
        self.settings = settings or Settings.from_file_or_default(config_path)

        self.logger = setup_logger(
            log_file=self.settings.logging.path,
            level=self.settings.logging.level,
            max_size_mb=self.settings.logging.max_size_mb,
            backup_count=self.settings.logging.backup_count,
            console=console_logging
        )

        self.db = MediaDatabase(self.settings.database.path, logger=self.logger)
        self.scanner = MediaScanner(self.db, logger=self.logger)

    def songs(self) -> List[Song]:
        """Scan all songs."""
        return self.scanner.scan_songs()

    def playlists(self) -> List[Playlist]:
        """Scan all playlists with their songs."""
        return self.scanner.scan_playlists()

    def playlist_songs(self, playlist_id: int) -> List[Song]:
        """Scan the songs of one playlist."""
        return self.scanner.get_songs_from_playlist(playlist_id)

    def serialize_all(self, records: Sequence[Record]) -> str:
        """Render records as a JSON array.

        Records that fail to serialize appear as empty objects.
        """
        return "[" + ", ".join(record.serialize(self.logger) for record in records) + "]"

    def export(self, output: Path) -> Dict[str, int]:
        """Write every song and playlist to a JSON document.

        Args:
            output: Destination file

        Returns:
            Dictionary with the number of exported songs and playlists
        """
        songs = self.songs()
        playlists = self.playlists()

        document = (
            '{"songs": ' + self.serialize_all(songs)
            + ', "playlists": ' + self.serialize_all(playlists) + '}\n'
        )

        output.parent.mkdir(parents=True, exist_ok=True)
        with open(output, 'w', encoding='utf-8') as f:
            f.write(document)

        self.logger.info(
            f"Exported {len(songs)} song(s) and {len(playlists)} playlist(s) to {output}"
        )
        return {'songs': len(songs), 'playlists': len(playlists)}
