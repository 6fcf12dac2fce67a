"""Configuration module for the media scanner."""

from .database import MediaDatabase, SqliteResultHandle
from .settings import Settings

__all__ = ["MediaDatabase", "Settings", "SqliteResultHandle"]
