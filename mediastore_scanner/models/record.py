"""Shared identity fields and JSON serialization for media records."""

import json
import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

EMPTY_JSON = "{}"

_logger = logging.getLogger(__name__)


def now_millis() -> int:
    """Current time as epoch milliseconds."""
    return int(time.time() * 1000)


@dataclass
class Identity:
    """Identity and timestamp fields embedded in every record."""

    id: int = field(default_factory=now_millis)
    created_at: int = field(default_factory=now_millis)
    updated_at: int = field(default_factory=now_millis)


class Record(ABC):
    """Base for dataclass records that embed an ``identity`` field."""

    identity: Identity

    @property
    def id(self) -> int:
        return self.identity.id

    @property
    def created_at(self) -> int:
        return self.identity.created_at

    @property
    def updated_at(self) -> int:
        return self.identity.updated_at

    def _identity_dict(self) -> Dict[str, Any]:
        return {
            'id': self.identity.id,
            'created_at': self.identity.created_at,
            'updated_at': self.identity.updated_at,
        }

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """Flat JSON-ready view of the record."""

    def serialize(self, logger: Optional[logging.Logger] = None) -> str:
        """Render this record as JSON text, never raising."""
        return serialize(self, logger=logger)


def encode_json(record: Record) -> str:
    """Encode a record as JSON.

    Raises:
        TypeError: If a field holds a value JSON cannot represent
        ValueError: If a float field is NaN or infinite
    """
    return json.dumps(record.to_dict(), ensure_ascii=False, allow_nan=False)


def serialize(
    record: Record,
    encoder: Callable[[Record], str] = encode_json,
    logger: Optional[logging.Logger] = None
) -> str:
    """Serialize a record, falling back to an empty JSON object.

    Args:
        record: Record to serialize
        encoder: Serialization capability, may raise
        logger: Logger that receives the failure (module logger if None)

    Returns:
        The encoded text, or ``"{}"`` if encoding failed
    """
    try:
        return encoder(record)
    except Exception as e:
        (logger or _logger).error(
            f"Failed to serialize {type(record).__name__}: {e}", exc_info=True
        )
        return EMPTY_JSON
