"""Data models for the URL shortener."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class ShortLink:
    """Represents a row of the ``urls`` table."""

    id: str
    original_url: str
    short_url: str
    creation_date: datetime

    @classmethod
    def new(cls, short_code: str, original_url: str, creation_date: Optional[datetime] = None) -> "ShortLink":
        """Build a fresh record; ``short_url`` mirrors ``id``.

        Timestamps are stored as naive UTC (the column is TIMESTAMP without time zone).
        """
        if creation_date is None:
            creation_date = datetime.now(timezone.utc)
        if creation_date.tzinfo is not None:
            creation_date = creation_date.astimezone(timezone.utc).replace(tzinfo=None)
        return cls(
            id=short_code,
            original_url=original_url,
            short_url=short_code,
            creation_date=creation_date,
        )

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "original_url": self.original_url,
            "short_url": self.short_url,
            "creation_date": self.creation_date.isoformat() if self.creation_date else None,
        }

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "ShortLink":
        """Create from a database row (asyncpg Record or dict)."""
        return cls(
            id=record["id"],
            original_url=record["original_url"],
            short_url=record["short_url"],
            creation_date=record["creation_date"],
        )
