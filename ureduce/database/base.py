"""Abstract base class for URL shortener storage implementations."""

from abc import ABC, abstractmethod
from typing import Optional

from .models import ShortLink


class ShortLinkStoreBase(ABC):
    """Abstract base class for short link storage operations."""

    @abstractmethod
    async def insert_if_absent(self, link: ShortLink) -> bool:
        """Insert a short link unless its id is already taken.

        Args:
            link: The record to insert

        Returns:
            True if a row was written, False if the id already existed

        Raises:
            StorageError: If the database rejected the write
        """
        pass

    @abstractmethod
    async def get(self, short_code: str) -> Optional[ShortLink]:
        """Look up a short link by id.

        Args:
            short_code: The short code to lookup

        Returns:
            The record if found, None if missing or the lookup failed
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close database connections."""
        pass
