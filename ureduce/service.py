"""Business logic service for URL shortener."""

import logging
from typing import Optional, Dict, Any
from datetime import datetime, timezone

from .shortcode import ShortCodeGenerator
from .database.base import ShortLinkStoreBase
from .database.models import ShortLink
from .errors import ShortLinkNotFound, StorageError
from .common.validators import is_valid_url


class ShortLinkService:
    """Service layer for URL shortening business logic."""

    def __init__(
        self,
        store: ShortLinkStoreBase,
        short_code_generator: Optional[ShortCodeGenerator] = None,
        logger: Optional[logging.Logger] = None,
        detect_collisions: bool = True,
        strict_persistence: bool = False,
    ):
        """Initialize URL shortener service.

        Args:
            store: Storage instance
            short_code_generator: Optional short code generator
            logger: Optional logger
            detect_collisions: Widen the code when its prefix belongs to another URL
            strict_persistence: Propagate insert failures instead of returning the code anyway
        """
        self.store = store
        self.generator = short_code_generator or ShortCodeGenerator()
        self.logger = logger or logging.getLogger(__name__)
        self.detect_collisions = detect_collisions
        self.strict_persistence = strict_persistence

    async def create_short_url(self, original_url: str) -> Dict[str, Any]:
        """Create (or re-derive) the short URL for ``original_url``.

        Creation is idempotent: submitting the same URL again returns the
        same code and leaves the stored row untouched.

        Insert failures are best-effort by default: they are logged and the
        code being written is returned with ``persisted`` set to False. With
        ``strict_persistence`` they are raised instead, as is running out of
        candidate codes.

        Args:
            original_url: The original long URL

        Returns:
            Dictionary with short_code, original_url, persisted

        Raises:
            ValueError: If the URL is empty
            StorageError: If the insert failed and strict_persistence is set,
                or no candidate code is free
        """
        is_valid, error = is_valid_url(original_url)
        if not is_valid:
            raise ValueError(f"Invalid URL: {error}")

        try:
            short_code = await self._store_link(original_url)
        except StorageError as e:
            if self.strict_persistence or e.short_code is None:
                raise
            short_code = e.short_code
            self.logger.error(f"Failed to persist short URL {short_code} -> {original_url}: {e}")
            return {
                "short_code": short_code,
                "original_url": original_url,
                "persisted": False,
            }

        return {
            "short_code": short_code,
            "original_url": original_url,
            "persisted": True,
        }

    async def _insert(self, short_code: str, original_url: str, created_at: datetime) -> bool:
        try:
            return await self.store.insert_if_absent(ShortLink.new(short_code, original_url, created_at))
        except StorageError as e:
            e.short_code = short_code
            raise

    async def _store_link(self, original_url: str) -> str:
        """Insert the mapping and return the code it is stored under.

        Raises:
            StorageError: If the insert failed (``short_code`` names the code
                being written), or every candidate code is taken by a
                different URL (``short_code`` is None)
        """
        created_at = datetime.now(timezone.utc)

        if not self.detect_collisions:
            short_code = self.generator.generate(original_url)
            if await self._insert(short_code, original_url, created_at):
                self.logger.info(f"Created short URL: {short_code} -> {original_url}")
            return short_code

        for short_code in self.generator.candidates(original_url):
            if await self._insert(short_code, original_url, created_at):

                self.logger.info(f"Created short URL: {short_code} -> {original_url}")
                return short_code

            existing = await self.store.get(short_code)
            if existing is None:
                # Row exists but could not be read back
                self.logger.warning(f"Could not verify existing short code {short_code}")
                return short_code
            if existing.original_url == original_url:
                self.logger.debug(f"Short URL already exists: {short_code} -> {original_url}")
                return short_code

            self.logger.warning(
                f"Short code collision: {short_code} is taken by {existing.original_url}, "
                f"widening code for {original_url}"
            )

        raise StorageError(f"No free short code for {original_url}")

    async def get_short_link(self, short_code: str) -> ShortLink:
        """Get the stored record for a short code.

        Args:
            short_code: The short code to lookup

        Returns:
            The ShortLink record

        Raises:
            ShortLinkNotFound: If the code is malformed, unknown, or the lookup failed
        """
        if not self.generator.is_valid_format(short_code):
            self.logger.debug(f"Rejected malformed short code: {short_code!r}")
            raise ShortLinkNotFound(f"Short code not found: {short_code}")

        link = await self.store.get(short_code)
        if link is None:
            self.logger.warning(f"Short code not found: {short_code}")
            raise ShortLinkNotFound(f"Short code not found: {short_code}")

        self.logger.debug(f"Retrieved URL: {short_code} -> {link.original_url}")
        return link

    async def close(self) -> None:
        """Close service connections."""
        await self.store.close()
