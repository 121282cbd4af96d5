"""Short code generation utilities."""

import hashlib
import string
from typing import Optional


DEFAULT_LENGTH = 8
MIN_LENGTH = 4
MAX_LENGTH = 32  # md5 hex digest length


class ShortCodeGenerator:
    """Generate short codes for URLs.

    Codes are prefixes of the lowercase hex md5 digest of the URL, so the
    same URL always yields the same code, across restarts and processes.
    Eight hex characters are 32 bits: distinct URLs can collide once the
    table holds tens of thousands of rows. ``ShortLinkService`` handles that
    by asking for a longer prefix of the same digest.
    """

    HEX_CHARS = string.digits + "abcdef"

    def __init__(self, default_length: int = DEFAULT_LENGTH):
        """Initialize short code generator.

        Args:
            default_length: Default length for generated codes
        """
        if not 1 <= default_length <= MAX_LENGTH:
            raise ValueError(f"default_length must be between 1 and {MAX_LENGTH}")
        self.default_length = default_length

    def generate(self, url: str, length: Optional[int] = None) -> str:
        """Generate short code from URL hash.

        Args:
            url: The URL to hash
            length: Length of the code (uses default if not specified)

        Returns:
            First ``length`` hex characters of the md5 digest of ``url``
        """
        length = length or self.default_length
        return hashlib.md5(url.encode("utf-8")).hexdigest()[:length]

    def candidates(self, url: str, step: int = 4):
        """Yield progressively longer codes for ``url``, default length first."""
        digest = hashlib.md5(url.encode("utf-8")).hexdigest()
        length = self.default_length
        while length < MAX_LENGTH:
            yield digest[:length]
            length += step
        yield digest

    @staticmethod
    def is_valid_format(code: str, min_length: int = MIN_LENGTH) -> bool:
        """Check if code could have been produced by the generator.

        Args:
            code: Code to validate
            min_length: Shortest code accepted

        Returns:
            True if code is lowercase hex of a plausible length
        """
        if not min_length <= len(code) <= MAX_LENGTH:
            return False
        return all(c in ShortCodeGenerator.HEX_CHARS for c in code)


def generate_short_code(url: str) -> str:
    """Return the default-length short code for ``url``."""
    return ShortCodeGenerator().generate(url)
