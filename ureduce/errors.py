"""
Error classes for the URL shortener.

StartupError is fatal: the process must not serve without a verified
database connection. StorageError and ShortLinkNotFound are request-level
and are translated to HTTP responses by the web layer.
"""

from typing import Optional


class ShortLinkError(Exception):
    """
    Base error class.

    Attributes:
        message: Error message
    """
    message: str = "URL shortener error"

    def __init__(self, message: Optional[str] = None):
        """
        Initialize error.

        Args:
            message: Error message (overrides default)
        """
        self.message = message or self.message
        super().__init__(self.message)


class StartupError(ShortLinkError):
    """Database unreachable after retries, or schema creation failed."""
    message = "Database initialization failed"


class StorageError(ShortLinkError):
    """A write to the database failed.

    Attributes:
        short_code: Code the failed write was storing, if one was reached
    """
    message = "Database error"

    def __init__(self, message: Optional[str] = None, short_code: Optional[str] = None):
        super().__init__(message)
        self.short_code = short_code



class ShortLinkNotFound(ShortLinkError):
    """No record for the short code, or the lookup itself failed."""
    message = "URL not found"
