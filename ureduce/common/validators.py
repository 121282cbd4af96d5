"""Validation utilities for URL shortener."""

from typing import Tuple


def is_valid_url(url: str) -> Tuple[bool, str]:
    """Validate a URL submitted for shortening.

    Only emptiness is checked: any non-empty string is accepted and
    redirected to verbatim.

    Args:
        url: The URL to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not isinstance(url, str):
        return False, "URL must be a string"

    if not url:
        return False, "URL is required"

    return True, ""
