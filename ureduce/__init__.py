"""Core business logic for the UReduce URL shortener."""

from .shortcode import ShortCodeGenerator, generate_short_code
from .service import ShortLinkService

__all__ = ["ShortCodeGenerator", "generate_short_code", "ShortLinkService"]
