"""Database layer for URL shortener."""

from .base import ShortLinkStoreBase
from .postgres import PostgresShortLinkStore
from .models import ShortLink

__all__ = ["ShortLinkStoreBase", "PostgresShortLinkStore", "ShortLink"]
