"""Middleware for the URL shortener web app."""

from .headers import CORSHeadersMiddleware
from .logging import LoggingMiddleware

__all__ = ["CORSHeadersMiddleware", "LoggingMiddleware"]
