"""Core business logic for the word-pair URL shortener."""

from .shortcode import ShortCodeGenerator
from .service import URLShortenerService

__all__ = ["ShortCodeGenerator", "URLShortenerService"]
