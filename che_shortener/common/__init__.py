"""Common utilities for URL shortener."""

from .validators import is_valid_url
from .logging_config import setup_logging

__all__ = [
    "is_valid_url",
    "setup_logging",
]
