"""Web application layer for URL shortener."""

from .app_factory import create_app

__all__ = ["create_app"]
