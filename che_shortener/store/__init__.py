"""Record store layer for URL shortener."""

from .base import URLStoreBase
from .json_file import JSONFileURLStore
from .models import URLRecord
from .exceptions import (
    StoreError,
    StoreLoadError,
    StorePersistenceError,
    DuplicateShortCodeError,
)

__all__ = [
    "URLStoreBase",
    "JSONFileURLStore",
    "URLRecord",
    "StoreError",
    "StoreLoadError",
    "StorePersistenceError",
    "DuplicateShortCodeError",
]
