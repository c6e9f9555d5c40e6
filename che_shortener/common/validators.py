"""Validation utilities for URL shortener."""

from urllib.parse import urlsplit
from typing import Tuple


URL_REQUIRED = "URL is required"
INVALID_URL_FORMAT = "Invalid URL format"


def is_valid_url(url: str) -> Tuple[bool, str]:
    """Validate a long URL.
    
    The URL must be absolute: a scheme followed by ``//`` and a host.
    
    Args:
        url: The URL to validate
        
    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str):
        return False, URL_REQUIRED
    
    if any(c.isspace() for c in url):
        return False, INVALID_URL_FORMAT
    
    try:
        result = urlsplit(url)
        # Accessing the port validates it
        result.port
    except ValueError:
        return False, INVALID_URL_FORMAT
    
    if not result.scheme or not result.hostname:
        return False, INVALID_URL_FORMAT
    
    return True, ""
