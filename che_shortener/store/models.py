"""Data models for URL shortener."""

from dataclasses import dataclass
from datetime import datetime, timezone


RFC3339_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def format_timestamp(value: datetime) -> str:
    """Format a datetime as an RFC 3339 UTC string with second precision."""
    return value.astimezone(timezone.utc).strftime(RFC3339_FORMAT)


def parse_timestamp(value: str) -> datetime:
    """Parse an RFC 3339 string (``Z`` or numeric offset) into an aware UTC datetime."""
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


@dataclass
class URLRecord:
    """Represents one short code mapping in the store."""
    
    short_code: str
    long_url: str
    created_at: datetime
    usage_count: int = 0
    
    def to_dict(self) -> dict:
        """Convert to the persisted JSON shape."""
        return {
            "short_code": self.short_code,
            "long_url": self.long_url,
            "created_at": format_timestamp(self.created_at),
            "usage_count": self.usage_count,
        }
    
    @classmethod
    def from_dict(cls, data: dict) -> "URLRecord":
        """Create from the persisted JSON shape.
        
        Raises:
            KeyError, TypeError, ValueError: If the entry is malformed
        """
        short_code = data["short_code"]
        long_url = data["long_url"]
        usage_count = data.get("usage_count", 0)
        
        if not isinstance(short_code, str) or not isinstance(long_url, str):
            raise TypeError("short_code and long_url must be strings")
        if isinstance(usage_count, bool) or not isinstance(usage_count, int) or usage_count < 0:
            raise ValueError(f"Invalid usage_count for '{short_code}': {usage_count!r}")
        
        created_at = data["created_at"]
        return cls(
            short_code=short_code,
            long_url=long_url,
            created_at=created_at if isinstance(created_at, datetime) else parse_timestamp(created_at),
            usage_count=usage_count,
        )
