"""Business logic service for URL shortener."""

import asyncio
import logging
from typing import Optional, Dict, Any, List

from .shortcode import ShortCodeGenerator
from .store.base import URLStoreBase
from .store.models import URLRecord
from .common.validators import is_valid_url


class URLShortenerService:
    """Service layer for URL shortening business logic.
    
    Store operations are blocking (lock + file write) and run in worker
    threads so the event loop keeps serving other requests.
    """
    
    def __init__(
        self,
        store: URLStoreBase,
        short_code_generator: Optional[ShortCodeGenerator] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize URL shortener service.
        
        Args:
            store: Record store instance (already loaded)
            short_code_generator: Optional short code generator
            logger: Optional logger
        """
        self.store = store
        self.generator = short_code_generator or ShortCodeGenerator()
        self.logger = logger or logging.getLogger(__name__)
    
    async def create_short_url(self, long_url: str) -> URLRecord:
        """Create a new short URL.
        
        Args:
            long_url: The original long URL
            
        Returns:
            The stored record
            
        Raises:
            ValueError: If the URL is missing or not absolute
            StorePersistenceError: If the record cannot be saved
        """
        is_valid, error = is_valid_url(long_url)
        if not is_valid:
            raise ValueError(error)
        
        record = await asyncio.to_thread(self.store.create_record, long_url, self.generator)
        
        self.logger.info(
            f"Created short URL: {record.short_code} -> {long_url}",
            extra={"short_code": record.short_code, "long_url": long_url},
        )
        return record
    
    async def get_original_url(
        self,
        short_code: str,
        increment_count: bool = True,
    ) -> Optional[str]:
        """Get the original URL for a short code.
        
        Args:
            short_code: The short code to lookup
            increment_count: Whether to count this lookup as a redirect
            
        Returns:
            Original URL or None if not found
            
        Raises:
            StorePersistenceError: If the updated count cannot be saved
        """
        if increment_count:
            record = await asyncio.to_thread(self.store.increment_usage, short_code)
        else:
            record = self._find(await self.list_urls(), short_code)
        
        if record is None:
            self.logger.debug(f"Short code not found: {short_code}")
            return None
        
        self.logger.debug(f"Resolved {short_code} -> {record.long_url} (usage={record.usage_count})")
        return record.long_url
    
    async def get_url_info(self, short_code: str) -> Optional[URLRecord]:
        """Get the record for a short code without touching its usage count."""
        return self._find(await self.list_urls(), short_code)
    
    async def list_urls(self) -> List[URLRecord]:
        """List every record in creation order.
        
        Returns:
            Copies of the stored records
        """
        return await asyncio.to_thread(self.store.snapshot)
    
    async def health_check(self) -> Dict[str, Any]:
        """Perform health check.
        
        Returns:
            Dictionary with health status and record count
        """
        store_healthy = await asyncio.to_thread(self.store.health_check)
        total_urls = await asyncio.to_thread(self.store.count)
        
        return {
            "store": store_healthy,
            "total_urls": total_urls,
            "overall": store_healthy,
        }
    
    @staticmethod
    def _find(records: List[URLRecord], short_code: str) -> Optional[URLRecord]:
        for record in records:
            if record.short_code == short_code:
                return record
        return None
