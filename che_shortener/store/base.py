"""Abstract base class for URL record store implementations."""

from abc import ABC, abstractmethod
from typing import List, Optional, TYPE_CHECKING

from .models import URLRecord

if TYPE_CHECKING:
    from ..shortcode import ShortCodeGenerator


class URLStoreBase(ABC):
    """Abstract base class for URL record store operations.
    
    Implementations own the authoritative collection. Every public operation
    is atomic with respect to every other one, and callers only ever receive
    copies of stored records.
    """
    
    @abstractmethod
    def load(self) -> None:
        """Load the collection from the backing storage.
        
        Raises:
            StoreLoadError: If the storage cannot be created, read or parsed
        """
        pass
    
    @abstractmethod
    def append(self, record: URLRecord) -> None:
        """Append a record and persist the collection.
        
        Args:
            record: The record to add
            
        Raises:
            DuplicateShortCodeError: If the short code already exists
            StorePersistenceError: If the collection cannot be written
        """
        pass
    
    @abstractmethod
    def create_record(self, long_url: str, generator: "ShortCodeGenerator") -> URLRecord:
        """Draw a unique code, build a record for it and append it atomically.
        
        Args:
            long_url: The validated long URL
            generator: Generator used to draw the short code
            
        Returns:
            Copy of the stored record
            
        Raises:
            StorePersistenceError: If the collection cannot be written
        """
        pass
    
    @abstractmethod
    def increment_usage(self, short_code: str) -> Optional[URLRecord]:
        """Increment the usage count of a short code and persist.
        
        Args:
            short_code: The short code that was resolved
            
        Returns:
            Copy of the updated record, or None if not found
            
        Raises:
            StorePersistenceError: If the collection cannot be written
        """
        pass
    
    @abstractmethod
    def snapshot(self) -> List[URLRecord]:
        """Return copies of every record in insertion order."""
        pass
    
    @abstractmethod
    def contains(self, short_code: str) -> bool:
        """Check if a short code already exists."""
        pass
    
    @abstractmethod
    def count(self) -> int:
        """Return the number of stored records."""
        pass
    
    @abstractmethod
    def health_check(self) -> bool:
        """Check if the backing storage is usable.
        
        Returns:
            True if healthy, False otherwise
        """
        pass
