"""Flat JSON file implementation of the URL record store."""

import json
import logging
import os
import tempfile
import threading
from dataclasses import replace
from datetime import datetime, timezone
from typing import List, Optional

from .base import URLStoreBase
from .exceptions import DuplicateShortCodeError, StoreLoadError, StorePersistenceError
from .models import URLRecord
from ..shortcode import ShortCodeGenerator


class JSONFileURLStore(URLStoreBase):
    """Keeps the records in memory and mirrors them to one JSON file.
    
    A single re-entrant lock guards every operation for its whole duration,
    including the file write, so lookups and mutations are serialized. The
    file is rewritten in full on every mutation; a failed write rolls the
    in-memory mutation back so memory and file never disagree.
    """
    
    def __init__(self, path: str, logger: Optional[logging.Logger] = None):
        """Initialize the store.
        
        Args:
            path: Path of the backing JSON file
            logger: Optional logger instance
        """
        self.path = path
        self.logger = logger or logging.getLogger(__name__)
        self._records: List[URLRecord] = []
        self._lock = threading.RLock()
    
    def load(self) -> None:
        with self._lock:
            try:
                if not os.path.exists(self.path):
                    self.logger.info(f"'{self.path}' not found, creating it with an empty array")
                    directory = os.path.dirname(os.path.abspath(self.path))
                    os.makedirs(directory, exist_ok=True)
                    with open(self.path, "w", encoding="utf-8") as f:
                        f.write("[]")
                
                with open(self.path, "r", encoding="utf-8") as f:
                    data = json.load(f)
            except OSError as e:
                raise StoreLoadError(f"Failed to open {self.path}: {e}") from e
            except ValueError as e:
                raise StoreLoadError(f"Failed to parse JSON from {self.path}: {e}") from e
            
            if not isinstance(data, list):
                raise StoreLoadError(f"{self.path} must contain a JSON array")
            
            records = []
            seen = set()
            for index, entry in enumerate(data):
                try:
                    record = URLRecord.from_dict(entry)
                except (KeyError, TypeError, ValueError, AttributeError) as e:
                    raise StoreLoadError(f"Invalid record at index {index} in {self.path}: {e}") from e
                if not ShortCodeGenerator.is_valid_format(record.short_code):
                    raise StoreLoadError(
                        f"Malformed short code '{record.short_code}' at index {index} in {self.path}"
                    )
                if record.short_code in seen:
                    raise StoreLoadError(f"Duplicate short code '{record.short_code}' in {self.path}")
                seen.add(record.short_code)
                records.append(record)
            
            self._records = records
            self.logger.info(
                f"Loaded {len(records)} URL records from {self.path}",
                extra={"store_path": self.path, "total_urls": len(records)},
            )
    
    def append(self, record: URLRecord) -> None:
        with self._lock:
            if self._find(record.short_code) is not None:
                raise DuplicateShortCodeError(f"Short code '{record.short_code}' already exists")
            
            self._records.append(replace(record))
            try:
                self._save()
            except StorePersistenceError:
                self._records.pop()
                raise
    
    def create_record(self, long_url: str, generator: ShortCodeGenerator) -> URLRecord:
        with self._lock:
            short_code = generator.generate_unique(self.contains)
            record = URLRecord(
                short_code=short_code,
                long_url=long_url,
                created_at=datetime.now(timezone.utc).replace(microsecond=0),
                usage_count=0,
            )
            self.append(record)
            return replace(record)
    
    def increment_usage(self, short_code: str) -> Optional[URLRecord]:
        with self._lock:
            record = self._find(short_code)
            if record is None:
                return None
            
            record.usage_count += 1
            try:
                self._save()
            except StorePersistenceError:
                record.usage_count -= 1
                raise
            return replace(record)
    
    def snapshot(self) -> List[URLRecord]:
        with self._lock:
            return [replace(record) for record in self._records]
    
    def contains(self, short_code: str) -> bool:
        with self._lock:
            return self._find(short_code) is not None
    
    def count(self) -> int:
        with self._lock:
            return len(self._records)
    
    def health_check(self) -> bool:
        with self._lock:
            return os.path.isfile(self.path) and os.access(self.path, os.W_OK)
    
    def _find(self, short_code: str) -> Optional[URLRecord]:
        for record in self._records:
            if record.short_code == short_code:
                return record
        return None
    
    def _save(self) -> None:
        """Write the full collection to the backing file.
        
        Caller must hold the lock.
        """
        data = json.dumps([record.to_dict() for record in self._records], indent=2)
        try:
            self._write_file(data)
        except OSError as e:
            self.logger.error(f"Error saving URLs to {self.path}: {e}", extra={"store_path": self.path})
            raise StorePersistenceError(f"Failed to write to {self.path}: {e}") from e
    
    def _write_file(self, data: str) -> None:
        # Written beside the target, then renamed over it
        directory = os.path.dirname(os.path.abspath(self.path))
        fd, tmp_path = tempfile.mkstemp(prefix=".urls-", suffix=".json", dir=directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(data)
            os.chmod(tmp_path, 0o644)
            os.replace(tmp_path, self.path)
        except OSError:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise
