"""In-process storage backend."""

import asyncio
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from .base import MappingStore
from .models import URLMapping


class InMemoryMappingStore(MappingStore):
    """Dictionary-backed store for tests and single-process deployments.
    
    Contents are lost when the process exits.
    """
    
    name = "memory"
    
    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self._by_code: Dict[str, URLMapping] = {}
        self._code_by_url: Dict[str, str] = {}
        self._lock = asyncio.Lock()
    
    async def find_by_code(self, short_code: str) -> Optional[URLMapping]:
        return self._by_code.get(short_code)
    
    async def find_by_url(self, original_url: str) -> Optional[URLMapping]:
        code = self._code_by_url.get(original_url)
        return self._by_code.get(code) if code else None
    
    async def insert(self, mapping: URLMapping) -> bool:
        async with self._lock:
            if mapping.short_code in self._by_code:
                self.logger.warning(f"Short code already exists: {mapping.short_code}")
                return False
            self._by_code[mapping.short_code] = mapping
            # Keep the first mapping as the answer for URL lookups
            self._code_by_url.setdefault(mapping.original_url, mapping.short_code)
        return True
    
    async def increment_clicks(self, short_code: str, accessed_at: datetime) -> Optional[URLMapping]:
        async with self._lock:
            current = self._by_code.get(short_code)
            if current is None:
                return None
            updated = current.with_click(accessed_at)
            self._by_code[short_code] = updated
        return updated
    
    async def list_recent(self, limit: int = 100) -> List[URLMapping]:
        mappings = sorted(self._by_code.values(), key=lambda m: m.created_at, reverse=True)
        return mappings[:limit]
    
    async def get_statistics(self) -> Dict[str, Any]:
        return {
            "total_urls": len(self._by_code),
            "total_clicks": sum(m.clicks for m in self._by_code.values()),
            "database": self.name,
        }
    
    async def health_check(self) -> bool:
        return True
    
    async def close(self) -> None:
        self.logger.debug("In-memory store closed")
