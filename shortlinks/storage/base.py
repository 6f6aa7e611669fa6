"""Abstract base class for short link storage backends."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional

from .models import URLMapping


class MappingStore(ABC):
    """Storage capability used by the code registry.
    
    Implementations must reject an insert whose short code already exists,
    and must apply click increments atomically at the storage layer.
    """
    
    name = "abstract"
    
    @abstractmethod
    async def find_by_code(self, short_code: str) -> Optional[URLMapping]:
        """Look up a mapping by short code.
        
        Args:
            short_code: The short code to lookup
            
        Returns:
            The mapping if found, None otherwise
        """
    
    @abstractmethod
    async def find_by_url(self, original_url: str) -> Optional[URLMapping]:
        """Look up the oldest mapping for an original URL.
        
        Args:
            original_url: The exact URL string submitted at creation
            
        Returns:
            The mapping if found, None otherwise
        """
    
    @abstractmethod
    async def insert(self, mapping: URLMapping) -> bool:
        """Persist a new mapping.
        
        Args:
            mapping: The mapping to store
            
        Returns:
            True if stored, False if the short code is already taken
        """
    
    @abstractmethod
    async def increment_clicks(self, short_code: str, accessed_at: datetime) -> Optional[URLMapping]:
        """Atomically add one click to a mapping.
        
        Args:
            short_code: The short code to update
            accessed_at: Timestamp recorded as last access
            
        Returns:
            The updated mapping, or None if the code is unknown
        """
    
    async def exists(self, short_code: str) -> bool:
        """Check if a short code is already stored."""
        return await self.find_by_code(short_code) is not None
    
    @abstractmethod
    async def list_recent(self, limit: int = 100) -> List[URLMapping]:
        """List recently created mappings, newest first.
        
        Args:
            limit: Maximum number of mappings to return
        """
    
    @abstractmethod
    async def get_statistics(self) -> Dict[str, Any]:
        """Get storage statistics.
        
        Returns:
            Dictionary with total_urls and total_clicks
        """
    
    @abstractmethod
    async def health_check(self) -> bool:
        """Check if storage is reachable."""
    
    @abstractmethod
    async def close(self) -> None:
        """Release connections."""
