"""Storage backends for short link mappings."""

from .base import MappingStore
from .memory import InMemoryMappingStore
from .postgres import PostgresMappingStore
from .models import URLMapping

__all__ = ["MappingStore", "InMemoryMappingStore", "PostgresMappingStore", "URLMapping"]
