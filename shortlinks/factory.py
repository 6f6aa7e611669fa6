"""Wire a registry together from configuration."""

import logging
from typing import Optional

from .analytics import ClickSink, RedisClickSink
from .registry import CodeRegistry
from .shortcode import ShortCodeGenerator
from .storage.base import MappingStore
from .storage.memory import InMemoryMappingStore
from .storage.postgres import PostgresMappingStore


def build_store(config, logger: Optional[logging.Logger] = None) -> MappingStore:
    """Instantiate the configured storage backend."""
    logger = logger or logging.getLogger(__name__)
    
    if config.storage_backend == "memory":
        logger.warning("Using in-memory storage; mappings are lost on restart")
        return InMemoryMappingStore(logger=logger)
    
    logger.info(f"Using PostgreSQL storage at {PostgresMappingStore.redact(config.database_url)}")
    return PostgresMappingStore(
        db_config=config.database_url,
        pool_max_size=config.db_pool_max_size,
        logger=logger,
    )


async def build_analytics(config, logger: Optional[logging.Logger] = None) -> ClickSink:
    """Connect the Redis click sink, or return a no-op sink when unset."""
    logger = logger or logging.getLogger(__name__)
    
    if not config.redis_url:
        logger.info("Click analytics disabled")
        return ClickSink()
    
    sink = RedisClickSink(
        redis_url=config.redis_url,
        stream_key=config.analytics_stream,
        logger=logger,
    )
    await sink.connect()
    return sink


async def build_registry(
    config,
    logger: Optional[logging.Logger] = None,
    store: Optional[MappingStore] = None,
    analytics: Optional[ClickSink] = None,
) -> CodeRegistry:
    """Build a ready-to-use registry from configuration.
    
    Args:
        config: Loaded ``Config``
        logger: Optional logger shared by all components
        store: Optional pre-built store (skips backend construction)
        analytics: Optional pre-built click sink
        
    Returns:
        Configured CodeRegistry
    """
    logger = logger or logging.getLogger(__name__)
    
    if store is None:
        store = build_store(config, logger)
        if config.create_tables and isinstance(store, PostgresMappingStore):
            await store.ensure_schema()
    
    if analytics is None:
        analytics = await build_analytics(config, logger)
    
    return CodeRegistry(
        store=store,
        short_code_generator=ShortCodeGenerator(default_length=config.short_code_length),
        analytics=analytics,
        logger=logger,
        dedupe_urls=config.dedupe_urls,
        enable_custom_codes=config.enable_custom_codes,
        max_collision_retries=config.max_collision_retries,
    )
