"""Click analytics sinks.

Sinks receive one event per successful redirect. They run off the redirect
path, so every failure is logged and reported as a False return instead of
raised.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Optional

import redis.asyncio as redis
from redis.exceptions import RedisError


@dataclass(frozen=True)
class ClickEvent:
    """One resolved short link."""
    
    short_code: str
    original_url: str
    clicked_at: datetime
    client_ip: Optional[str] = None
    user_agent: Optional[str] = None
    referrer: Optional[str] = None
    
    def to_fields(self) -> Dict[str, str]:
        """Flatten to string fields, dropping unknown visitor details."""
        fields = {
            "short_code": self.short_code,
            "original_url": self.original_url,
            "clicked_at": self.clicked_at.isoformat(),
            "client_ip": self.client_ip,
            "user_agent": self.user_agent,
            "referrer": self.referrer,
        }
        return {k: v for k, v in fields.items() if v}


class ClickSink:
    """Base sink; discards events."""
    
    enabled = False
    
    async def record(self, event: ClickEvent) -> bool:
        return False
    
    async def health_check(self) -> bool:
        return True
    
    async def close(self) -> None:
        pass


class RedisClickSink(ClickSink):
    """Append click events to a Redis stream."""
    
    def __init__(
        self,
        redis_url: Optional[str] = None,
        stream_key: str = "shortlinks:clicks",
        max_stream_length: int = 100_000,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize Redis click sink.
        
        Args:
            redis_url: Redis connection URL (e.g., redis://localhost:6379/0)
            stream_key: Stream that receives click events
            max_stream_length: Approximate cap applied on every XADD
            logger: Optional logger instance
        """
        self.redis_url = redis_url
        self.stream_key = stream_key
        self.max_stream_length = max_stream_length
        self.logger = logger or logging.getLogger(__name__)
        self.enabled = redis_url is not None
        self.client: Optional[redis.Redis] = None
        
        if redis_url:
            self.logger.info(f"Click analytics enabled on stream {stream_key}")
    
    async def connect(self) -> None:
        """Connect to Redis; disables the sink if the server is unreachable."""
        if not self.enabled:
            return
        
        try:
            self.client = redis.from_url(
                self.redis_url,
                encoding="utf-8",
                decode_responses=True,
            )
            await self.client.ping()
            self.logger.info("Connected to Redis")
        except (RedisError, OSError) as e:
            self.logger.error(f"Failed to connect to Redis, click analytics disabled: {e}")
            self.enabled = False
    
    async def record(self, event: ClickEvent) -> bool:
        """Append one event to the stream.
        
        Returns:
            True if the event was written
        """
        if not self.enabled or not self.client:
            return False
        
        try:
            await self.client.xadd(
                self.stream_key,
                event.to_fields(),
                maxlen=self.max_stream_length,
                approximate=True,
            )
            return True
        except (RedisError, OSError) as e:
            self.logger.error(f"Click event write failed for {event.short_code}: {e}")
            return False
    
    async def health_check(self) -> bool:
        if not self.enabled or not self.client:
            return True
        try:
            await self.client.ping()
            return True
        except (RedisError, OSError):
            return False
    
    async def close(self) -> None:
        """Close Redis connection."""
        if self.client:
            await self.client.aclose()
            self.logger.info("Redis connection closed")
