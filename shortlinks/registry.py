"""Code registry: assigns, resolves and reports on short codes."""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Set, Tuple

from .analytics import ClickEvent, ClickSink
from .common.validators import is_reserved_code, is_valid_short_code, is_valid_url
from .errors import CodeGenerationError, ConflictError, NotFoundError, ValidationError
from .shortcode import ShortCodeGenerator
from .storage.base import MappingStore
from .storage.models import URLMapping


class CodeRegistry:
    """Owns the short code -> URL mappings and their click counters."""

    def __init__(
        self,
        store: MappingStore,
        short_code_generator: Optional[ShortCodeGenerator] = None,
        analytics: Optional[ClickSink] = None,
        logger: Optional[logging.Logger] = None,
        dedupe_urls: bool = True,
        enable_custom_codes: bool = True,
        max_collision_retries: int = 10,
    ):
        """Initialize the registry.

        Args:
            store: Storage backend
            short_code_generator: Optional short code generator
            analytics: Optional sink notified on every successful resolve
            logger: Optional logger
            dedupe_urls: Return the existing mapping when a URL is resubmitted
            enable_custom_codes: Whether to allow caller-chosen short codes
            max_collision_retries: Candidate codes drawn before giving up
        """
        if max_collision_retries < 1:
            raise ValueError("max_collision_retries must be at least 1")

        self.store = store
        self.generator = short_code_generator or ShortCodeGenerator()
        self.analytics = analytics or ClickSink()
        self.logger = logger or logging.getLogger(__name__)
        self.dedupe_urls = dedupe_urls
        self.enable_custom_codes = enable_custom_codes
        self.max_collision_retries = max_collision_retries

        self._create_lock = asyncio.Lock()
        self._pending: Set[asyncio.Task] = set()

    async def create(
        self,
        original_url: str,
        custom_code: Optional[str] = None,
    ) -> Tuple[URLMapping, bool]:
        """Create (or return the existing) mapping for a URL.

        Args:
            original_url: The original long URL
            custom_code: Optional caller-chosen short code

        Returns:
            Tuple of (mapping, created); created is False when an existing
            mapping was returned unchanged

        Raises:
            ValidationError: URL or custom code is malformed
            ConflictError: custom code is taken, or the URL is already
                mapped to a different code
            CodeGenerationError: no free code within the retry budget
        """
        is_valid, error = is_valid_url(original_url)
        if not is_valid:
            raise ValidationError(f"Invalid URL: {error}")

        if custom_code is not None:
            if not self.enable_custom_codes:
                raise ValidationError("Custom short codes are not enabled")
            is_valid, error = is_valid_short_code(custom_code)
            if not is_valid:
                raise ValidationError(f"Invalid short code: {error}")

        async with self._create_lock:
            if self.dedupe_urls:
                existing = await self.store.find_by_url(original_url)
                if existing is not None:
                    if custom_code is not None and custom_code != existing.short_code:
                        raise ConflictError(
                            f"URL is already shortened as '{existing.short_code}'"
                        )
                    self.logger.debug(f"Returning existing mapping {existing.short_code} for {original_url}")
                    return existing, False

            if custom_code is not None:
                mapping = await self._insert_custom(original_url, custom_code)
            else:
                mapping = await self._insert_generated(original_url)

        self.logger.info(f"Created short URL: {mapping.short_code} -> {original_url}")
        return mapping, True

    async def resolve(
        self,
        short_code: str,
        visitor: Optional[Dict[str, Optional[str]]] = None,
    ) -> URLMapping:
        """Count a click and return the mapping to redirect to.

        Args:
            short_code: The short code being followed
            visitor: Optional client_ip / user_agent / referrer for analytics

        Returns:
            The mapping with its click counter already incremented

        Raises:
            NotFoundError: the code is not registered
        """
        now = datetime.now(timezone.utc)
        mapping = await self.store.increment_clicks(short_code, now)

        if mapping is None:
            self.logger.warning(f"Short code not found: {short_code}")
            raise NotFoundError(short_code)

        self.logger.debug(f"Resolved {short_code} -> {mapping.original_url} (clicks={mapping.clicks})")

        if self.analytics.enabled:
            visitor = visitor or {}
            event = ClickEvent(
                short_code=mapping.short_code,
                original_url=mapping.original_url,
                clicked_at=now,
                client_ip=visitor.get("client_ip"),
                user_agent=visitor.get("user_agent"),
                referrer=visitor.get("referrer"),
            )
            task = asyncio.create_task(self._emit_click(event))
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)

        return mapping

    async def get_stats(self, short_code: str) -> URLMapping:
        """Read a mapping without touching its counter.

        Raises:
            NotFoundError: the code is not registered
        """
        mapping = await self.store.find_by_code(short_code)
        if mapping is None:
            raise NotFoundError(short_code)
        return mapping

    async def list_recent(self, limit: int = 100) -> List[URLMapping]:
        """List recently created mappings, newest first."""
        return await self.store.list_recent(limit)

    async def get_statistics(self) -> Dict[str, Any]:
        """Service-wide totals plus feature flags."""
        stats = await self.store.get_statistics()
        return {
            **stats,
            "analytics_enabled": self.analytics.enabled,
            "custom_codes_enabled": self.enable_custom_codes,
            "dedupe_urls": self.dedupe_urls,
        }

    async def health_check(self) -> Dict[str, bool]:
        """Perform health check.

        Analytics failures never block redirects, so they do not make the
        service unhealthy.
        """
        db_healthy = await self.store.health_check()
        analytics_healthy = await self.analytics.health_check()

        return {
            "database": db_healthy,
            "analytics": analytics_healthy,
            "overall": db_healthy,
        }

    async def drain(self) -> None:
        """Wait for in-flight analytics writes."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def close(self) -> None:
        """Flush background work and close connections."""
        await self.drain()
        await self.store.close()
        await self.analytics.close()

    async def _insert_custom(self, original_url: str, custom_code: str) -> URLMapping:
        mapping = URLMapping(
            short_code=custom_code,
            original_url=original_url,
            created_at=datetime.now(timezone.utc),
        )
        if not await self.store.insert(mapping):
            raise ConflictError(f"Short code '{custom_code}' already exists")
        return mapping

    async def _insert_generated(self, original_url: str) -> URLMapping:
        created_at = datetime.now(timezone.utc)
        claimed: List[URLMapping] = []

        async def claim(short_code: str) -> bool:
            if is_reserved_code(short_code) or await self.store.exists(short_code):
                return False
            mapping = URLMapping(
                short_code=short_code,
                original_url=original_url,
                created_at=created_at,
            )
            # The store rejects codes inserted by another process since the check
            if not await self.store.insert(mapping):
                self.logger.warning(f"Short code {short_code} was taken concurrently, retrying")
                return False
            claimed.append(mapping)
            return True

        short_code = await self.generator.allocate(claim, self.max_collision_retries)
        if short_code is None:
            self.logger.error(
                f"Could not allocate a short code after {self.max_collision_retries} attempts"
            )
            raise CodeGenerationError("Unable to generate unique short code, please retry")

        return claimed[0]

    async def _emit_click(self, event: ClickEvent) -> None:
        try:
            await self.analytics.record(event)
        except Exception as e:
            self.logger.error(f"Analytics sink raised for {event.short_code}: {e}")
