"""Data models for short link storage."""

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@dataclass(frozen=True)
class URLMapping:
    """A short code and the URL it points at."""
    
    short_code: str
    original_url: str
    created_at: datetime
    clicks: int = 0
    last_accessed: Optional[datetime] = None
    
    def with_click(self, at: datetime) -> "URLMapping":
        """Copy with the counter bumped by one."""
        return replace(self, clicks=self.clicks + 1, last_accessed=at)
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            "short_code": self.short_code,
            "original_url": self.original_url,
            "clicks": self.clicks,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "last_accessed": self.last_accessed.isoformat() if self.last_accessed else None,
        }
    
    @classmethod
    def from_record(cls, data: Mapping[str, Any]) -> "URLMapping":
        """Create from a dict or database record."""
        created_at = data["created_at"]
        if not isinstance(created_at, datetime):
            created_at = datetime.fromisoformat(created_at)
        last_accessed = data.get("last_accessed")
        if last_accessed is not None and not isinstance(last_accessed, datetime):
            last_accessed = datetime.fromisoformat(last_accessed)
        return cls(
            short_code=data["short_code"],
            original_url=data["original_url"],
            created_at=_as_utc(created_at),
            clicks=int(data.get("clicks") or 0),
            last_accessed=_as_utc(last_accessed),
        )
