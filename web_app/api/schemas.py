"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime

from shortlinks.storage.models import URLMapping


class ShortenRequest(BaseModel):
    """Request to shorten a URL.
    
    URL shape is checked by the registry so that every malformed URL is
    reported the same way (400 with an error message).
    """
    
    url: str = Field(..., description="The http(s) URL to shorten")
    custom_code: Optional[str] = Field(None, description="Optional custom short code")
    
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "url": "https://example.com/very/long/path/to/resource",
                    "custom_code": None
                },
                {
                    "url": "https://github.com/user/repo",
                    "custom_code": "myrepo"
                }
            ]
        }
    }


class ShortenResponse(BaseModel):
    """Response after shortening a URL."""
    
    short_code: str = Field(..., description="The short code")
    short_url: str = Field(..., description="The complete short URL")
    original_url: str = Field(..., description="The original long URL")
    created_at: datetime = Field(..., description="Creation timestamp")
    
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "short_code": "Ab12Cd",
                    "short_url": "https://short.link/Ab12Cd",
                    "original_url": "https://example.com/very/long/path",
                    "created_at": "2024-01-01T12:00:00Z"
                }
            ]
        }
    }


class URLStatsResponse(BaseModel):
    """Click statistics for one short code."""
    
    short_code: str
    original_url: str
    clicks: int
    created_at: datetime
    last_accessed: Optional[datetime] = None
    
    @classmethod
    def from_mapping(cls, mapping: URLMapping) -> "URLStatsResponse":
        return cls(
            short_code=mapping.short_code,
            original_url=mapping.original_url,
            clicks=mapping.clicks,
            created_at=mapping.created_at,
            last_accessed=mapping.last_accessed,
        )


class RecentURLsResponse(BaseModel):
    """Recently created mappings."""
    
    count: int
    urls: List[URLStatsResponse]


class HealthResponse(BaseModel):
    """Health check response."""
    
    status: str = Field(..., description="Overall status")
    database: str = Field(..., description="Database status")
    analytics: str = Field(..., description="Analytics sink status")
    timestamp: datetime = Field(..., description="Check timestamp")


class ErrorResponse(BaseModel):
    """Error response."""
    
    error: str = Field(..., description="Error message")


class StatisticsResponse(BaseModel):
    """Service-wide statistics."""
    
    total_urls: int
    total_clicks: int
    database: str
    analytics_enabled: bool
    custom_codes_enabled: bool
    dedupe_urls: bool
