"""API routes implementation."""

from fastapi import APIRouter, HTTPException, Query, Request, Response, status
from datetime import datetime, timezone

from .schemas import (
    ShortenRequest,
    ShortenResponse,
    URLStatsResponse,
    RecentURLsResponse,
    HealthResponse,
    ErrorResponse,
    StatisticsResponse,
)
from shortlinks.errors import (
    CodeGenerationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from ..links import short_url_for

router = APIRouter()


@router.post(
    "/shorten",
    response_model=ShortenResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        200: {"model": ShortenResponse, "description": "URL was already shortened"},
        400: {"model": ErrorResponse, "description": "Invalid request"},
        409: {"model": ErrorResponse, "description": "Short code already exists"},
        503: {"model": ErrorResponse, "description": "No free short code available"},
    },
    summary="Create short URL",
    description="Create a shortened URL, or return the existing one for a URL seen before.",
)
async def shorten_url(request: Request, response: Response, body: ShortenRequest):
    """Create a shortened URL."""
    registry = request.app.state.registry
    
    try:
        mapping, created = await registry.create(
            body.url,
            custom_code=body.custom_code,
        )
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except ConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except CodeGenerationError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    
    if not created:
        response.status_code = status.HTTP_200_OK
    
    return ShortenResponse(
        short_code=mapping.short_code,
        short_url=short_url_for(request, mapping.short_code),
        original_url=mapping.original_url,
        created_at=mapping.created_at,
    )


@router.get(
    "/stats/{short_code}",
    response_model=URLStatsResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Short code not found"},
    },
    summary="Get click statistics",
    description="Get the target URL, click count and timestamps of a short code. Does not count as a click.",
)
async def get_url_stats(request: Request, short_code: str):
    """Get statistics for one short code."""
    registry = request.app.state.registry
    
    try:
        mapping = await registry.get_stats(short_code)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    
    return URLStatsResponse.from_mapping(mapping)


@router.get(
    "/stats",
    response_model=StatisticsResponse,
    summary="Get service statistics",
    description="Get service-wide totals.",
)
async def get_statistics(request: Request):
    """Get service statistics."""
    registry = request.app.state.registry
    
    stats = await registry.get_statistics()
    
    return StatisticsResponse(**stats)


@router.get(
    "/urls",
    response_model=RecentURLsResponse,
    summary="List recent URLs",
    description="List the most recently created short URLs, newest first.",
)
async def list_recent_urls(
    request: Request,
    limit: int = Query(20, ge=1, le=500, description="Maximum number to return"),
):
    """List recently created short URLs."""
    registry = request.app.state.registry
    
    mappings = await registry.list_recent(limit)
    
    return RecentURLsResponse(
        count=len(mappings),
        urls=[URLStatsResponse.from_mapping(m) for m in mappings],
    )


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check if the service is healthy.",
)
async def health_check(request: Request, response: Response):
    """Health check endpoint for load balancers and monitoring."""
    registry = request.app.state.registry
    
    health = await registry.health_check()
    
    if not health["overall"]:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    
    return HealthResponse(
        status="healthy" if health["overall"] else "unhealthy",
        database="healthy" if health["database"] else "unhealthy",
        analytics="healthy" if health["analytics"] else "unhealthy",
        timestamp=datetime.now(timezone.utc),
    )
