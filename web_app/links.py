"""Request-derived helpers shared by API and web routes."""

from typing import Dict, Optional

from fastapi import Request

from shortlinks.common.headers import build_base_url, get_forwarded_path_prefix
from shortlinks.common.url_builder import build_short_url


def path_prefix_from_request(request: Request, config) -> str:
    """Path prefix from X-Forwarded-Prefix (proxy) or config. Normalized: leading slash, no trailing."""
    prefix = get_forwarded_path_prefix(request.headers)
    if prefix:
        return prefix
    p = (getattr(config, "path_prefix", "") or "").strip().strip("/")
    return "/" + p if p else ""


def short_url_for(request: Request, short_code: str) -> str:
    """Public short URL as seen by the client that made this request."""
    config = request.app.state.config
    base_url = build_base_url(
        headers=request.headers,
        fallback_base_url=config.base_url,
        request_scheme=request.url.scheme,
        request_host=request.headers.get("host"),
    )
    return build_short_url(
        short_code=short_code,
        base_url=base_url,
        path_prefix=path_prefix_from_request(request, config),
    )


def visitor_from_request(request: Request) -> Dict[str, Optional[str]]:
    """Visitor details attached to click analytics events."""
    client_ip = getattr(request.state, "client_ip", None)
    if client_ip is None and request.client:
        client_ip = request.client.host
    return {
        "client_ip": client_ip,
        "user_agent": request.headers.get("user-agent"),
        "referrer": request.headers.get("referer"),
    }
