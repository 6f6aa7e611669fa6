"""Validation utilities for short links."""

import ipaddress
import re
from urllib.parse import urlparse
from typing import Tuple


MAX_URL_LENGTH = 2048

# Paths served by the web app that a short code must never shadow.
RESERVED_CODES = frozenset({
    "api", "health", "admin", "static", "assets", "favicon", "favicon.ico",
    "robots", "robots.txt", "sitemap", "create", "delete", "list", "stats",
    "result", "docs", "redoc", "openapi.json",
})

_HOSTNAME_RE = re.compile(
    r"(?:[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?\.)+"
    r"(?:[a-z]{2,63}|xn--[a-z0-9-]{1,59})\.?",
    re.IGNORECASE,
)

_SHORT_CODE_RE = re.compile(r'[a-zA-Z0-9_-]+')


def _is_valid_host(host: str) -> bool:
    if host.lower() == "localhost":
        return True
    try:
        ipaddress.ip_address(host)
        return True
    except ValueError:
        pass
    # Dotted-quad lookalikes such as 999.1.1.1 are not domains either
    if re.fullmatch(r"[\d.]+", host):
        return False
    if not host.isascii():
        try:
            host = host.encode("idna").decode("ascii")
        except UnicodeError:
            return False
    return bool(_HOSTNAME_RE.fullmatch(host))


def is_valid_url(url: str) -> Tuple[bool, str]:
    """Validate a URL.
    
    Accepts http/https URLs whose host is a domain name, an IP address or
    ``localhost``, with an optional port, path, query and fragment.
    
    Args:
        url: The URL to validate
        
    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str):
        return False, "URL is required"
    
    if len(url) > MAX_URL_LENGTH:
        return False, f"URL is too long (max {MAX_URL_LENGTH} characters)"
    
    if url != url.strip() or any(c.isspace() for c in url):
        return False, "URL must not contain whitespace"
    
    try:
        result = urlparse(url)
        
        if result.scheme not in ["http", "https"]:
            return False, "URL must use http or https protocol"
        
        if not result.netloc or not result.hostname:
            return False, "URL must have a valid domain"
        
        # Raises ValueError for non-numeric or out-of-range ports
        result.port
        
    except ValueError as e:
        return False, f"Invalid URL format: {e}"
    
    if not _is_valid_host(result.hostname):
        return False, f"Invalid host: {result.hostname}"
    
    return True, ""


def is_valid_short_code(short_code: str, min_length: int = 4, max_length: int = 20) -> Tuple[bool, str]:
    """Validate a user-supplied short code.
    
    Args:
        short_code: The short code to validate
        min_length: Minimum length for short code
        max_length: Maximum length for short code
        
    Returns:
        Tuple of (is_valid, error_message)
    """
    if not short_code or not isinstance(short_code, str):
        return False, "Short code is required"
    
    if len(short_code) < min_length:
        return False, f"Short code must be at least {min_length} characters"
    
    if len(short_code) > max_length:
        return False, f"Short code must be at most {max_length} characters"
    
    if not _SHORT_CODE_RE.fullmatch(short_code):
        return False, "Short code can only contain letters, numbers, hyphens, and underscores"
    
    if is_reserved_code(short_code):
        return False, f"'{short_code}' is a reserved word and cannot be used"
    
    return True, ""


def is_reserved_code(short_code: str) -> bool:
    """True if the code collides with a route served by the web app."""
    return short_code.lower() in RESERVED_CODES
