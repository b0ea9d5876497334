"""URL validation and sanitization for sales-page fetches.

Sales pages can live on any domain, so there is no allowlist. We only
refuse URLs that can't be fetched over HTTP(S) or whose host is literally
local: localhost names and private, loopback or link-local IP addresses.
Hostnames are not resolved, so a public name pointing at a private address
is not caught here. The fetcher validates every redirect target as well.
"""

import ipaddress
import re
from urllib.parse import urlparse

__all__ = [
    "validate_url",
    "sanitize_url",
    "is_safe_url",
    "URLValidationError",
    "DANGEROUS_SCHEMES",
]


class URLValidationError(Exception):
    """Raised when URL validation fails."""
    pass


# Dangerous URL schemes to reject
DANGEROUS_SCHEMES = {"javascript", "data", "vbscript", "file"}

_LOCAL_HOSTNAMES = {"localhost", "localhost.localdomain"}


def sanitize_url(url: str) -> str:
    """Sanitize a URL by stripping whitespace and normalizing.

    Args:
        url: Raw URL string

    Returns:
        Sanitized URL string
    """
    if not url:
        return ""

    # Strip whitespace and control characters
    url = url.strip()
    url = re.sub(r"[\x00-\x1f\x7f-\x9f]", "", url)

    # Remove any null bytes or other injection attempts
    url = url.replace("\x00", "").replace("%00", "")

    return url


def _is_private_host(host: str) -> bool:
    """Localhost names and private IP literals; no DNS lookup."""
    if host in _LOCAL_HOSTNAMES:
        return True
    try:
        address = ipaddress.ip_address(host.strip("[]"))
    except ValueError:
        return False
    return address.is_private or address.is_loopback or address.is_link_local


def validate_url(url: str, allow_private: bool = False) -> str:
    """Validate a URL before fetching it.

    Args:
        url: URL to validate
        allow_private: Accept loopback/private hosts (local testing only)

    Returns:
        Sanitized URL

    Raises:
        URLValidationError: If URL can't be fetched safely
    """
    if not url:
        raise URLValidationError("URL is empty")

    url = sanitize_url(url)

    try:
        parsed = urlparse(url)
    except ValueError as e:
        raise URLValidationError(f"Failed to parse URL: {e}") from e

    scheme = parsed.scheme.lower()
    if scheme in DANGEROUS_SCHEMES:
        raise URLValidationError(f"Dangerous URL scheme: {scheme}")

    if scheme not in ("http", "https"):
        raise URLValidationError(f"Invalid URL scheme: {scheme or '(none)'}")

    host = (parsed.hostname or "").lower()
    if not host:
        raise URLValidationError("URL has no domain")

    if not allow_private and _is_private_host(host):
        raise URLValidationError(f"URL points to a private host: {host}")

    return url


def is_safe_url(url: str) -> bool:
    """Check if a URL is safe without raising exceptions."""
    try:
        validate_url(url)
        return True
    except URLValidationError:
        return False
