"""
URL Utilities

Helpers for validating page and image URLs and for picking outbound links.
"""

from typing import Iterable, List
from urllib.parse import urlparse

_ALLOWED_SCHEMES = frozenset({"http", "https"})


def is_valid_url(value) -> bool:
    """
    Check whether a value is an absolute http(s) URL.

    Never raises: malformed strings, relative paths, other schemes
    and non-string values all return False.
    """
    if not isinstance(value, str) or not value.strip():
        return False

    try:
        parsed = urlparse(value.strip())
        # Accessing .port validates the port component
        parsed.port
    except ValueError:
        return False

    if any(ch.isspace() for ch in parsed.netloc):
        return False

    return parsed.scheme.lower() in _ALLOWED_SCHEMES and bool(parsed.hostname)


def hostname_of(url: str) -> str:
    """Return the lowercase hostname of a URL ("" if it has none)."""
    return urlparse(url).hostname or ""


def filter_links(hrefs: Iterable) -> List[str]:
    """Keep resolved anchor hrefs that point to http(s) resources, in page order."""
    return [href for href in hrefs if isinstance(href, str) and href.startswith("http")]
