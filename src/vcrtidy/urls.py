"""
URL equivalence utilities.

Polling loops often change query parameters between requests (continuation
tokens, timestamps), so monitors compare endpoints by their base URL: the URL
with query and fragment removed and the path canonicalized. Header
Continuity Repair needs the stricter comparison of the full canonical URL.

Canonical form lower-cases the scheme and host and removes ``.`` and ``..``
path segments as described in RFC 3986 section 5.2.4.
"""

import logging
from urllib.parse import urlsplit, urlunsplit

logger = logging.getLogger(__name__)


def _remove_dot_segments(path: str) -> str:
    """Resolve ``.`` and ``..`` segments in a URL path."""
    if not path:
        return path

    segments = path.split("/")
    resolved = []
    for segment in segments:
        if segment == "..":
            # Never pop the empty leading segment of an absolute path
            if resolved and (len(resolved) > 1 or resolved[0] != ""):
                resolved.pop()
        elif segment != ".":
            resolved.append(segment)

    if segments[-1] in (".", ".."):
        resolved.append("")

    result = "/".join(resolved)
    if path.startswith("/") and not result.startswith("/"):
        result = "/" + result
    return result


def canonical_url(url: str) -> str:
    """
    Return the canonical string form of a URL, keeping query and fragment.

    Args:
        url: URL to canonicalize

    Returns:
        Canonical URL string

    Raises:
        ValueError: If the URL cannot be parsed
    """
    parts = urlsplit(url)
    return urlunsplit((
        parts.scheme.lower(),
        parts.netloc.lower(),
        _remove_dot_segments(parts.path),
        parts.query,
        parts.fragment,
    ))


def base_url(url: str) -> str:
    """
    Return the base URL: canonical form without query string or fragment.

    Args:
        url: URL to reduce

    Returns:
        Base URL string

    Raises:
        ValueError: If the URL cannot be parsed

    Examples:
        >>> base_url("https://Example.com/a/./b/../c?t=1#frag")
        'https://example.com/a/c'
    """
    parts = urlsplit(url)
    return urlunsplit((
        parts.scheme.lower(),
        parts.netloc.lower(),
        _remove_dot_segments(parts.path),
        "",
        "",
    ))


def same_base_url(left: str, right: str) -> bool:
    """
    Check whether two URLs address the same endpoint, ignoring query and fragment.

    An unparsable URL never matches anything.
    """
    try:
        return base_url(left) == base_url(right)
    except ValueError:
        logger.debug(f"Unparsable URL in base comparison: {left!r} vs {right!r}")
        return False


def same_url(left: str, right: str) -> bool:
    """
    Check whether two URLs are identical in canonical form, including query and fragment.

    An unparsable URL never matches anything.
    """
    try:
        return canonical_url(left) == canonical_url(right)
    except ValueError:
        logger.debug(f"Unparsable URL in exact comparison: {left!r} vs {right!r}")
        return False
