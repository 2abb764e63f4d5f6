"""
Accept header negotiation for the gateway's human-facing endpoints.

Preference is purely positional: the first media type in the client's
header that the endpoint supports wins. Quality parameters are dropped
along with every other parameter.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

TEXT_HTML = "text/html"
APPLICATION_JSON = "application/json"
TEXT_PLAIN = "text/plain"

PAGE_REPRESENTATIONS = (TEXT_HTML, APPLICATION_JSON)


def normalize_media_type(token: str) -> str:
    """Strip parameters and structured-syntax suffixes from one media range."""
    token = token.strip()
    token = token.split(";", 1)[0]
    token = token.split("+", 1)[0]
    return token.strip().lower()


def parse_accept(header: str) -> List[str]:
    """Return the client's media types in header order."""
    return [normalize_media_type(part) for part in header.split(",")]


def negotiate(
    accept_header: Optional[str],
    supported: Sequence[str] = PAGE_REPRESENTATIONS,
    default: str = TEXT_PLAIN,
) -> str:
    """Pick the representation for a response.

    Filters the client's preference list down to ``supported`` while keeping
    the client's order, then takes the first entry. Falls back to
    ``default`` when there is no header or no overlap.
    """
    if accept_header is None:
        return default

    for media_type in parse_accept(accept_header):
        if media_type in supported:
            return media_type
    return default
