"""
Path-based dispatch for the gateway.

Routes are resolved from ``(method, path)`` alone so the decision can be
tested without an ASGI application.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple
from urllib.parse import unquote

HEAD = "head"
INFO = "info"
SEARCH = "search"
LOOKUP = "lookup"
NOT_FOUND = "not_found"


@dataclass(frozen=True)
class RouteMatch:
    """Outcome of routing a single request."""

    kind: str
    method: str
    segments: Tuple[str, ...] = ()
    params: Dict[str, str] = field(default_factory=dict)

    @property
    def segment_count(self) -> int:
        return len(self.segments)


def split_path(path: str) -> Tuple[str, ...]:
    """Split a request path into its non-empty, percent-decoded segments."""
    return tuple(unquote(segment) for segment in path.split("/") if segment)


def route(method: str, path: str) -> RouteMatch:
    """Resolve the handler for a request."""
    method = method.upper()

    if method == "HEAD":
        return RouteMatch(HEAD, method)

    if method == "GET" and path == "/":
        return RouteMatch(INFO, method)

    segments = split_path(path)

    if len(segments) >= 2:
        key = (method, len(segments), segments[0])
        if key == ("GET", 2, "search"):
            return RouteMatch(SEARCH, method, segments, {"query": segments[1]})
        if key == ("GET", 3, "lookup"):
            return RouteMatch(
                LOOKUP,
                method,
                segments,
                {"seller": segments[1], "product": segments[2]},
            )

    return RouteMatch(NOT_FOUND, method, segments)
