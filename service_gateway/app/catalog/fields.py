"""
Checked access into decoded upstream JSON.

Every read either yields a value of the expected kind or raises
:class:`UpstreamSchemaError` naming the offending path, so a malformed
upstream document fails only the request that fetched it.
"""

from __future__ import annotations

import json
import re
from typing import Any, List, Sequence, Tuple, Union

from shared.errors import NumericParseError, UpstreamSchemaError

PathPart = Union[str, int]

_UNSIGNED = re.compile(r"\+?[0-9]+")


class MarkerNotFoundError(ValueError):
    """Raised by :func:`value_between` when nothing lies between the markers."""


def value_between(text: str, start: str, end: str) -> str:
    """Return the text strictly between the first ``start`` and the next ``end``.

    Raises :class:`MarkerNotFoundError` if either marker is missing or the
    enclosed text is empty.
    """
    _, found, rest = text.partition(start)
    if not found:
        raise MarkerNotFoundError(f"marker {start!r} not found")
    value, found, _ = rest.partition(end)
    if not found:
        raise MarkerNotFoundError(f"marker {end!r} not found after {start!r}")
    if not value:
        raise MarkerNotFoundError(f"nothing between {start!r} and {end!r}")
    return value


def format_path(parts: Sequence[PathPart]) -> str:
    """Render ``("data", "products", 0, "url")`` as ``data.products[0].url``."""
    rendered = ""
    for part in parts:
        if isinstance(part, int):
            rendered += f"[{part}]"
        elif rendered:
            rendered += f".{part}"
        else:
            rendered = part
    return rendered


def decode_json(text: str) -> Any:
    try:
        return json.loads(text)
    except ValueError as exc:
        raise UpstreamSchemaError(
            "Upstream response is not valid JSON",
            details={"error": str(exc), "body": text[:200]},
        ) from exc


def lookup(node: Any, *path: PathPart, at: Tuple[PathPart, ...] = ()) -> Any:
    """Walk ``path`` from ``node``; ``at`` is the location of ``node`` itself."""
    current = node
    for depth, part in enumerate(path):
        if isinstance(part, int):
            present = isinstance(current, list) and 0 <= part < len(current)
        else:
            present = isinstance(current, dict) and part in current
        if not present:
            location = format_path(at + path[: depth + 1])
            raise UpstreamSchemaError(
                f"Upstream response missing field '{location}'",
                details={"path": location},
            )
        current = current[part]
    return current


def _require(kind: str, check, node: Any, path: Tuple[PathPart, ...], at: Tuple[PathPart, ...]) -> Any:
    value = lookup(node, *path, at=at)
    if not check(value):
        location = format_path(at + path)
        raise UpstreamSchemaError(
            f"Upstream field '{location}' is not a {kind}",
            details={"path": location, "type": type(value).__name__},
        )
    return value


def require_str(node: Any, *path: PathPart, at: Tuple[PathPart, ...] = ()) -> str:
    return _require("string", lambda v: isinstance(v, str), node, path, at)


def require_bool(node: Any, *path: PathPart, at: Tuple[PathPart, ...] = ()) -> bool:
    return _require("boolean", lambda v: isinstance(v, bool), node, path, at)


def require_uint(node: Any, *path: PathPart, at: Tuple[PathPart, ...] = ()) -> int:
    # bool is an int subclass but never a valid number here
    return _require(
        "non-negative integer",
        lambda v: isinstance(v, int) and not isinstance(v, bool) and v >= 0,
        node,
        path,
        at,
    )


def require_list(node: Any, *path: PathPart, at: Tuple[PathPart, ...] = ()) -> List[Any]:
    return _require("list", lambda v: isinstance(v, list), node, path, at)


def parse_uint(text: str, field: str) -> int:
    """Parse a base-10 non-negative integer carried as a string."""
    if not _UNSIGNED.fullmatch(text):
        raise NumericParseError(
            f"Field '{field}' is not a non-negative integer: {text!r}",
            details={"field": field, "value": text},
        )
    return int(text)
