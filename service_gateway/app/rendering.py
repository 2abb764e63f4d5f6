"""
Response rendering for the negotiated representations.
"""

from __future__ import annotations

import os
from typing import Any, Dict, Sequence, Tuple

from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse, Response

from service_gateway.app.negotiation import APPLICATION_JSON, TEXT_HTML

TEMPLATE_DIR = os.path.join(os.path.dirname(__file__), "templates")

Substitutions = Sequence[Tuple[str, str]]


def substitute(template: str, substitutions: Substitutions) -> str:
    """Apply literal placeholder replacements left to right.

    Values are inserted verbatim; no HTML escaping is performed.
    """
    for placeholder, value in substitutions:
        template = template.replace(placeholder, value)
    return template


class TemplateStore:
    """Loads HTML templates from a directory, caching their text."""

    def __init__(self, template_dir: str = TEMPLATE_DIR) -> None:
        self.template_dir = template_dir
        self._cache: Dict[str, str] = {}

    def load(self, name: str) -> str:
        if name not in self._cache:
            with open(os.path.join(self.template_dir, name), encoding="utf-8") as handle:
                self._cache[name] = handle.read()
        return self._cache[name]

    def render(self, name: str, substitutions: Substitutions = ()) -> bytes:
        return substitute(self.load(name), substitutions).strip().encode("utf-8")


def text_response(body: str, status_code: int = 200) -> Response:
    return PlainTextResponse(body.strip(), status_code=status_code)


def html_response(body: bytes, status_code: int = 200) -> Response:
    return HTMLResponse(body, status_code=status_code)


def json_response(payload: Dict[str, Any], status_code: int = 200) -> Response:
    return JSONResponse(payload, status_code=status_code)


def negotiated_response(
    representation: str,
    *,
    text: str,
    payload: Dict[str, Any],
    templates: TemplateStore,
    template: str,
    substitutions: Substitutions = (),
    status_code: int = 200,
) -> Response:
    """Render one of the three page representations."""
    if representation == TEXT_HTML:
        return html_response(templates.render(template, substitutions), status_code)
    if representation == APPLICATION_JSON:
        return json_response(payload, status_code)
    return text_response(text, status_code)


def empty_response(status_code: int = 200) -> Response:
    return Response(content=b"", status_code=status_code)
