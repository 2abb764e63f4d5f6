"""
Async client for the storefront provider's GraphQL endpoint.
"""

from __future__ import annotations

import asyncio
import time
from typing import Any, Dict, Optional

import httpx

from shared.errors import UpstreamTimeoutError, UpstreamTransportError
from shared.logging import bind_request_context, get_logger
from shared.metrics import MetricsCollector


class UpstreamClient:
    """Sends one POST per logical query and hands back the raw body text.

    A single instance is shared by every request; it holds immutable
    settings and a pooled ``httpx.AsyncClient``.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 5.0,
        user_agent: str = "PostmanRuntime/7.32.3",
        metrics: Optional[MetricsCollector] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.metrics = metrics
        self.logger = get_logger("gateway.upstream")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            headers={
                "Content-Type": "application/json",
                "User-Agent": user_agent,
            },
            transport=transport,
        )

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def post(
        self,
        operation: str,
        payload: Any,
        *,
        headers: Optional[Dict[str, str]] = None,
    ) -> str:
        """POST ``payload`` to the operation endpoint and return the body text.

        The HTTP status is not interpreted: the provider reports business
        errors inside the body, which the transformers inspect.

        ``timeout`` bounds the whole exchange, body included, on top of
        httpx's per-phase limits.
        """
        bind_request_context(upstream_operation=operation)
        start = time.time()
        outcome = "ok"
        try:
            response = await asyncio.wait_for(
                self._client.post(f"/{operation}", json=payload, headers=headers),
                self.timeout,
            )
        except (httpx.TimeoutException, asyncio.TimeoutError) as exc:
            outcome = "timeout"
            self.logger.error("Upstream request timed out", operation=operation, timeout=self.timeout)
            raise UpstreamTimeoutError(
                f"Upstream {operation} timed out after {self.timeout}s",
                details={"operation": operation},
            ) from exc
        except httpx.HTTPError as exc:
            outcome = "transport_error"
            self.logger.error("Upstream request failed", operation=operation, error=str(exc))
            raise UpstreamTransportError(
                f"Upstream {operation} request failed: {exc.__class__.__name__}",
                details={"operation": operation, "error": str(exc)},
            ) from exc
        finally:
            if self.metrics is not None:
                self.metrics.record_upstream_call(operation, outcome, time.time() - start)

        if response.status_code >= 400:
            self.logger.warning(
                "Upstream returned error status",
                operation=operation,
                status_code=response.status_code,
            )
        else:
            self.logger.debug("Upstream response received", operation=operation, status_code=response.status_code)
        return response.text
