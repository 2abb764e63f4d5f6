"""
Storefront Gateway service.

Re-exposes provider search and product lookups as a small JSON surface and
serves negotiated info and 404 pages. Every path not claimed by the shared
operational routes goes through :func:`service_gateway.app.routing.route`.
"""

import asyncio
from typing import Any, Awaitable, Dict, Optional

from fastapi import Request, Response

from shared.base_service import BaseService
from shared.config import ServiceConfig
from shared.logging import bind_request_context

from service_gateway.app import routing
from service_gateway.app.adapters.upstream_client import UpstreamClient
from service_gateway.app.catalog import CatalogService
from service_gateway.app.negotiation import PAGE_REPRESENTATIONS, negotiate
from service_gateway.app.rendering import (
    TemplateStore,
    empty_response,
    json_response,
    negotiated_response,
)

NOT_FOUND_TEXT = "404 Not found"

# Status logged when the client went away before a response was produced
CLIENT_CLOSED_REQUEST = 499

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


class GatewayService(BaseService):
    """API Gateway service implementation."""

    disconnect_poll_interval = 0.25

    def __init__(
        self,
        config: Optional[ServiceConfig] = None,
        *,
        upstream: Optional[UpstreamClient] = None,
        templates: Optional[TemplateStore] = None,
    ):
        super().__init__("gateway", config)
        self.app_name = self.config.app_name
        self.upstream = upstream or UpstreamClient(
            self.config.upstream_url,
            timeout=self.config.upstream_timeout_seconds,
            user_agent=self.config.upstream_user_agent,
            metrics=self.metrics,
        )
        self.catalog = CatalogService(
            self.upstream,
            strict_product_content=self.config.strict_product_content,
        )
        self.templates = templates or TemplateStore()

        @self.app.on_event("startup")
        async def _startup():
            self.logger.info(self.app_description)
            self.logger.info(
                "Server started",
                host=self.config.host,
                port=self.config.port,
                upstream=self.config.upstream_url,
            )

        @self.app.on_event("shutdown")
        async def _shutdown():
            await self.upstream.close()

        self._setup_gateway_routes()

        # Expose service instance via app state for introspection/testing
        self.app.state.gateway_service = self

    @property
    def app_description(self) -> str:
        return f"{self.app_name} (build {self.build_id})"

    def _setup_gateway_routes(self):
        """Register the catch-all route; it must come after the shared routes."""

        @self.app.api_route("/{path:path}", methods=ALL_METHODS, include_in_schema=False)
        async def dispatch(request: Request, path: str):
            # Route on the undecoded path so encoded slashes stay inside a segment
            raw_path = request.scope.get("raw_path")
            request_path = raw_path.decode("latin-1").split("?", 1)[0] if raw_path else request.url.path
            match = routing.route(request.method, request_path)
            request.state.route_kind = match.kind
            bind_request_context(route_kind=match.kind)
            accept = request.headers.get("accept")

            if match.kind == routing.HEAD:
                return empty_response()

            if match.kind == routing.INFO:
                return self._render_info(accept)

            if match.kind == routing.SEARCH:
                return await self._run_until_disconnect(
                    request, self._search(match.params["query"])
                )

            if match.kind == routing.LOOKUP:
                return await self._run_until_disconnect(
                    request, self._lookup(match.params["seller"], match.params["product"])
                )

            return self._render_not_found(accept)

    async def _search(self, query: str) -> Response:
        result = await self.catalog.search(query)
        return json_response(result.to_dict())

    async def _lookup(self, seller: str, product: str) -> Response:
        # A missing product is a business outcome and still answers 200
        outcome = await self.catalog.lookup(seller, product)
        return json_response(outcome.to_dict())

    def _render_info(self, accept: Optional[str]) -> Response:
        representation = negotiate(accept, PAGE_REPRESENTATIONS)
        payload: Dict[str, Any] = {
            "name": self.app_name,
            "build": self.build_id,
            "success": True,
        }
        return negotiated_response(
            representation,
            text=self.app_description,
            payload=payload,
            templates=self.templates,
            template="version.html",
            substitutions=[("$title", self.app_name), ("$build", self.build_id)],
        )

    def _render_not_found(self, accept: Optional[str]) -> Response:
        representation = negotiate(accept, PAGE_REPRESENTATIONS)
        return negotiated_response(
            representation,
            text=NOT_FOUND_TEXT,
            payload={"reason": NOT_FOUND_TEXT, "success": False},
            templates=self.templates,
            template="404.html",
            substitutions=[("$title", self.app_name)],
            status_code=404,
        )

    async def _run_until_disconnect(self, request: Request, work: Awaitable[Response]) -> Response:
        """Await ``work`` unless the client disconnects first, then abandon it."""
        task = asyncio.ensure_future(work)
        watcher = asyncio.ensure_future(self._wait_for_disconnect(request))
        try:
            done, _ = await asyncio.wait({task, watcher}, return_when=asyncio.FIRST_COMPLETED)
            watcher_error = watcher.exception() if watcher in done else None
            if watcher_error is not None:
                # Connection state is unknown, so keep serving the request
                self.logger.warning(
                    "Disconnect watcher failed",
                    path=request.url.path,
                    error=str(watcher_error),
                )
                return await task
        finally:
            watcher.cancel()
            if not task.done():
                task.cancel()

        if task not in done:
            self.logger.info("Client disconnected, request abandoned", path=request.url.path)
            return empty_response(CLIENT_CLOSED_REQUEST)
        return task.result()

    async def _wait_for_disconnect(self, request: Request) -> None:
        while not await request.is_disconnected():
            await asyncio.sleep(self.disconnect_poll_interval)


def create_app(config: Optional[ServiceConfig] = None, **kwargs):
    """Create FastAPI application."""
    service = GatewayService(config, **kwargs)
    return service.app


def main():
    GatewayService().run()


if __name__ == "__main__":
    main()
