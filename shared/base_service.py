"""
Base service class for Storefront Gateway services.
"""

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from typing import Iterable, Optional
import hashlib
import time
import sys
import os

from shared.config import ServiceConfig, get_config
from shared.logging import configure_logging, get_logger, set_request_id, clear_context
from shared.metrics import get_metrics_collector
from shared.errors import ErrorResponse, GatewayException


class BaseService:
    """Base service class with common functionality."""

    def __init__(self, service_name: str, config: Optional[ServiceConfig] = None):
        self.service_name = service_name
        self.config = config or get_config(service_name)
        self.port = self.config.port
        self.logger = get_logger(service_name)
        self.metrics = get_metrics_collector(service_name)
        self._start_time = time.time()

        # Configure logging
        configure_logging(service_name, self.config.log_level)

        self.build_id = self._resolve_build_id()

        # Create FastAPI app
        self.app = self._create_app()

        # Set up middleware
        self._setup_middleware()

        # Set up routes
        self._setup_routes()

    def _create_app(self) -> FastAPI:
        """Create FastAPI application."""
        return FastAPI(
            title=self.config.app_name,
            description=f"{self.config.app_name} - {self.service_name.title()} Service",
            version="1.0.0",
            docs_url="/docs" if self.config.env == "local" else None,
            redoc_url="/redoc" if self.config.env == "local" else None,
            openapi_url="/openapi.json" if self.config.env == "local" else None,
        )

    def _setup_middleware(self):
        """Set up middleware."""

        # Request timing middleware
        @self.app.middleware("http")
        async def add_request_timing(request: Request, call_next):
            request_id = set_request_id(request.headers.get("X-Request-ID"))
            start_time = time.time()

            try:
                try:
                    response = await call_next(request)
                except Exception as exc:
                    # Unclassified failures are answered here so they are timed and correlated
                    response = self._internal_error_response(request, exc)

                duration = time.time() - start_time
                # Handlers tag the matched route so metric labels stay bounded
                endpoint = getattr(request.state, "route_kind", request.url.path)

                self.metrics.record_http_request(
                    method=request.method,
                    endpoint=endpoint,
                    status_code=response.status_code,
                    duration=duration
                )

                self.logger.info(
                    "HTTP request",
                    method=request.method,
                    path=request.url.path,
                    status_code=response.status_code,
                    duration_ms=round(duration * 1000, 2)
                )

                response.headers["X-Request-ID"] = request_id
                return response
            finally:
                clear_context()

    def _internal_error_response(self, request: Request, exc: Exception) -> Response:
        """Render an unclassified exception as a 500 error payload."""
        self.logger.error("Unhandled exception", error=str(exc), path=request.url.path, exc_info=exc)
        self.metrics.record_error("INTERNAL_ERROR")
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(reason="Internal server error").model_dump()
        )

    def _setup_routes(self):
        """Set up common routes."""

        @self.app.get("/health")
        async def health_check():
            """Health check endpoint."""
            self.metrics.record_health_check("ok")
            return {
                "service": self.service_name,
                "status": "ok",
                "uptime_seconds": self._get_uptime(),
                "build": self.build_id,
            }

        @self.app.get("/metrics")
        async def metrics_endpoint():
            """Prometheus metrics endpoint."""
            return Response(
                content=generate_latest(self.metrics.registry),
                media_type=CONTENT_TYPE_LATEST
            )

        # Error handlers
        @self.app.exception_handler(GatewayException)
        async def gateway_exception_handler(request: Request, exc: GatewayException):
            """Render classified failures as an error payload."""
            self.logger.warning(
                "Classified gateway failure",
                code=exc.code,
                message=exc.message,
                details=exc.details,
                path=request.url.path,
            )
            self.metrics.record_error(exc.code)
            return JSONResponse(
                status_code=exc.status_code,
                content=exc.to_response().model_dump()
            )

        @self.app.exception_handler(Exception)
        async def general_exception_handler(request: Request, exc: Exception):
            """Handle failures raised outside the request middleware."""
            return self._internal_error_response(request, exc)

    def _source_dirs(self) -> Iterable[str]:
        """Directories whose Python sources identify the running build."""
        shared_dir = os.path.dirname(os.path.abspath(__file__))
        module = sys.modules.get(type(self).__module__)
        service_dir = os.path.dirname(os.path.abspath(module.__file__)) if module and getattr(module, "__file__", None) else None
        return [d for d in (shared_dir, service_dir) if d]

    def _resolve_build_id(self) -> str:
        """Explicit build id, else the git commit, else a digest of the sources."""
        if self.config.build_id:
            return self.config.build_id
        commit = os.getenv("GIT_COMMIT")
        if commit:
            return commit

        digest = hashlib.blake2b(digest_size=8)
        for directory in sorted(set(self._source_dirs())):
            for root, dirs, files in os.walk(directory):
                dirs[:] = sorted(d for d in dirs if d not in {"__pycache__", "tests"})
                for name in sorted(files):
                    if not name.endswith(".py"):
                        continue
                    path = os.path.join(root, name)
                    digest.update(os.path.relpath(path, directory).encode("utf-8"))
                    with open(path, "rb") as handle:
                        digest.update(handle.read())
        return digest.hexdigest()

    def _get_uptime(self) -> float:
        """Get service uptime in seconds."""
        return time.time() - self._start_time

    def run(self):
        """Run the service."""
        import uvicorn
        uvicorn.run(
            self.app,
            host=self.config.host,
            port=self.config.port,
            log_level=self.config.log_level.lower()
        )
