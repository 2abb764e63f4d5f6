"""
Shared error handling for the Storefront Gateway.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response format."""

    success: bool = False
    reason: str


class GatewayException(Exception):
    """Base exception for gateway failures rendered as classified responses."""

    status_code: int = 500

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(reason=self.message)


class UpstreamTransportError(GatewayException):
    """Network or HTTP-level failure talking to the upstream provider."""

    status_code = 502

    def __init__(self, message: str = "Upstream request failed", details: Optional[Dict[str, Any]] = None):
        super().__init__("UPSTREAM_TRANSPORT_ERROR", message, details)


class UpstreamTimeoutError(UpstreamTransportError):
    """The upstream provider did not answer within the configured timeout."""

    status_code = 504

    def __init__(self, message: str = "Upstream request timed out", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
        self.code = "UPSTREAM_TIMEOUT"


class UpstreamSchemaError(GatewayException):
    """Upstream body is not JSON or lacks an expected field."""

    status_code = 502

    def __init__(self, message: str = "Unexpected upstream response", details: Optional[Dict[str, Any]] = None):
        super().__init__("UPSTREAM_SCHEMA_ERROR", message, details)


class ProductIdParseError(UpstreamSchemaError):
    """A product identifier could not be derived from its URL."""

    def __init__(self, message: str = "Unable to derive product id", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
        self.code = "PRODUCT_ID_PARSE_ERROR"


class NumericParseError(GatewayException):
    """A numeric-looking upstream field failed to parse."""

    status_code = 502

    def __init__(self, message: str = "Invalid numeric value", details: Optional[Dict[str, Any]] = None):
        super().__init__("NUMERIC_PARSE_ERROR", message, details)
