"""
Shared configuration management for the Storefront Gateway.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="GATEWAY_",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    env: str = Field(default="production")
    log_level: str = Field(default="info")


class ServiceConfig(BaseConfig):
    """Service-specific configuration."""

    service_name: str = "gateway"
    host: str = "0.0.0.0"
    port: int = 5000

    # Presentation
    app_name: str = Field(default="Tokopedia Client API")
    build_id: Optional[str] = Field(default=None)

    # Upstream provider
    upstream_url: str = Field(default="https://gql.tokopedia.com/graphql")
    upstream_user_agent: str = Field(default="PostmanRuntime/7.32.3")
    upstream_timeout_seconds: float = Field(default=5.0, gt=0)

    # Reject lookups whose layout carries no product_content component
    strict_product_content: bool = Field(default=False)


def get_config(service_name: str = "gateway", port: Optional[int] = None, **overrides) -> ServiceConfig:
    """Get configuration for a specific service."""
    if port is not None:
        overrides["port"] = port
    return ServiceConfig(service_name=service_name, **overrides)
