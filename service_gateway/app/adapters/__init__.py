"""
Adapters package for the Gateway Service.

Contains the HTTP client for the storefront provider and the GraphQL
documents it sends. Adapters encapsulate:

- Base URLs, headers and request shapes
- Timeouts on the shared connection pool
- Mapping transport failures to shared errors

Keep adapters thin and side-effect free outside of explicit calls.
"""

from .upstream_client import UpstreamClient

__all__ = [
    "UpstreamClient",
]
