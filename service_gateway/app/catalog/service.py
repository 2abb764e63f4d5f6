"""
Catalog service: one upstream call per request, then transformation.
"""

from __future__ import annotations

from typing import Union

from shared.logging import get_logger

from service_gateway.app.adapters.queries import (
    LOOKUP_OPERATION,
    SEARCH_OPERATION,
    build_lookup_payload,
    build_search_payload,
)
from service_gateway.app.adapters.upstream_client import UpstreamClient

from .lookup import parse_lookup_response
from .models import ProductDetail, ProductNotFound, SearchResult
from .search import parse_search_response

LOOKUP_HEADERS = {"X-Tkpd-Akamai": "pdpGetLayout"}


class CatalogService:
    """Fetches and normalizes search results and product details."""

    def __init__(self, upstream: UpstreamClient, *, strict_product_content: bool = False) -> None:
        self.upstream = upstream
        self.strict_product_content = strict_product_content
        self.logger = get_logger("gateway.catalog")

    async def search(self, query: str) -> SearchResult:
        text = await self.upstream.post(SEARCH_OPERATION, build_search_payload(query))
        result = parse_search_response(text)
        self.logger.info("Search completed", query=query, results=len(result.products))
        return result

    async def lookup(self, seller: str, product: str) -> Union[ProductDetail, ProductNotFound]:
        text = await self.upstream.post(
            LOOKUP_OPERATION,
            build_lookup_payload(seller, product),
            headers=LOOKUP_HEADERS,
        )
        outcome = parse_lookup_response(text, strict_product_content=self.strict_product_content)
        if isinstance(outcome, ProductNotFound):
            self.logger.info("Product not found upstream", seller=seller, product=product)
        return outcome
