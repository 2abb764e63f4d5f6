"""
Search response transformation.
"""

from __future__ import annotations

from typing import Any, Tuple

from shared.errors import ProductIdParseError

from .fields import (
    MarkerNotFoundError,
    PathPart,
    decode_json,
    lookup,
    require_bool,
    require_list,
    require_str,
    value_between,
)
from .models import NormalizedProduct, NormalizedSeller, SearchResult

STOREFRONT_PREFIX = "https://www.tokopedia.com/"

_DATA_PATH: Tuple[PathPart, ...] = (0, "data", "ace_search_product_v4", "data")


def seller_id_from_url(url: str) -> str:
    """Strip the storefront prefix, leaving the shop handle."""
    if url.startswith(STOREFRONT_PREFIX):
        return url[len(STOREFRONT_PREFIX):]
    return url


def product_id_from_url(url: str, seller_id: str) -> str:
    """Take the path segment after ``<seller_id>/`` up to the query string."""
    try:
        return value_between(url, f"{seller_id}/", "?")
    except MarkerNotFoundError as exc:
        raise ProductIdParseError(
            f"Unable to derive product id from '{url}'",
            details={"url": url, "seller_id": seller_id, "error": str(exc)},
        ) from exc


def parse_product(entry: Any, at: Tuple[PathPart, ...] = ()) -> NormalizedProduct:
    """Normalize a single product entry of a search response."""
    seller_url = require_str(entry, "shop", "url", at=at)
    seller = NormalizedSeller(
        name=require_str(entry, "shop", "name", at=at),
        id=seller_id_from_url(seller_url),
        url=seller_url,
        city=require_str(entry, "shop", "city", at=at),
        is_official=require_bool(entry, "shop", "isOfficial", at=at),
        has_power_badge=require_bool(entry, "shop", "isPowerBadge", at=at),
    )

    url = require_str(entry, "url", at=at)
    return NormalizedProduct(
        id=product_id_from_url(url, seller.id),
        name=require_str(entry, "name", at=at),
        url=url,
        price=require_str(entry, "price", at=at),
        thumbnail=require_str(entry, "imageUrl", at=at),
        category=require_str(entry, "categoryName", at=at),
        seller=seller,
    )


def parse_search_response(text: str) -> SearchResult:
    """Transform the provider's search body; any bad product fails the whole result."""
    document = decode_json(text)
    data = lookup(document, *_DATA_PATH)

    keyword = require_str(data, "suggestion", "currentKeyword", at=_DATA_PATH)
    suggestion = require_str(data, "suggestion", "suggestion", at=_DATA_PATH)
    entries = require_list(data, "products", at=_DATA_PATH)

    products = tuple(
        parse_product(entry, at=_DATA_PATH + ("products", index))
        for index, entry in enumerate(entries)
    )
    return SearchResult(keyword=keyword, suggestion=suggestion, products=products)
