"""
Catalog layer: upstream response transformation for search and lookup.
"""

from .fields import MarkerNotFoundError, value_between
from .lookup import parse_lookup_response
from .models import (
    NormalizedProduct,
    NormalizedSeller,
    ProductDetail,
    ProductNotFound,
    SearchResult,
)
from .search import parse_search_response
from .service import CatalogService

__all__ = [
    "CatalogService",
    "MarkerNotFoundError",
    "NormalizedProduct",
    "NormalizedSeller",
    "ProductDetail",
    "ProductNotFound",
    "SearchResult",
    "parse_lookup_response",
    "parse_search_response",
    "value_between",
]
