"""
Normalized records produced from upstream catalog responses.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple

PRODUCT_NOT_FOUND_REASON = "Product not found"


@dataclass(frozen=True)
class NormalizedSeller:
    name: str
    id: str
    url: str
    city: str
    is_official: bool
    has_power_badge: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "id": self.id,
            "url": self.url,
            "city": self.city,
            "isOfficial": self.is_official,
            "hasPowerBadge": self.has_power_badge,
        }


@dataclass(frozen=True)
class NormalizedProduct:
    id: str
    name: str
    url: str
    price: str
    thumbnail: str
    category: str
    seller: NormalizedSeller

    def to_dict(self) -> Dict[str, Any]:
        return {
            "seller": self.seller.to_dict(),
            "name": self.name,
            "url": self.url,
            "price": self.price,
            "thumbnail": self.thumbnail,
            "category": self.category,
            "id": self.id,
        }


@dataclass(frozen=True)
class SearchResult:
    """Search outcome; products keep the provider's order."""

    keyword: str
    suggestion: str
    products: Tuple[NormalizedProduct, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": True,
            "keyword": self.keyword,
            "suggestion": self.suggestion,
            "results": [product.to_dict() for product in self.products],
        }


@dataclass(frozen=True)
class ProductDetail:
    title: str
    description: str
    price: int
    stock: int
    store_name: str
    original_url: str
    created_at: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": True,
            "title": self.title,
            "description": self.description,
            "price": self.price,
            "stock": self.stock,
            "storeName": self.store_name,
            "originalUrl": self.original_url,
            "createdAt": self.created_at,
        }


@dataclass(frozen=True)
class ProductNotFound:
    """Business-level miss reported by the provider; not a server fault."""

    reason: str = PRODUCT_NOT_FOUND_REASON

    def to_dict(self) -> Dict[str, Any]:
        return {"success": False, "reason": self.reason}
