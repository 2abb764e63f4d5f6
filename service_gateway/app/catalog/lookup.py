"""
Product lookup response transformation.
"""

from __future__ import annotations

from typing import Tuple, Union

from shared.errors import UpstreamSchemaError
from shared.logging import get_logger

from .fields import PathPart, decode_json, format_path, lookup, parse_uint, require_list, require_str, require_uint
from .models import ProductDetail, ProductNotFound

NOT_FOUND_SENTINEL = "product: not found"
DESCRIPTION_TITLE = "Deskripsi"

PRODUCT_CONTENT = "product_content"
PRODUCT_DETAIL = "product_detail"

_LAYOUT_PATH: Tuple[PathPart, ...] = (0, "data", "pdpGetLayout")

logger = get_logger("gateway.catalog.lookup")


def parse_lookup_response(text: str, *, strict_product_content: bool = False) -> Union[ProductDetail, ProductNotFound]:
    """Transform the provider's product layout body.

    The not-found sentinel is matched on the raw text before any decoding.
    Title, price and stock come only from the ``product_content`` component;
    when it is absent they keep their empty defaults unless
    ``strict_product_content`` is set.
    """
    if NOT_FOUND_SENTINEL in text:
        return ProductNotFound()

    document = decode_json(text)
    layout = lookup(document, *_LAYOUT_PATH)
    components_path = _LAYOUT_PATH + ("components",)

    components = require_list(layout, "components", at=_LAYOUT_PATH)
    store_name = require_str(layout, "basicInfo", "shopName", at=_LAYOUT_PATH)
    original_url = require_str(layout, "basicInfo", "url", at=_LAYOUT_PATH)
    created_at = require_str(layout, "basicInfo", "createdAt", at=_LAYOUT_PATH)

    title = ""
    description = ""
    price = 0
    stock = "0"
    has_content = False

    for index, component in enumerate(components):
        at = components_path + (index,)
        name = require_str(component, "name", at=at)

        if name == PRODUCT_CONTENT:
            has_content = True
            title = require_str(component, "data", 0, "name", at=at)
            price = require_uint(component, "data", 0, "price", "value", at=at)
            stock = require_str(component, "data", 0, "stock", "value", at=at)

        elif name == PRODUCT_DETAIL:
            entries = require_list(component, "data", 0, "content", at=at)
            for position, entry in enumerate(entries):
                entry_at = at + ("data", 0, "content", position)
                if require_str(entry, "title", at=entry_at) == DESCRIPTION_TITLE:
                    description = require_str(entry, "subtitle", at=entry_at)

    if not has_content:
        if strict_product_content:
            raise UpstreamSchemaError(
                f"Upstream layout has no '{PRODUCT_CONTENT}' component",
                details={"path": format_path(components_path)},
            )
        logger.warning("Product layout without product_content component", url=original_url)

    return ProductDetail(
        title=title,
        description=description,
        price=price,
        stock=parse_uint(stock, "stock.value"),
        store_name=store_name,
        original_url=original_url,
        created_at=created_at,
    )
