"""
Tests for search response transformation.
"""

import json

import pytest

from service_gateway.app.catalog import parse_search_response
from service_gateway.app.catalog.search import product_id_from_url, seller_id_from_url
from shared.errors import ProductIdParseError, UpstreamSchemaError


def _products(document):
    return document[0]["data"]["ace_search_product_v4"]["data"]["products"]


class TestParseSearchResponse:
    """Test cases for parse_search_response."""

    def test_two_products_in_upstream_order(self, search_body):
        result = parse_search_response(search_body)

        assert result.keyword == "shoes"
        assert result.suggestion == "sepatu"
        assert [product.id for product in result.products] == ["111", "222"]

    def test_normalized_payload(self, search_body):
        payload = parse_search_response(search_body).to_dict()

        assert payload["success"] is True
        assert len(payload["results"]) == 2
        first = payload["results"][0]
        assert first == {
            "seller": {
                "name": "Shop A",
                "id": "shopA",
                "url": "https://www.tokopedia.com/shopA",
                "city": "Jakarta Barat",
                "isOfficial": True,
                "hasPowerBadge": False,
            },
            "name": "Running Shoe Lite",
            "url": "https://www.tokopedia.com/shopA/111?extra=1",
            "price": "Rp150.000",
            "thumbnail": "https://images.tokopedia.net/img/shopA/111.jpg",
            "category": "Sepatu Lari",
            "id": "111",
        }
        assert payload["results"][1]["seller"]["hasPowerBadge"] is True

    def test_empty_product_list(self, search_document):
        _products(search_document).clear()
        result = parse_search_response(json.dumps(search_document))
        assert result.products == ()
        assert result.to_dict()["results"] == []

    def test_unparseable_product_url_fails_whole_search(self, search_document):
        _products(search_document)[1]["url"] = "https://www.tokopedia.com/shopB/222"

        with pytest.raises(ProductIdParseError):
            parse_search_response(json.dumps(search_document))

    @pytest.mark.parametrize(
        "field",
        ["name", "url", "price", "imageUrl", "categoryName"],
    )
    def test_missing_product_field(self, search_document, field):
        del _products(search_document)[0][field]

        with pytest.raises(UpstreamSchemaError) as exc_info:
            parse_search_response(json.dumps(search_document))
        assert field in exc_info.value.details["path"]

    @pytest.mark.parametrize("field", ["name", "url", "city", "isOfficial", "isPowerBadge"])
    def test_missing_seller_field(self, search_document, field):
        del _products(search_document)[1]["shop"][field]

        with pytest.raises(UpstreamSchemaError) as exc_info:
            parse_search_response(json.dumps(search_document))
        assert exc_info.value.details["path"].endswith(f"products[1].shop.{field}")

    def test_mistyped_official_flag(self, search_document):
        _products(search_document)[0]["shop"]["isOfficial"] = "yes"

        with pytest.raises(UpstreamSchemaError):
            parse_search_response(json.dumps(search_document))

    def test_missing_suggestion(self, search_document):
        del search_document[0]["data"]["ace_search_product_v4"]["data"]["suggestion"]

        with pytest.raises(UpstreamSchemaError):
            parse_search_response(json.dumps(search_document))

    def test_non_json_body(self):
        with pytest.raises(UpstreamSchemaError):
            parse_search_response("upstream connect error")


class TestIdentifiers:
    """Test cases for seller and product id derivation."""

    def test_seller_id_strips_storefront_prefix(self):
        assert seller_id_from_url("https://www.tokopedia.com/shopA") == "shopA"

    def test_seller_id_without_prefix_is_unchanged(self):
        assert seller_id_from_url("https://tokopedia.link/shopA") == "https://tokopedia.link/shopA"

    def test_product_id(self):
        assert product_id_from_url("https://www.tokopedia.com/shopB/222?x=2", "shopB") == "222"

    def test_product_id_requires_query_string(self):
        with pytest.raises(ProductIdParseError) as exc_info:
            product_id_from_url("https://www.tokopedia.com/shopB/222", "shopB")
        assert exc_info.value.details["seller_id"] == "shopB"
