"""
Unit tests for checked upstream field access.
"""

import pytest

from service_gateway.app.catalog.fields import (
    MarkerNotFoundError,
    decode_json,
    format_path,
    lookup,
    parse_uint,
    require_bool,
    require_list,
    require_str,
    require_uint,
    value_between,
)
from shared.errors import NumericParseError, UpstreamSchemaError


class TestValueBetween:
    """Test cases for marker extraction."""

    def test_extracts_between_markers(self):
        assert value_between("https://www.tokopedia.com/shopA/111?extra=1", "shopA/", "?") == "111"

    def test_uses_first_occurrences(self):
        assert value_between("a[1]b[2]", "[", "]") == "1"

    def test_end_marker_searched_after_start(self):
        assert value_between("?x=shop/42?y", "shop/", "?") == "42"

    def test_missing_start_marker(self):
        with pytest.raises(MarkerNotFoundError):
            value_between("https://www.tokopedia.com/other/1?x", "shopA/", "?")

    def test_missing_end_marker(self):
        with pytest.raises(MarkerNotFoundError):
            value_between("https://www.tokopedia.com/shopA/111", "shopA/", "?")

    def test_empty_result(self):
        with pytest.raises(MarkerNotFoundError):
            value_between("https://www.tokopedia.com/shopA/?x", "shopA/", "?")


class TestCheckedAccess:
    """Test cases for typed lookups."""

    @pytest.fixture
    def document(self):
        return {
            "shop": {"name": "Shop A", "isOfficial": True, "rating": 5},
            "items": [{"price": 10}],
            "nothing": None,
        }

    def test_reads_nested_values(self, document):
        assert require_str(document, "shop", "name") == "Shop A"
        assert require_bool(document, "shop", "isOfficial") is True
        assert require_uint(document, "items", 0, "price") == 10
        assert require_list(document, "items") == [{"price": 10}]

    def test_missing_key_names_full_path(self, document):
        with pytest.raises(UpstreamSchemaError) as exc_info:
            require_str(document, "shop", "city", at=("data", "products", 3))
        assert exc_info.value.details["path"] == "data.products[3].shop.city"
        assert "data.products[3].shop.city" in exc_info.value.message

    def test_index_out_of_range(self, document):
        with pytest.raises(UpstreamSchemaError):
            lookup(document, "items", 1)

    def test_descending_through_null(self, document):
        with pytest.raises(UpstreamSchemaError):
            lookup(document, "nothing", "child")

    def test_kind_mismatch(self, document):
        with pytest.raises(UpstreamSchemaError) as exc_info:
            require_str(document, "shop", "isOfficial")
        assert exc_info.value.details["type"] == "bool"

    def test_bool_is_not_an_integer(self, document):
        with pytest.raises(UpstreamSchemaError):
            require_uint(document, "shop", "isOfficial")

    def test_negative_is_not_unsigned(self):
        with pytest.raises(UpstreamSchemaError):
            require_uint({"value": -1}, "value")

    def test_decode_json_rejects_garbage(self):
        with pytest.raises(UpstreamSchemaError):
            decode_json("<html>Bad gateway</html>")


class TestParseUint:
    """Test cases for numeric string parsing."""

    @pytest.mark.parametrize("text,expected", [("0", 0), ("25", 25), ("007", 7), ("+3", 3)])
    def test_valid(self, text, expected):
        assert parse_uint(text, "stock") == expected

    @pytest.mark.parametrize("text", ["many", "", "-1", "1.5", " 4", "+", "1e3"])
    def test_invalid(self, text):
        with pytest.raises(NumericParseError) as exc_info:
            parse_uint(text, "stock")
        assert exc_info.value.status_code == 502


def test_format_path():
    assert format_path((0, "data", "products", 1, "url")) == "[0].data.products[1].url"
    assert format_path(("a", "b")) == "a.b"
