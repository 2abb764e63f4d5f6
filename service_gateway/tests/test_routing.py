"""
Unit tests for request routing.
"""

import pytest

from service_gateway.app import routing
from service_gateway.app.routing import route, split_path


class TestRoute:
    """Test cases for route resolution."""

    @pytest.mark.parametrize("path", ["/", "/search/shoes", "/anything/at/all"])
    def test_head_short_circuits(self, path):
        assert route("HEAD", path).kind == routing.HEAD

    def test_root_is_info(self):
        assert route("GET", "/").kind == routing.INFO

    def test_search(self):
        match = route("GET", "/search/shoes")
        assert match.kind == routing.SEARCH
        assert match.params == {"query": "shoes"}
        assert match.segment_count == 2

    def test_lookup(self):
        match = route("GET", "/lookup/shopA/running-shoe")
        assert match.kind == routing.LOOKUP
        assert match.params == {"seller": "shopA", "product": "running-shoe"}

    def test_empty_segments_are_dropped(self):
        match = route("GET", "//lookup//shopA/running-shoe/")
        assert match.kind == routing.LOOKUP
        assert match.params["product"] == "running-shoe"

    def test_segments_are_percent_decoded(self):
        match = route("GET", "/search/red%20shoes")
        assert match.params == {"query": "red shoes"}

    def test_encoded_slash_stays_in_segment(self):
        match = route("GET", "/search/a%2Fb")
        assert match.kind == routing.SEARCH
        assert match.params == {"query": "a/b"}

    @pytest.mark.parametrize(
        "method,path",
        [
            ("GET", "/search"),
            ("GET", "/search/a/b"),
            ("GET", "/lookup/shopA"),
            ("GET", "/lookup/a/b/c"),
            ("GET", "/unknown/thing"),
            ("GET", "/health/extra"),
            ("POST", "/search/shoes"),
            ("DELETE", "/lookup/a/b"),
            ("POST", "/"),
        ],
    )
    def test_unmatched_routes_are_not_found(self, method, path):
        assert route(method, path).kind == routing.NOT_FOUND

    def test_method_is_case_insensitive(self):
        assert route("get", "/search/shoes").kind == routing.SEARCH


def test_split_path():
    assert split_path("/a//b/") == ("a", "b")
    assert split_path("/") == ()
