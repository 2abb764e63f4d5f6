"""
Unit tests for request-scoped logging context.
"""

import httpx
import pytest

from service_gateway.app.adapters.queries import LOOKUP_OPERATION
from service_gateway.app.adapters.upstream_client import UpstreamClient
from shared.logging import (
    add_correlation_context,
    bind_request_context,
    clear_context,
    set_request_id,
)


@pytest.fixture(autouse=True)
def clean_context():
    clear_context()
    yield
    clear_context()


class TestCorrelationContext:
    """Test cases for add_correlation_context."""

    def test_request_id_and_bound_fields(self):
        set_request_id("req-7")
        bind_request_context(route_kind="lookup")
        bind_request_context(upstream_operation=LOOKUP_OPERATION)

        event = add_correlation_context(None, "info", {"event": "Upstream response received"})

        assert event["request_id"] == "req-7"
        assert event["route_kind"] == "lookup"
        assert event["upstream_operation"] == LOOKUP_OPERATION

    def test_explicit_fields_win(self):
        bind_request_context(route_kind="search")

        event = add_correlation_context(None, "info", {"event": "x", "route_kind": "info"})

        assert event["route_kind"] == "info"

    def test_clear_context(self):
        set_request_id("req-8")
        bind_request_context(route_kind="search")
        clear_context()

        event = add_correlation_context(None, "info", {"event": "x"})

        assert event == {"event": "x"}


@pytest.mark.asyncio
async def test_upstream_call_binds_operation():
    client = UpstreamClient(
        "https://gql.example.test/graphql",
        transport=httpx.MockTransport(lambda request: httpx.Response(200, text="[]")),
    )
    try:
        await client.post(LOOKUP_OPERATION, [])
    finally:
        await client.close()

    event = add_correlation_context(None, "info", {"event": "Product not found upstream"})
    assert event["upstream_operation"] == LOOKUP_OPERATION
