"""Tests for the Shopify Admin API metafield store.

Requests are served by ``httpx.MockTransport`` so the real client,
URL building, headers and response handling are all exercised.
"""

from __future__ import annotations

import json

import httpx
import pytest

from license_html.activities.save_licenses import build_licenses_html_metafield
from license_html.core.config import StoreConfig
from license_html.stores.base import RemoteReadError, RemoteWriteError
from license_html.stores.shopify import ShopifyMetafieldStore

CONFIG = StoreConfig(shop_domain="example.myshopify.com", access_token="shpat_test")

METAFIELDS_BODY = {
    "metafields": [
        {"id": 1, "namespace": "global", "key": "note", "value": "x"},
        {"id": 2, "namespace": "xchange", "key": "licenses", "value": "[]", "type": "json"},
    ]
}


def _store(
    handler: httpx.MockTransport | None = None,
    **responses: httpx.Response,
) -> tuple[ShopifyMetafieldStore, list[httpx.Request]]:
    """Build a store whose transport answers each method with a canned response."""
    requests: list[httpx.Request] = []

    def record(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return responses[request.method]

    transport = handler or httpx.MockTransport(record)
    return ShopifyMetafieldStore(CONFIG, transport=transport), requests


class TestListOrderMetafields:
    @pytest.mark.asyncio()
    async def test_request_shape(self) -> None:
        store, requests = _store(GET=httpx.Response(200, json=METAFIELDS_BODY))
        async with store:
            metafields = await store.list_order_metafields("450789469")

        assert len(requests) == 1
        request = requests[0]
        assert request.method == "GET"
        assert str(request.url) == (
            "https://example.myshopify.com/admin/api/2023-10/orders/450789469/metafields.json"
        )
        assert request.headers["X-Shopify-Access-Token"] == "shpat_test"
        assert request.headers["Content-Type"] == "application/json"
        assert [(m.namespace, m.key) for m in metafields] == [
            ("global", "note"),
            ("xchange", "licenses"),
        ]

    @pytest.mark.asyncio()
    async def test_non_success_passes_status(self) -> None:
        store, _ = _store(GET=httpx.Response(403, text="[API] Forbidden"))
        async with store:
            with pytest.raises(RemoteReadError) as exc_info:
                await store.list_order_metafields("1")

        assert exc_info.value.status_code == 403
        assert exc_info.value.http_status == 403
        assert exc_info.value.detail == "[API] Forbidden"

    @pytest.mark.asyncio()
    async def test_missing_metafields_key(self) -> None:
        store, _ = _store(GET=httpx.Response(200, json={"errors": "Not Found"}))
        async with store:
            with pytest.raises(RemoteReadError) as exc_info:
                await store.list_order_metafields("1")

        assert exc_info.value.code == "STORE_RESPONSE_INVALID"
        assert exc_info.value.status_code == 502

    @pytest.mark.asyncio()
    async def test_non_json_body(self) -> None:
        store, _ = _store(GET=httpx.Response(200, text="<html>maintenance</html>"))
        async with store:
            with pytest.raises(RemoteReadError):
                await store.list_order_metafields("1")

    @pytest.mark.asyncio()
    async def test_transport_failure(self) -> None:
        def fail(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        store, _ = _store(httpx.MockTransport(fail))
        async with store:
            with pytest.raises(RemoteReadError) as exc_info:
                await store.list_order_metafields("1")

        assert exc_info.value.status_code == 502

    @pytest.mark.asyncio()
    async def test_long_error_body_truncated(self) -> None:
        store, _ = _store(GET=httpx.Response(500, text="e" * 2000))
        async with store:
            with pytest.raises(RemoteReadError) as exc_info:
                await store.list_order_metafields("1")

        assert len(exc_info.value.detail) < 600

    @pytest.mark.asyncio()
    @pytest.mark.parametrize("order_id", ["1/../x", "1?x=", "1#frag", "..", "1/metafields.json?x="])
    async def test_non_numeric_order_id_never_sent(self, order_id: str) -> None:
        store, requests = _store(GET=httpx.Response(200, json={"metafields": []}))
        async with store:
            with pytest.raises(ValueError, match="order_id must be numeric"):
                await store.list_order_metafields(order_id)

        assert requests == []


class TestCreateMetafield:
    @pytest.mark.asyncio()
    async def test_request_shape(self) -> None:
        created = {"metafield": {"id": 99, "namespace": "xchange", "key": "licenses_html"}}
        store, requests = _store(POST=httpx.Response(201, json=created))
        payload = build_licenses_html_metafield("450789469", "<table></table>")

        async with store:
            result = await store.create_metafield(payload)

        request = requests[0]
        assert request.method == "POST"
        assert str(request.url) == "https://example.myshopify.com/admin/api/2023-10/metafields.json"
        assert json.loads(request.content) == {
            "metafield": {
                "namespace": "xchange",
                "key": "licenses_html",
                "type": "multi_line_text_field",
                "value": "<table></table>",
                "owner_id": 450789469,
                "owner_resource": "order",
            }
        }
        assert result.id == 99

    @pytest.mark.asyncio()
    async def test_non_success(self) -> None:
        store, _ = _store(POST=httpx.Response(422, json={"errors": {"value": ["is too long"]}}))
        async with store:
            with pytest.raises(RemoteWriteError) as exc_info:
                await store.create_metafield(build_licenses_html_metafield("1", "x"))

        assert exc_info.value.status_code == 422
        assert "is too long" in exc_info.value.detail

    @pytest.mark.asyncio()
    async def test_empty_success_body_falls_back_to_payload(self) -> None:
        store, _ = _store(POST=httpx.Response(201))
        async with store:
            result = await store.create_metafield(build_licenses_html_metafield("7", "x"))

        assert result.key == "licenses_html"
        assert result.owner_id == 7
        assert result.id is None

    @pytest.mark.asyncio()
    async def test_client_closed_on_exit(self) -> None:
        store, _ = _store(GET=httpx.Response(200, json={"metafields": []}))
        async with store:
            await store.list_order_metafields("1")

        with pytest.raises(RuntimeError):
            await store.list_order_metafields("1")
