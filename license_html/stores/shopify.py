"""Shopify Admin REST API metafield store.

Reads an order's metafield collection and creates new metafields via
the versioned Admin REST API, authenticating with an access token
header.  One ``httpx.AsyncClient`` is opened per store instance and
closed with it.

Endpoints:
    GET  {base_url}/orders/{order_id}/metafields.json
    POST {base_url}/metafields.json   body: {"metafield": {...}}
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from license_html.core.constants import ACCESS_TOKEN_HEADER
from license_html.core.ingress import is_order_id
from license_html.models.metafield import Metafield
from license_html.models.payloads import MetafieldInput, validate_payload
from license_html.stores.base import MetafieldStore, RemoteReadError, RemoteWriteError

if TYPE_CHECKING:
    from license_html.core.config import StoreConfig

logger = logging.getLogger("license_html.stores.shopify")

# Upstream bodies are logged, never returned; keep the log line bounded.
_MAX_DETAIL_CHARS = 500


class ShopifyMetafieldStore(MetafieldStore):
    """Metafield store backed by the Shopify Admin REST API.

    Example usage::

        async with ShopifyMetafieldStore(config) as store:
            metafields = await store.list_order_metafields("450789469")
    """

    name = "shopify"

    def __init__(
        self,
        config: StoreConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=config.base_url,
            headers={
                ACCESS_TOKEN_HEADER: config.access_token,
                "Content-Type": "application/json",
                "Accept": "application/json",
            },
            timeout=config.request_timeout_seconds,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def list_order_metafields(self, order_id: str) -> list[Metafield]:
        if not is_order_id(order_id):
            msg = f"order_id must be numeric, got {order_id!r}"
            raise ValueError(msg)

        path = f"/orders/{order_id}/metafields.json"
        try:
            response = await self._client.get(path)
        except httpx.HTTPError as exc:
            msg = f"Request for order {order_id} metafields failed: {exc}"
            raise RemoteReadError(self.name, msg, status_code=502) from exc

        if not response.is_success:
            detail = _detail(response)
            logger.error(
                "Failed to fetch metafields | order_id=%s | status=%d | body=%s",
                order_id,
                response.status_code,
                detail,
            )
            msg = f"Fetching metafields for order {order_id} returned {response.status_code}"
            raise RemoteReadError(
                self.name,
                msg,
                status_code=response.status_code,
                detail=detail,
            )

        items = _metafield_list(response)
        if items is None:
            msg = f"Metafields response for order {order_id} has no 'metafields' list"
            raise RemoteReadError(
                self.name,
                msg,
                status_code=502,
                detail=_detail(response),
                code="STORE_RESPONSE_INVALID",
            )

        return [Metafield.from_dict(item) for item in items if isinstance(item, dict)]

    async def create_metafield(self, metafield: MetafieldInput) -> Metafield:
        validate_payload(dict(metafield), MetafieldInput, stage="save_licenses")

        try:
            response = await self._client.post("/metafields.json", json={"metafield": metafield})
        except httpx.HTTPError as exc:
            msg = f"Request to create {metafield['namespace']}.{metafield['key']} failed: {exc}"
            raise RemoteWriteError(self.name, msg, status_code=502) from exc

        if not response.is_success:
            detail = _detail(response)
            logger.error(
                "Failed to save metafield | owner_id=%s | key=%s.%s | status=%d | body=%s",
                metafield["owner_id"],
                metafield["namespace"],
                metafield["key"],
                response.status_code,
                detail,
            )
            msg = (
                f"Creating {metafield['namespace']}.{metafield['key']} "
                f"returned {response.status_code}"
            )
            raise RemoteWriteError(
                self.name,
                msg,
                status_code=response.status_code,
                detail=detail,
            )

        try:
            body = response.json()
        except ValueError:
            body = None
        created = body.get("metafield") if isinstance(body, dict) else None
        if isinstance(created, dict):
            return Metafield.from_dict(created)
        return Metafield.from_dict(dict(metafield))


# ---------------------------------------------------------------------------
# Module-level helpers
# ---------------------------------------------------------------------------


def _metafield_list(response: httpx.Response) -> list[Any] | None:
    """Return the ``metafields`` array from a list response, or ``None``."""
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    items = body.get("metafields")
    return items if isinstance(items, list) else None


def _detail(response: httpx.Response) -> str:
    """Return the response body truncated for logging."""
    text = response.text
    if len(text) > _MAX_DETAIL_CHARS:
        return text[:_MAX_DETAIL_CHARS] + "..."
    return text
