"""Metafield store adapters.

The task only talks to the commerce platform through ``MetafieldStore``.

Available stores:
    - ``ShopifyMetafieldStore``: Shopify Admin REST API over ``httpx``.
"""

from license_html.stores.base import (
    MetafieldStore,
    RemoteReadError,
    RemoteWriteError,
    StoreError,
)
from license_html.stores.shopify import ShopifyMetafieldStore

__all__ = [
    "MetafieldStore",
    "RemoteReadError",
    "RemoteWriteError",
    "ShopifyMetafieldStore",
    "StoreError",
]
