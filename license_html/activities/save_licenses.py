"""Save licenses activity: write the rendered table back to the order.

Creates a fresh ``xchange.licenses_html`` metafield in a single call.
Writes are not retried: a failed write is assumed to be a real fault,
not a propagation delay, and surfaces as ``RemoteWriteError``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from license_html.core.constants import (
    LICENSES_HTML_KEY,
    LICENSES_HTML_TYPE,
    LICENSES_NAMESPACE,
    OWNER_RESOURCE_ORDER,
)

if TYPE_CHECKING:
    from license_html.models.metafield import Metafield
    from license_html.models.payloads import MetafieldInput
    from license_html.stores.base import MetafieldStore

logger = logging.getLogger("license_html.activities.save_licenses")


def owner_id_for(order_id: str) -> int | str:
    """Return *order_id* as the API expects it: numeric ids as ``int``."""
    return int(order_id) if order_id.isdigit() else order_id


def build_licenses_html_metafield(order_id: str, html: str) -> MetafieldInput:
    """Build the derived metafield payload for *order_id*."""
    return {
        "namespace": LICENSES_NAMESPACE,
        "key": LICENSES_HTML_KEY,
        "type": LICENSES_HTML_TYPE,
        "value": html,
        "owner_id": owner_id_for(order_id),
        "owner_resource": OWNER_RESOURCE_ORDER,
    }


async def save_licenses_html(store: MetafieldStore, order_id: str, html: str) -> Metafield:
    """Create the ``licenses_html`` metafield on *order_id*.

    Raises:
        RemoteWriteError: If the store rejects the write.
    """
    payload = build_licenses_html_metafield(order_id, html)
    created = await store.create_metafield(payload)

    logger.info(
        "licenses_html saved | order_id=%s | metafield_id=%s | chars=%d",
        order_id,
        created.id,
        len(html),
    )
    return created
