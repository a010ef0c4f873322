"""Shared task constants: single source of truth.

Metafield identifiers are fixed by the storefront integration that
writes the source record; the retry defaults bound how long a single
invocation waits for it.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Metafield identifiers
# ---------------------------------------------------------------------------

LICENSES_NAMESPACE: str = "xchange"
"""Namespace shared by the source and derived metafields."""

LICENSES_KEY: str = "licenses"
"""Key of the source metafield holding the JSON license list."""

LICENSES_HTML_KEY: str = "licenses_html"
"""Key of the derived metafield holding the rendered HTML table."""

LICENSES_HTML_TYPE: str = "multi_line_text_field"
"""Shopify metafield type used for the derived record."""

OWNER_RESOURCE_ORDER: str = "order"
"""Owner resource for both metafields."""

# ---------------------------------------------------------------------------
# Shopify Admin API
# ---------------------------------------------------------------------------

DEFAULT_API_VERSION: str = "2023-10"
ACCESS_TOKEN_HEADER: str = "X-Shopify-Access-Token"

# ---------------------------------------------------------------------------
# Polling defaults (6 x 30 s covers the storefront's propagation delay)
# ---------------------------------------------------------------------------

DEFAULT_POLL_MAX_ATTEMPTS: int = 6
DEFAULT_POLL_DELAY_SECONDS: float = 30.0
DEFAULT_REQUEST_TIMEOUT_SECONDS: float = 30.0

# Azure's HTTP front end drops requests after roughly 230 s, so the task
# must answer before then; the host's functionTimeout is 5 minutes.
DEFAULT_TASK_TIMEOUT_SECONDS: float = 220.0
