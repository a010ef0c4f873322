"""Azure Functions entry point: Shopify license HTML task.

This module registers the HTTP trigger using the Python v2 programming
model.

All business logic lives in the license_html package. This file is
purely the wiring layer between the Azure Functions binding and
application code.
"""

from __future__ import annotations

import functools
import logging

import azure.functions as func

from license_html.core.config import ConfigValidationError, StoreConfig
from license_html.orchestrators.license_pipeline import run_license_task

app = func.FunctionApp()

logger = logging.getLogger("license_html.function_app")


@functools.lru_cache(maxsize=1)
def _load_config() -> StoreConfig:
    """Build the process-wide configuration once."""
    return StoreConfig.from_env()


# ---------------------------------------------------------------------------
# HTTP: Process License
# ---------------------------------------------------------------------------


@app.function_name("process_license")
@app.route(route="process-license", methods=["POST"], auth_level=func.AuthLevel.FUNCTION)
async def process_license(req: func.HttpRequest, context: func.Context) -> func.HttpResponse:
    """Render an order's licenses metafield into ``licenses_html``.

    Input:
        JSON body ``{"order_id": "<shopify order id>"}``.

    Returns:
        Plain-text response: 200 on success, 400 for a missing
        ``order_id``, 404 when the licenses metafield never appeared,
        the store's status for a failed read, 5xx otherwise.
    """
    try:
        config = _load_config()
    except (ConfigValidationError, ValueError):
        logger.exception("Invalid function configuration")
        return func.HttpResponse(
            "Server configuration error",
            status_code=500,
            mimetype="text/plain",
        )

    result = await run_license_task(
        req.get_body(),
        config=config,
        correlation_id=context.invocation_id or "",
    )

    return func.HttpResponse(result.body, status_code=result.status_code, mimetype="text/plain")
