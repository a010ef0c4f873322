"""Thin ingress boundary helpers for the Azure Functions entrypoint.

Normalises the HTTP request body into a validated ``TaskInput`` so
that ``function_app.py`` contains only trigger bindings and handoff.
Every rejection here happens before any store call is made.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from license_html.core.exceptions import ContractError, ValidationError
from license_html.models.payloads import TaskInput, validate_payload

logger = logging.getLogger("license_html.core.ingress")


def is_order_id(value: str) -> bool:
    """Return whether *value* is a numeric Shopify order id."""
    return value.isascii() and value.isdigit()


class ClientInputError(ValidationError):
    """Raised when the invocation payload is missing or malformed."""

    default_stage = "ingress"
    default_code = "MISSING_ORDER_ID"


def parse_task_input(raw: bytes | str | dict[str, Any] | object) -> TaskInput:
    """Normalise the invocation body to a ``TaskInput``.

    Accepts the raw request body (bytes or text) or an already-decoded
    dict.  Integer order ids are converted to strings; only ASCII digits
    are accepted.

    Raises:
        ClientInputError: If the body is not a JSON object or
            ``order_id`` is missing, blank, or not a string/integer, or
            is not a numeric order id.
    """
    if isinstance(raw, bytes | bytearray):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            msg = "Invalid JSON body"
            raise ClientInputError(msg, code="INVALID_JSON") from exc

    if isinstance(raw, str):
        if not raw.strip():
            msg = "Missing order_id"
            raise ClientInputError(msg)
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as exc:
            msg = "Invalid JSON body"
            raise ClientInputError(msg, code="INVALID_JSON") from exc

    if not isinstance(raw, dict):
        msg = f"Request body must be a JSON object, got {type(raw).__name__}"
        raise ClientInputError(msg, code="INVALID_INPUT_TYPE")

    try:
        validate_payload(raw, TaskInput, stage="ingress")
    except ContractError as exc:
        msg = "Missing order_id"
        raise ClientInputError(msg) from exc

    order_id = raw["order_id"]
    if isinstance(order_id, bool) or not isinstance(order_id, str | int):
        msg = "Missing order_id"
        raise ClientInputError(msg, code="INVALID_INPUT_TYPE")

    order_id = str(order_id).strip()
    if not order_id:
        msg = "Missing order_id"
        raise ClientInputError(msg)

    # The id becomes a path segment of an authenticated request.
    if not is_order_id(order_id):
        msg = "Invalid order_id"
        raise ClientInputError(msg, code="INVALID_ORDER_ID")

    logger.debug("Parsed task input | order_id=%s", order_id)
    return {"order_id": order_id}
