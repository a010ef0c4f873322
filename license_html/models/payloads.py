"""Typed payload schemas for the task boundary and the store API.

``TaskInput`` is the invocation body; ``MetafieldInput`` is the
``metafield`` object POSTed to the Admin API.  ``validate_payload``
catches missing keys at runtime.
"""

from __future__ import annotations

from typing import Any, TypedDict

from license_html.core.exceptions import ContractError

# ---------------------------------------------------------------------------
# Invocation
# ---------------------------------------------------------------------------


class TaskInput(TypedDict):
    """HTTP caller → ``process_license`` task."""

    order_id: str


# ---------------------------------------------------------------------------
# Store write
# ---------------------------------------------------------------------------


class MetafieldInput(TypedDict):
    """Task → ``POST /metafields.json`` (wrapped under ``"metafield"``)."""

    namespace: str
    key: str
    type: str
    value: str
    owner_id: int | str
    owner_resource: str


# ---------------------------------------------------------------------------
# Required-key registrations (used by validate_payload)
# ---------------------------------------------------------------------------

_REQUIRED_KEYS: dict[type, frozenset[str]] = {
    TaskInput: frozenset({"order_id"}),
    MetafieldInput: frozenset(
        {"namespace", "key", "type", "value", "owner_id", "owner_resource"}
    ),
}


def validate_payload(
    raw: dict[str, Any],
    schema: type,
    *,
    stage: str,
) -> None:
    """Validate that *raw* contains the required keys for *schema*.

    Raises:
        ContractError: If required keys are missing from the payload.
    """
    required = _REQUIRED_KEYS.get(schema)
    if required is None:
        return

    missing = required - raw.keys()
    if missing:
        msg = f"{stage}: missing required payload key(s): {', '.join(sorted(missing))}"
        raise ContractError(msg, stage=stage, code="PAYLOAD_MISSING_KEYS")
