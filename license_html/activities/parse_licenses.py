"""Parse licenses activity: decode the licenses metafield value.

The value is normally a JSON string, but some stores hand it back
already decoded; both are accepted.  The decoded value must be a list.
Entry shape is deliberately not validated: missing fields degrade to
empty cells when rendered.

Malformed data is never retried, since a later fetch cannot fix it.
"""

from __future__ import annotations

import json
import logging

from license_html.core.exceptions import ContractError
from license_html.models.license import LicenseEntry

logger = logging.getLogger("license_html.activities.parse_licenses")

MALFORMED_JSON = "malformed_json"
UNEXPECTED_TYPE = "unexpected_type"
NOT_A_LIST = "not_a_list"


class MalformedRecordError(ContractError):
    """Raised when the licenses value cannot be decoded to a list.

    Attributes:
        reason: ``"malformed_json"``, ``"unexpected_type"`` or ``"not_a_list"``.
    """

    default_stage = "parse_licenses"
    default_code = "LICENSES_MALFORMED"

    def __init__(self, message: str, *, reason: str) -> None:
        self.reason = reason
        super().__init__(message)


def parse_licenses(raw_value: object) -> list[LicenseEntry]:
    """Decode a licenses metafield value into entries, in source order.

    Args:
        raw_value: A JSON-encoded string or an already-decoded list.

    Returns:
        One ``LicenseEntry`` per list element (possibly empty).

    Raises:
        MalformedRecordError: If the string is not JSON, the value is
            neither text nor a list, or the decoded value is not a list.
    """
    if isinstance(raw_value, str):
        try:
            decoded = json.loads(raw_value)
        except json.JSONDecodeError as exc:
            logger.error("Licenses metafield is not valid JSON | error=%s", exc)
            msg = f"Licenses metafield value is not valid JSON: {exc}"
            raise MalformedRecordError(msg, reason=MALFORMED_JSON) from exc
    elif isinstance(raw_value, list):
        decoded = raw_value
    else:
        msg = f"Unexpected licenses metafield value type: {type(raw_value).__name__}"
        raise MalformedRecordError(msg, reason=UNEXPECTED_TYPE)

    if not isinstance(decoded, list):
        msg = f"Expected licenses metafield to contain a JSON array, got {type(decoded).__name__}"
        raise MalformedRecordError(msg, reason=NOT_A_LIST)

    return [LicenseEntry.from_raw(item) for item in decoded]
