"""Metafield record as returned by the Shopify Admin REST API.

Only the fields the task reads or writes are modelled; everything else
in the API response is ignored.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Metafield:
    """A namespaced key/value extension field attached to a resource.

    Attributes:
        namespace: Integration namespace (e.g. ``"xchange"``).
        key: Field name within the namespace.
        value: Raw value.  Usually a string; some stores hand back
            list-typed values already decoded.
        type: Shopify metafield type (e.g. ``"json"``).
        id: Store-assigned identifier, ``None`` before creation.
        owner_id: Identifier of the owning resource.
        owner_resource: Owning resource kind (e.g. ``"order"``).
    """

    namespace: str
    key: str
    value: object = None
    type: str = ""
    id: int | None = None
    owner_id: int | str | None = None
    owner_resource: str = ""

    def matches(self, namespace: str, key: str) -> bool:
        """Return whether this metafield is identified by *namespace*/*key*."""
        return self.namespace == namespace and self.key == key

    @property
    def is_populated(self) -> bool:
        """Whether the value has been filled in.

        ``None`` and the empty string mean "not yet written".  A decoded
        list counts as populated even when it is empty.
        """
        return self.value is not None and self.value != ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Metafield:
        """Build a ``Metafield`` from an API object, tolerating missing keys."""
        raw_id = data.get("id")
        return cls(
            namespace=str(data.get("namespace") or ""),
            key=str(data.get("key") or ""),
            value=data.get("value"),
            type=str(data.get("type") or ""),
            id=raw_id if isinstance(raw_id, int) and not isinstance(raw_id, bool) else None,
            owner_id=data.get("owner_id"),
            owner_resource=str(data.get("owner_resource") or ""),
        )
