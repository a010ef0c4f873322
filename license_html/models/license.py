"""License entry decoded from the ``xchange.licenses`` metafield."""

from __future__ import annotations

from dataclasses import dataclass


def _cell_text(value: object) -> str:
    """Coerce a raw field to display text; absent values become ``""``."""
    if value is None or isinstance(value, bool):
        return ""
    return str(value)


@dataclass(frozen=True, slots=True)
class LicenseEntry:
    """One product / serial / download triple.

    Fields are never validated: whatever the storefront wrote is shown,
    and anything missing renders as an empty cell.
    """

    product: str = ""
    serial: str = ""
    download: str = ""

    @classmethod
    def from_raw(cls, item: object) -> LicenseEntry:
        """Build an entry from one decoded list element.

        Non-object elements yield an all-empty entry so that a single
        odd row does not fail the whole table.
        """
        if not isinstance(item, dict):
            return cls()
        return cls(
            product=_cell_text(item.get("product")),
            serial=_cell_text(item.get("serial")),
            download=_cell_text(item.get("download")),
        )
