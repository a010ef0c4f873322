"""Render licenses activity: build the HTML table shown on the order.

Pure and total: the same entries always produce the same markup, and
an empty list still yields a table with its header row.  Every field
is HTML-escaped because the values come from a third party.
"""

from __future__ import annotations

from html import escape
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from license_html.models.license import LicenseEntry

TABLE_OPEN = "<table border='1' cellpadding='5' cellspacing='0'>"
HEADER_ROW = "<thead><tr><th>Product</th><th>Serial</th><th>Download</th></tr></thead>"
DOWNLOAD_LABEL = "Download"


def _download_cell(url: str) -> str:
    if not url:
        return "<td></td>"
    return f'<td><a href="{escape(url)}" target="_blank">{DOWNLOAD_LABEL}</a></td>'


def render_row(entry: LicenseEntry) -> str:
    """Render one ``<tr>`` for *entry*."""
    return (
        "<tr>"
        f"<td>{escape(entry.product)}</td>"
        f"<td>{escape(entry.serial)}</td>"
        f"{_download_cell(entry.download)}"
        "</tr>"
    )


def render_licenses(entries: Iterable[LicenseEntry]) -> str:
    """Render *entries* as a bordered HTML table, one row per entry."""
    rows = "".join(render_row(entry) for entry in entries)
    return f"{TABLE_OPEN}{HEADER_ROW}<tbody>{rows}</tbody></table>"
