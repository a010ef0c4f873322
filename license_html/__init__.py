"""Shopify license metafield rendering task.

Waits for the ``xchange.licenses`` metafield to appear on an order,
renders it as an HTML table, and writes the table back to the order as
the ``xchange.licenses_html`` metafield.
"""

__version__ = "0.1.0"
