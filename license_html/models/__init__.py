"""Domain models for the license task.

- license: ``LicenseEntry`` rows decoded from the source metafield
- metafield: ``Metafield`` records exchanged with the store
- payloads: Typed invocation and store payload schemas
"""

from license_html.models.license import LicenseEntry
from license_html.models.metafield import Metafield
from license_html.models.payloads import MetafieldInput, TaskInput, validate_payload

__all__ = [
    "LicenseEntry",
    "Metafield",
    "MetafieldInput",
    "TaskInput",
    "validate_payload",
]
