"""MetafieldStore abstract base class.

Defines the narrow contract the task needs from the commerce platform:
list an order's metafields, and create one new metafield.  The
workflow interacts exclusively with this interface, which lets tests
inject an in-memory fake in place of the HTTP adapter.

Lifecycle:
    Stores are async context managers.  A store is opened once per
    invocation and closed when the invocation ends, so no connection
    outlives a single run.
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

from license_html.core.exceptions import PermanentError

if TYPE_CHECKING:
    from types import TracebackType

    from license_html.models.metafield import Metafield
    from license_html.models.payloads import MetafieldInput


class MetafieldStore(abc.ABC):
    """Abstract base class for metafield store adapters."""

    #: Short store name used in error messages and logs.
    name: str = "store"

    async def __aenter__(self) -> MetafieldStore:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:  # noqa: B027
        """Release any held connections.  Default: nothing to release."""

    @abc.abstractmethod
    async def list_order_metafields(self, order_id: str) -> list[Metafield]:
        """Return every metafield attached to *order_id*, in store order.

        Raises:
            RemoteReadError: If the store answers with a non-success
                status or the request cannot be completed.
        """

    @abc.abstractmethod
    async def create_metafield(self, metafield: MetafieldInput) -> Metafield:
        """Create *metafield* and return the stored record.

        Raises:
            RemoteWriteError: If the store answers with a non-success
                status or the request cannot be completed.
        """


# ---------------------------------------------------------------------------
# Store exceptions
# ---------------------------------------------------------------------------


class StoreError(PermanentError):
    """Base exception for store adapter errors.

    Attributes:
        store: Name of the store that raised the error.
        status_code: HTTP status returned by the store, or the gateway
            status substituted for transport failures.
        detail: Truncated upstream response body, for logs only.
    """

    default_stage = "store"
    default_code = "STORE_ERROR"

    def __init__(
        self,
        store: str,
        message: str,
        *,
        status_code: int = 502,
        detail: str = "",
        code: str = "",
    ) -> None:
        self.store = store
        self.status_code = status_code
        self.detail = detail
        super().__init__(message, code=code or self.default_code, stage=self.default_stage)

    def __str__(self) -> str:
        return f"[{self.store}] {self.message} (status={self.status_code})"


class RemoteReadError(StoreError):
    """Non-success response while reading metafields.  Not retried.

    The upstream status is passed through to the caller.
    """

    default_code = "STORE_READ_FAILED"

    @property
    def http_status(self) -> int:  # type: ignore[override]
        return self.status_code


class RemoteWriteError(StoreError):
    """Non-success response while creating a metafield.  Not retried."""

    default_code = "STORE_WRITE_FAILED"
