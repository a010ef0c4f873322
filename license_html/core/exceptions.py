"""Error hierarchy for the license HTML task.

Each way an invocation can end badly has its own ``LicenseTaskError``
subclass.  The orchestrator reads ``http_status`` off the exception to
build the caller's response and logs ``to_error_dict()`` alongside it.

Categories
----------
- ``ValidationError``: the request or the app settings are unusable (400).
- ``TransientError``: the licenses record has not been written yet.
- ``PermanentError``: Shopify refused or failed a read or write.
- ``ContractError``: a payload does not have the shape we rely on.
"""

from __future__ import annotations


class LicenseTaskError(Exception):
    """Base exception for all license-task errors.

    Attributes:
        message: Human-readable error description.
        stage: Step that failed (``"ingress"``, ``"poll_licenses"``, ...).
        code: Machine-readable error code such as ``"LICENSES_MALFORMED"``.
        retryable: Whether calling the task again may succeed.
        correlation_id: Azure Functions invocation id.
    """

    #: Log category, fixed per category base class.
    category: str = "unclassified"
    default_stage: str = ""
    default_code: str = ""
    #: Status reported to the caller when this error ends the task.
    http_status: int = 500

    def __init__(
        self,
        message: str = "",
        *,
        stage: str = "",
        code: str = "",
        retryable: bool = False,
        correlation_id: str = "",
    ) -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        self.retryable = retryable
        self.correlation_id = correlation_id
        super().__init__(message)

    def to_error_dict(self) -> dict[str, object]:
        """Return the fields logged when this error ends a task."""
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
            "retryable": self.retryable,
            "correlation_id": self.correlation_id,
            "http_status": self.http_status,
        }


class ValidationError(LicenseTaskError):
    """Unusable request body or app setting. Never retryable."""

    category = "validation"
    http_status = 400

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class TransientError(LicenseTaskError):
    """The order is not ready yet; a later invocation may succeed."""

    category = "transient"

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", True)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class PermanentError(LicenseTaskError):
    """Shopify or the runtime failed in a way retrying will not fix."""

    category = "permanent"

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class ContractError(LicenseTaskError):
    """A metafield or request payload lacks the expected shape."""

    category = "contract"

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]
