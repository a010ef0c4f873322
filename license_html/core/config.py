"""Task configuration loaded from environment variables.

Azure Functions app settings (or ``local.settings.json`` for local dev)
are the source of truth.  The config is built once per process and
passed explicitly into the workflow; there is no hot reload.

Fail-fast validation:
    ``from_env()`` raises ``ConfigValidationError`` if a required value
    is missing or a numeric value is out of its valid range.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from license_html.core.constants import (
    DEFAULT_API_VERSION,
    DEFAULT_POLL_DELAY_SECONDS,
    DEFAULT_POLL_MAX_ATTEMPTS,
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
    DEFAULT_TASK_TIMEOUT_SECONDS,
)
from license_html.core.exceptions import ValidationError


class ConfigValidationError(ValidationError):
    """Raised when configuration values are missing or out of valid range.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"
    http_status = 500

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")


@dataclass(frozen=True, slots=True)
class StoreConfig:
    """Immutable store and retry configuration.

    Attributes:
        shop_domain: Shopify store domain (``example.myshopify.com``).
        access_token: Admin API access token.
        api_version: Admin API version segment of the request path.
        poll_max_attempts: Fetches issued before giving up on the record.
        poll_delay_seconds: Wait between a not-found fetch and the next.
        request_timeout_seconds: Per-request HTTP timeout.
        task_timeout_seconds: Deadline for a whole invocation (0 disables).
            Defaults below the HTTP front-end limit so a 504 is returned
            before the host drops the request.
    """

    shop_domain: str = ""
    access_token: str = ""
    api_version: str = DEFAULT_API_VERSION
    poll_max_attempts: int = DEFAULT_POLL_MAX_ATTEMPTS
    poll_delay_seconds: float = DEFAULT_POLL_DELAY_SECONDS
    request_timeout_seconds: float = DEFAULT_REQUEST_TIMEOUT_SECONDS
    task_timeout_seconds: float = DEFAULT_TASK_TIMEOUT_SECONDS

    @property
    def base_url(self) -> str:
        """Return the versioned Admin API root for the store."""
        return f"https://{self.shop_domain}/admin/api/{self.api_version}"

    def __repr__(self) -> str:
        return (
            f"StoreConfig(shop_domain={self.shop_domain!r}, access_token='***', "
            f"api_version={self.api_version!r}, poll_max_attempts={self.poll_max_attempts}, "
            f"poll_delay_seconds={self.poll_delay_seconds}, "
            f"request_timeout_seconds={self.request_timeout_seconds}, "
            f"task_timeout_seconds={self.task_timeout_seconds})"
        )

    @classmethod
    def from_env(cls) -> StoreConfig:
        """Load and validate configuration from environment variables.

        Raises:
            ConfigValidationError: If a numeric value is out of range
                or a required string value is empty.
            ValueError: If a numeric environment variable cannot be
                parsed (e.g. ``LICENSE_POLL_MAX_ATTEMPTS=abc``).
        """
        config = cls(
            shop_domain=os.getenv("SHOPIFY_DOMAIN", "").strip(),
            access_token=os.getenv("SHOPIFY_ADMIN_API_KEY", "").strip(),
            api_version=os.getenv("SHOPIFY_ADMIN_API_VERSION", DEFAULT_API_VERSION).strip(),
            poll_max_attempts=int(
                os.getenv("LICENSE_POLL_MAX_ATTEMPTS", str(DEFAULT_POLL_MAX_ATTEMPTS))
            ),
            poll_delay_seconds=float(
                os.getenv("LICENSE_POLL_DELAY_SECONDS", str(DEFAULT_POLL_DELAY_SECONDS))
            ),
            request_timeout_seconds=float(
                os.getenv("SHOPIFY_REQUEST_TIMEOUT_SECONDS", str(DEFAULT_REQUEST_TIMEOUT_SECONDS))
            ),
            task_timeout_seconds=float(
                os.getenv("LICENSE_TASK_TIMEOUT_SECONDS", str(DEFAULT_TASK_TIMEOUT_SECONDS))
            ),
        )
        validate_config(config)
        return config


def validate_config(config: StoreConfig) -> None:
    """Validate required values and ranges.  Raises ``ConfigValidationError``."""
    if not config.shop_domain:
        raise ConfigValidationError("SHOPIFY_DOMAIN", config.shop_domain, "must not be empty")

    if not config.access_token:
        # Never echo the token itself.
        raise ConfigValidationError("SHOPIFY_ADMIN_API_KEY", "", "must not be empty")

    if not config.api_version:
        raise ConfigValidationError(
            "SHOPIFY_ADMIN_API_VERSION",
            config.api_version,
            "must not be empty",
        )

    if config.poll_max_attempts < 1:
        raise ConfigValidationError(
            "LICENSE_POLL_MAX_ATTEMPTS",
            config.poll_max_attempts,
            "must be >= 1",
        )

    if config.poll_delay_seconds < 0:
        raise ConfigValidationError(
            "LICENSE_POLL_DELAY_SECONDS",
            config.poll_delay_seconds,
            "must be >= 0 (seconds)",
        )

    if config.request_timeout_seconds <= 0:
        raise ConfigValidationError(
            "SHOPIFY_REQUEST_TIMEOUT_SECONDS",
            config.request_timeout_seconds,
            "must be > 0 (seconds)",
        )

    if config.task_timeout_seconds < 0:
        raise ConfigValidationError(
            "LICENSE_TASK_TIMEOUT_SECONDS",
            config.task_timeout_seconds,
            "must be >= 0 (seconds, 0 disables)",
        )
