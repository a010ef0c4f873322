"""Tests for store configuration.

Covers:
- Default values
- Loading from environment variables
- Type coercion (string env vars → numeric fields)
- Fail-fast validation of required and numeric values
"""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest

from license_html.core.config import ConfigValidationError, StoreConfig, validate_config

REQUIRED_ENV = {
    "SHOPIFY_DOMAIN": "example.myshopify.com",
    "SHOPIFY_ADMIN_API_KEY": "shpat_secret",
}


class TestStoreConfigDefaults:
    """Verify default configuration values."""

    def test_default_api_version(self) -> None:
        assert StoreConfig().api_version == "2023-10"

    def test_default_retry_budget(self) -> None:
        cfg = StoreConfig()
        assert cfg.poll_max_attempts == 6
        assert cfg.poll_delay_seconds == 30.0

    def test_task_timeout_below_http_front_end_limit(self) -> None:
        cfg = StoreConfig()
        assert cfg.task_timeout_seconds == 220.0
        assert 0 < cfg.task_timeout_seconds < 230

    def test_base_url(self) -> None:
        cfg = StoreConfig(shop_domain="shop.myshopify.com", api_version="2024-01")
        assert cfg.base_url == "https://shop.myshopify.com/admin/api/2024-01"

    def test_repr_hides_token(self) -> None:
        cfg = StoreConfig(shop_domain="s", access_token="shpat_secret")
        assert "shpat_secret" not in repr(cfg)


class TestStoreConfigFromEnv:
    """Verify loading from environment variables."""

    def test_loads_from_environment(self) -> None:
        env = {
            **REQUIRED_ENV,
            "SHOPIFY_ADMIN_API_VERSION": "2024-04",
            "LICENSE_POLL_MAX_ATTEMPTS": "3",
            "LICENSE_POLL_DELAY_SECONDS": "1.5",
            "SHOPIFY_REQUEST_TIMEOUT_SECONDS": "10",
            "LICENSE_TASK_TIMEOUT_SECONDS": "200",
        }
        with patch.dict(os.environ, env, clear=True):
            cfg = StoreConfig.from_env()

        assert cfg.shop_domain == "example.myshopify.com"
        assert cfg.access_token == "shpat_secret"
        assert cfg.api_version == "2024-04"
        assert cfg.poll_max_attempts == 3
        assert cfg.poll_delay_seconds == 1.5
        assert cfg.request_timeout_seconds == 10.0
        assert cfg.task_timeout_seconds == 200.0

    def test_defaults_when_optional_env_missing(self) -> None:
        with patch.dict(os.environ, REQUIRED_ENV, clear=True):
            cfg = StoreConfig.from_env()

        assert cfg.api_version == "2023-10"
        assert cfg.poll_max_attempts == 6
        assert cfg.poll_delay_seconds == 30.0
        assert cfg.task_timeout_seconds == 220.0

    def test_missing_domain_fails(self) -> None:
        with (
            patch.dict(os.environ, {"SHOPIFY_ADMIN_API_KEY": "x"}, clear=True),
            pytest.raises(ConfigValidationError) as exc_info,
        ):
            StoreConfig.from_env()
        assert exc_info.value.key == "SHOPIFY_DOMAIN"

    def test_missing_token_fails_without_echoing(self) -> None:
        with (
            patch.dict(os.environ, {"SHOPIFY_DOMAIN": "s"}, clear=True),
            pytest.raises(ConfigValidationError) as exc_info,
        ):
            StoreConfig.from_env()
        assert exc_info.value.key == "SHOPIFY_ADMIN_API_KEY"

    def test_non_numeric_attempts_raises_value_error(self) -> None:
        env = {**REQUIRED_ENV, "LICENSE_POLL_MAX_ATTEMPTS": "abc"}
        with patch.dict(os.environ, env, clear=True), pytest.raises(ValueError):
            StoreConfig.from_env()

    def test_frozen_immutability(self) -> None:
        cfg = StoreConfig()
        with pytest.raises(AttributeError):
            cfg.poll_max_attempts = 10  # type: ignore[misc]


class TestStoreConfigValidation:
    """Fail-fast range validation."""

    def _valid(self, **overrides: object) -> StoreConfig:
        return StoreConfig(shop_domain="s", access_token="t", **overrides)  # type: ignore[arg-type]

    def test_valid_config_passes(self) -> None:
        validate_config(self._valid())

    @pytest.mark.parametrize(
        ("field", "value", "key"),
        [
            ("poll_max_attempts", 0, "LICENSE_POLL_MAX_ATTEMPTS"),
            ("poll_delay_seconds", -1.0, "LICENSE_POLL_DELAY_SECONDS"),
            ("request_timeout_seconds", 0.0, "SHOPIFY_REQUEST_TIMEOUT_SECONDS"),
            ("task_timeout_seconds", -5.0, "LICENSE_TASK_TIMEOUT_SECONDS"),
            ("api_version", "", "SHOPIFY_ADMIN_API_VERSION"),
        ],
    )
    def test_out_of_range(self, field: str, value: object, key: str) -> None:
        with pytest.raises(ConfigValidationError) as exc_info:
            validate_config(self._valid(**{field: value}))
        assert exc_info.value.key == key
        assert exc_info.value.value == value

    def test_zero_delay_allowed(self) -> None:
        validate_config(self._valid(poll_delay_seconds=0.0))
