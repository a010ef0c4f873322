"""Shared pytest fixtures for the license task test suite."""

from __future__ import annotations

import pytest

from license_html.core.config import StoreConfig
from tests.fakes import RecordingSleep


@pytest.fixture()
def store_config() -> StoreConfig:
    """Valid config with the default retry budget."""
    return StoreConfig(
        shop_domain="example.myshopify.com",
        access_token="shpat_test_token",
    )


@pytest.fixture()
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()
