"""
Unit Test Fixtures.

Fixtures for unit tests - all external dependencies are mocked.
Unit tests should be fast and isolated, never touching the network.
"""

from unittest.mock import MagicMock

import pytest

from dsclient.core.config_schema import DeviceServerSchema
from tests.fakes import TEST_BASE_URL, TEST_PSK


# =============================================================================
# Settings Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_settings() -> MagicMock:
    """
    Mock secrets.

    Usage:
        def test_with_settings(mock_settings):
            with patch("module.get_settings", return_value=mock_settings):
                # Test code that uses settings
    """
    settings = MagicMock()
    settings.deviceserver_psk = TEST_PSK
    return settings


@pytest.fixture
def mock_app_config() -> MagicMock:
    """
    Mock YAML application configuration with a real, validated device server section.

    Usage:
        def test_with_config(mock_app_config):
            with patch("module.get_app_config", return_value=mock_app_config):
                # Test code that uses app config
    """
    config = MagicMock()
    config.deviceserver = DeviceServerSchema(
        base_url=TEST_BASE_URL,
        skip_tls_verify=True,
        timeout_seconds=5,
        token={"algorithm": "HS384", "org_id": 7, "lifetime_minutes": 15},
        cache={"ttl_seconds": 60, "sweep_interval_seconds": 0, "read_through": True},
    )
    return config
