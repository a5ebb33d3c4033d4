"""
Root Pytest Fixtures.

Shared fixtures available to all test types.

The API token is never read from the developer's real environment or .env:
every test starts without CDN77_API_TOKEN and with fresh configuration caches.
"""

from collections.abc import Generator

import pytest

from cdn77_client.core import logging as logging_module
from cdn77_client.core.config import get_app_config, get_settings


# =============================================================================
# Configuration Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def _isolate_configuration(
    monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory
) -> Generator[None, None, None]:
    """Clear cached configuration and run from a directory without a .env file."""
    monkeypatch.delenv("CDN77_API_TOKEN", raising=False)
    monkeypatch.delenv("CDN77_CLIENT_CONFIG_DIR", raising=False)
    monkeypatch.chdir(tmp_path_factory.mktemp("cwd"))

    get_settings.cache_clear()
    get_app_config.cache_clear()
    logging_module._logging_config = None
    yield
    get_settings.cache_clear()
    get_app_config.cache_clear()
    logging_module._logging_config = None


# =============================================================================
# Utility Fixtures
# =============================================================================


@pytest.fixture
def anyio_backend() -> str:
    """Specify the async backend for anyio."""
    return "asyncio"
