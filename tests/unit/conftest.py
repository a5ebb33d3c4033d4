"""
Unit Test Fixtures.

Fixtures for unit tests - the network is always stubbed.
Requests are answered by an httpx.MockTransport and recorded for assertions.
"""

import json
from collections.abc import Callable
from typing import Any
from unittest.mock import MagicMock

import httpx
import pytest

from cdn77_client.api.client import APIClient

TEST_BASE_URL = "https://api.cdn77.test/v3"
TEST_TOKEN = "test-token"
TEST_USER_AGENT = "cdn77-client/test"


# =============================================================================
# HTTP Stub Fixtures
# =============================================================================


class StubAPI:
    """
    Stubbed CDN77 API.

    Answers every request with the configured response and records the
    requests it received.

    Usage:
        def test_something(stub_api):
            stub_api.respond(200, json={"id": "1", "location": "Prague"})
            client = stub_api.client()
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._respond: Callable[[httpx.Request], httpx.Response] = lambda request: httpx.Response(200, json={})

    def respond(
        self,
        status_code: int,
        json: Any = None,
        text: str | None = None,
    ) -> None:
        """Answer with a JSON body, a raw text body, or no body."""
        if json is not None:
            self._respond = lambda request: httpx.Response(status_code, json=json)
        elif text is not None:
            self._respond = lambda request: httpx.Response(status_code, text=text)
        else:
            self._respond = lambda request: httpx.Response(status_code)

    def fail_with(self, exc_type: type[httpx.TransportError], message: str = "boom") -> None:
        """Fail every request with a transport error."""

        def _raise(request: httpx.Request) -> httpx.Response:
            raise exc_type(message, request=request)

        self._respond = _raise

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._respond(request)

    @property
    def last_request(self) -> httpx.Request:
        assert self.requests, "No request was sent"
        return self.requests[-1]

    def last_json(self) -> Any:
        """JSON body of the last request."""
        return json.loads(self.last_request.content)

    def client(self, token: str = TEST_TOKEN) -> APIClient:
        """Create an APIClient wired to this stub."""
        return APIClient(
            token,
            base_url=TEST_BASE_URL,
            timeout=5.0,
            user_agent=TEST_USER_AGENT,
            transport=httpx.MockTransport(self._handle),
        )


@pytest.fixture
def stub_api() -> StubAPI:
    """Provide a fresh StubAPI."""
    return StubAPI()


@pytest.fixture
def api_client(stub_api: StubAPI) -> APIClient:
    """APIClient answering from stub_api."""
    return stub_api.client()


# =============================================================================
# Logging Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_logger() -> MagicMock:
    """
    Mock logger for testing logging calls.

    Usage:
        def test_logging(mock_logger):
            with patch("module.logger", mock_logger):
                # Test code that logs
                mock_logger.debug.assert_called()
    """
    logger = MagicMock()
    logger.debug = MagicMock()
    logger.info = MagicMock()
    logger.warning = MagicMock()
    logger.error = MagicMock()
    logger.exception = MagicMock()
    return logger
