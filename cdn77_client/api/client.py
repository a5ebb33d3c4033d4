"""
HTTP Client for the CDN77 API.

Provides the async HTTP client used by every command. Each request carries
the bearer token and the client's User-Agent. A command sends exactly one
request; there are no retries.
"""

from typing import Any

import httpx

from cdn77_client.core.config import get_api_settings
from cdn77_client.core.exceptions import TransportError
from cdn77_client.core.logging import get_logger, log_with_source

logger = get_logger(__name__)


class APIClient:
    """
    HTTP client for CDN77 API communication.

    Features:
    - Base URL, timeout and User-Agent from application.yaml
    - Bearer token authentication
    - Structured logging of requests/responses
    - Transport failures raised as TransportError

    Usage:
        client = APIClient(token)
        response = await client.get("/credit-balance")
        response = await client.post("/cdn/123/job/purge", json={"paths": ["/a"]})
    """

    def __init__(
        self,
        token: str,
        base_url: str | None = None,
        timeout: float | None = None,
        user_agent: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the API client.

        Args:
            token: CDN77 API token, sent as a bearer token.
            base_url: API base URL. If None, reads from application.yaml.
            timeout: Request timeout in seconds. If None, reads from application.yaml.
            user_agent: User-Agent header. If None, reads from application.yaml.
            transport: Optional httpx transport, used to stub the network in tests.
        """
        if base_url is None or timeout is None or user_agent is None:
            config_base_url, config_timeout, config_user_agent = get_api_settings()
            base_url = base_url or config_base_url
            timeout = timeout if timeout is not None else config_timeout
            user_agent = user_agent or config_user_agent

        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.user_agent = user_agent
        self._token = token
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers={
                    "Authorization": f"Bearer {self._token}",
                    "User-Agent": self.user_agent,
                },
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "APIClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def request(
        self,
        method: str,
        path: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """
        Make an HTTP request to the API.

        Args:
            method: HTTP method (GET, POST, etc.)
            path: API path relative to the base URL (e.g., /credit-balance)
            **kwargs: Additional arguments for httpx

        Returns:
            httpx.Response, whatever its status code

        Raises:
            TransportError: If the request could not be completed
        """
        client = self._get_client()

        log_with_source(
            logger,
            "api",
            "debug",
            "API request",
            method=method,
            path=path,
        )

        try:
            response = await client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            log_with_source(
                logger,
                "api",
                "debug",
                "API request failed",
                method=method,
                path=path,
                error=repr(e),
            )
            raise TransportError(f"Failed to send {method} request to {path}, e={e!r}") from e

        log_with_source(
            logger,
            "api",
            "debug",
            "API response",
            method=method,
            path=path,
            status_code=response.status_code,
        )

        return response

    async def get(self, path: str, **kwargs: Any) -> httpx.Response:
        """Make a GET request."""
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> httpx.Response:
        """Make a POST request."""
        return await self.request("POST", path, **kwargs)
