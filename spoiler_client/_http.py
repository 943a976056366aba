"""Internal HTTP handling utilities for the StorySpoil client.

This module provides the low-level HTTP communication layer used by the
story sub-client and the authentication resolver. It handles:
- Making blocking HTTP requests with an optional bearer token
- Returning status code and raw body for every response
- Mapping transport failures to client exceptions
- Connection management

Unlike a typical API client, error status codes are not raised: negative
contract steps must observe 4xx replies as data.

This is an internal module and should not be imported directly by users.
"""

import logging
from typing import Any, Literal

import httpx

from spoiler_client.exceptions import ConnectionError, TimeoutError
from spoiler_client.models import RawResponse, Token

logger = logging.getLogger(__name__)

# HTTP methods supported by the client
HttpMethod = Literal["GET", "POST", "PUT", "DELETE"]

DEFAULT_TIMEOUT = 30.0  # seconds


class HTTPClient:
    """Synchronous HTTP client bound to one base URL and at most one token.

    Wraps httpx.Client. The token is fixed at construction; to switch
    tokens, build a new client.

    Attributes:
        base_url: The base URL for all API requests.
        timeout: Request timeout in seconds.
        token: The bearer token sent on every request, if any.
    """

    def __init__(
        self,
        base_url: str,
        token: Token | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the HTTP client.

        Args:
            base_url: The base URL for all API requests.
            token: Bearer token to authenticate with.
            timeout: Request timeout in seconds.
            transport: Custom transport (e.g., MockTransport for testing).
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.token = token

        headers = token.authorization_header() if token is not None else {}
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            headers=headers,
        )

    def close(self) -> None:
        """Close the HTTP client and release resources."""
        self._client.close()

    def __enter__(self) -> "HTTPClient":
        """Enter context manager."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Exit context manager and close client."""
        self.close()

    def request(
        self,
        method: HttpMethod,
        path: str,
        json: dict[str, Any] | None = None,
    ) -> RawResponse:
        """Make an HTTP request and return its status code and raw body.

        Args:
            method: The HTTP method (GET, POST, etc.).
            path: The URL path, relative to base_url.
            json: JSON body to send with the request.

        Returns:
            The observed response, whatever its status code.

        Raises:
            ConnectionError: If the connection fails or drops mid-request.
            TimeoutError: If the request times out.
        """
        url = f"{self.base_url}/{path.lstrip('/')}"
        logger.debug("%s %s", method, url)

        try:
            response = self._client.request(method=method, url=path.lstrip("/"), json=json)
        except httpx.ConnectError as e:
            raise ConnectionError(
                message=f"Failed to connect to {url}",
                url=url,
                cause=e,
            ) from e
        except httpx.TimeoutException as e:
            raise TimeoutError(
                message=f"Request to {url} timed out",
                timeout=self.timeout,
                url=url,
            ) from e
        except httpx.TransportError as e:
            raise ConnectionError(
                message=f"Transport failure talking to {url}: {e}",
                url=url,
                cause=e,
            ) from e

        logger.debug("%s %s -> %s", method, url, response.status_code)
        return RawResponse(
            method=method,
            path=path,
            status_code=response.status_code,
            body=response.text,
        )

    def get(self, path: str) -> RawResponse:
        """Make a GET request."""
        return self.request("GET", path)

    def post(self, path: str, json: dict[str, Any] | None = None) -> RawResponse:
        """Make a POST request."""
        return self.request("POST", path, json=json)

    def put(self, path: str, json: dict[str, Any] | None = None) -> RawResponse:
        """Make a PUT request."""
        return self.request("PUT", path, json=json)

    def delete(self, path: str) -> RawResponse:
        """Make a DELETE request."""
        return self.request("DELETE", path)
