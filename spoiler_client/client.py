"""Main StorySpoil client class.

This module provides StorySpoilerClient, the authenticated client handle
the harness holds for the duration of a run. It binds one base URL to
exactly one bearer token and exposes the story endpoints through the
``stories`` sub-client.

Example:
    Usage with context manager::

        from spoiler_client import StorySpoilerClient, Token

        with StorySpoilerClient(base_url, Token(access_token="...")) as client:
            response = client.stories.all()
            print(response.status_code)
"""

from typing import Any

from spoiler_client._http import DEFAULT_TIMEOUT, HTTPClient
from spoiler_client._stories import StoriesClient
from spoiler_client.models import Token


class StorySpoilerClient:
    """Authenticated client for the StorySpoil REST API.

    The token never changes after construction; the resolver builds a new
    client when it needs a different one.

    Attributes:
        base_url: The base URL of the service.
        token: The bearer token presented on every call.
        timeout: Request timeout in seconds.
    """

    def __init__(
        self,
        base_url: str,
        token: Token,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Any = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: The base URL of the service (e.g. ``https://host/api/``).
            token: Bearer token to authenticate with.
            timeout: Request timeout in seconds (default: 30.0).
            transport: Custom HTTP transport (e.g., MockTransport for testing).
        """
        self._token = token
        self._timeout = timeout

        self._http = HTTPClient(
            base_url=base_url,
            token=token,
            timeout=timeout,
            transport=transport,
        )
        self._stories: StoriesClient | None = None

    def __enter__(self) -> "StorySpoilerClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the client and release resources."""
        self._http.close()

    @property
    def base_url(self) -> str:
        """The base URL of the service."""
        return self._http.base_url

    @property
    def token(self) -> Token:
        """The bearer token this client presents."""
        return self._token

    @property
    def timeout(self) -> float:
        """Request timeout in seconds."""
        return self._timeout

    @property
    def http(self) -> HTTPClient:
        """The underlying HTTP client, for generic step execution."""
        return self._http

    @property
    def stories(self) -> StoriesClient:
        """Access story endpoints (Story/*).

        Returns:
            StoriesClient instance sharing this client's connection.
        """
        if self._stories is None:
            self._stories = StoriesClient(self._http)
        return self._stories

    def __repr__(self) -> str:
        return f"StorySpoilerClient(base_url={self.base_url!r}, token={self._token!r})"
