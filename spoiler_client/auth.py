"""Authentication resolution for the StorySpoil service.

Produces the authenticated client a harness run works with. A cached token
is tried first with a cheap read-only probe; only if the service rejects it
(401/403) are the fallback credentials exchanged for a fresh token.

The probe answers exactly one question: is this token still accepted. A
probe that fails for any other reason (5xx, unreachable host) keeps the
cached token and leaves the failure for the first real step to surface.
"""

import json
import logging
from enum import Enum
from typing import Any

import httpx

from spoiler_client._http import DEFAULT_TIMEOUT, HTTPClient
from spoiler_client.client import StorySpoilerClient
from spoiler_client.exceptions import AuthenticationError, ConnectionError, TimeoutError
from spoiler_client.models import Credentials, Token

logger = logging.getLogger(__name__)

LOGIN_PATH = "User/Authentication"
TOKEN_FIELD = "accesstoken"

# Probe statuses that mean the token itself is not accepted
AUTH_REJECTION_CODES = {401, 403}


class ProbeOutcome(str, Enum):
    """Result of probing the service with a token."""

    ACCEPTED = "accepted"
    REJECTED = "rejected"


def probe(client: StorySpoilerClient) -> ProbeOutcome:
    """Check whether the service accepts the client's token.

    Issues ``GET Story/All``. Only 401 and 403 count as a rejection; any
    other status, or a transport failure, counts as accepted.

    Args:
        client: The client holding the token to check.

    Returns:
        ProbeOutcome.REJECTED if the token was refused, else ACCEPTED.
    """
    try:
        response = client.stories.all()
    except (ConnectionError, TimeoutError) as e:
        logger.warning("Token probe could not reach the service: %s", e)
        return ProbeOutcome.ACCEPTED

    if response.status_code in AUTH_REJECTION_CODES:
        logger.info("Token probe rejected with HTTP %s", response.status_code)
        return ProbeOutcome.REJECTED
    return ProbeOutcome.ACCEPTED


def _extract_token(body: str) -> str | None:
    """Return the access token from a login reply, matching keys case-insensitively."""
    try:
        payload = json.loads(body)
    except ValueError:
        return None
    if not isinstance(payload, dict):
        return None
    for key, value in payload.items():
        if str(key).lower() == TOKEN_FIELD and isinstance(value, str):
            return value
    return None


def exchange(
    credentials: Credentials,
    base_url: str,
    timeout: float = DEFAULT_TIMEOUT,
    transport: httpx.BaseTransport | None = None,
) -> Token:
    """Exchange credentials for a fresh bearer token.

    Calls ``POST User/Authentication`` with ``{userName, password}`` on an
    unauthenticated connection.

    Args:
        credentials: The fallback login pair.
        base_url: The base URL of the service.
        timeout: Request timeout in seconds.
        transport: Custom transport (e.g., MockTransport for testing).

    Returns:
        The issued token.

    Raises:
        AuthenticationError: If the login call fails, returns a non-success
            status, or returns no usable ``accessToken``.
    """
    with HTTPClient(base_url=base_url, timeout=timeout, transport=transport) as http:
        try:
            response = http.post(LOGIN_PATH, json=credentials.login_payload())
        except (ConnectionError, TimeoutError) as e:
            raise AuthenticationError(f"Login request failed: {e}") from e

    if not response.is_success:
        raise AuthenticationError(
            f"Failed to authenticate as {credentials.username!r}",
            status_code=response.status_code,
            response_body=response.body,
        )

    access_token = _extract_token(response.body)
    if access_token is None or not access_token.strip():
        raise AuthenticationError(
            "Login reply carried no accessToken",
            status_code=response.status_code,
            response_body=response.body,
        )
    return Token(access_token=access_token)


def resolve(
    cached_token: Token | str | None,
    credentials: Credentials,
    base_url: str,
    timeout: float = DEFAULT_TIMEOUT,
    transport: Any = None,
) -> StorySpoilerClient:
    """Produce an authenticated client, falling back to a fresh login once.

    Args:
        cached_token: Previously obtained token; blank or None skips the probe.
        credentials: Login pair used if the cached token is rejected.
        base_url: The base URL of the service.
        timeout: Request timeout in seconds.
        transport: Custom transport shared by every connection opened here.

    Returns:
        A client holding a non-empty token the service accepted (or could
        not be shown to reject).

    Raises:
        AuthenticationError: If a fresh token is needed and cannot be obtained.
    """
    if isinstance(cached_token, str):
        cached_token = Token(access_token=cached_token) if cached_token.strip() else None

    if cached_token is not None:
        client = StorySpoilerClient(base_url, cached_token, timeout=timeout, transport=transport)
        try:
            outcome = probe(client)
        except Exception:
            client.close()
            raise
        if outcome is ProbeOutcome.ACCEPTED:
            logger.info("Using cached token")
            return client
        client.close()
    else:
        logger.info("No cached token configured")

    fresh_token = exchange(credentials, base_url, timeout=timeout, transport=transport)
    logger.info("Obtained a fresh token for %r", credentials.username)
    return StorySpoilerClient(base_url, fresh_token, timeout=timeout, transport=transport)
