"""StorySpoil API client library.

This module provides a typed client for the StorySpoil REST API together
with the authentication resolver used by the contract harness.

Example:
    Resolving an authenticated client::

        from spoiler_client import Credentials, resolve

        client = resolve(
            cached_token="eyJ...",
            credentials=Credentials(username="user", password="secret"),
            base_url="https://d3s5nxhwblsjbi.cloudfront.net/api/",
        )
        with client:
            print(client.stories.all().status_code)

Exports:
    StorySpoilerClient: Authenticated client for the StorySpoil REST API.
    resolve / exchange / probe: Authentication resolution.

    Exceptions:
        StorySpoilerError: Base exception for all harness errors.
        ConnectionError: Failed to connect to the server.
        TimeoutError: Request timed out.
        AuthenticationError: Cached token rejected and login failed.
        StepError: Failure attributed to one workflow step.
        MissingPreconditionError: Required workflow state is unset.
        ContractMismatchError: Observed response diverged from the contract.
        MalformedResponseError: Response body could not be parsed.
"""

from spoiler_client.auth import ProbeOutcome, exchange, probe, resolve
from spoiler_client.client import StorySpoilerClient
from spoiler_client.exceptions import (
    AuthenticationError,
    ConnectionError,
    ContractMismatchError,
    MalformedResponseError,
    MissingPreconditionError,
    StepError,
    StorySpoilerError,
    TimeoutError,
)
from spoiler_client.models import ApiResponse, Credentials, RawResponse, StoryEntity, Token

__all__ = [
    # Main client
    "StorySpoilerClient",
    # Authentication
    "ProbeOutcome",
    "exchange",
    "probe",
    "resolve",
    # Exceptions
    "StorySpoilerError",
    "ConnectionError",
    "TimeoutError",
    "AuthenticationError",
    "StepError",
    "MissingPreconditionError",
    "ContractMismatchError",
    "MalformedResponseError",
    # Models
    "ApiResponse",
    "Credentials",
    "RawResponse",
    "StoryEntity",
    "Token",
]
