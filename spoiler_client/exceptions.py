"""Exception hierarchy for the StorySpoil contract harness.

This module defines all exceptions that can be raised by the client library
and the workflow harness built on top of it. The hierarchy separates
setup-phase failures, which abort a run, from per-step failures, which are
recorded against a single step while the run continues.

Exception Hierarchy:
    StorySpoilerError (base)
    ├── ConnectionError - Network/connection failures
    ├── TimeoutError - Request timeout
    ├── AuthenticationError - Cached token rejected and login failed
    └── StepError - A workflow step could not satisfy its contract
        ├── MissingPreconditionError - Required workflow state is unset
        └── ContractMismatchError - Observed status/payload diverged
            └── MalformedResponseError - Body could not be parsed at all

Example:
    Aborting on setup failure::

        try:
            client = resolve(cached_token, credentials, base_url)
        except AuthenticationError as e:
            print(f"Login failed with HTTP {e.status_code}: {e.response_body}")
            raise SystemExit(2)

    Recording a step failure::

        try:
            check_status(observed, 201)
        except ContractMismatchError as e:
            failures.append(str(e))
"""

from typing import Any


class StorySpoilerError(Exception):
    """Base exception for all harness errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
        """
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation of the error."""
        return self.message


class ConnectionError(StorySpoilerError):
    """Failed to connect to the StorySpoil service.

    Attributes:
        message: Human-readable error description.
        url: The URL that failed to connect.
        cause: The underlying exception that caused the connection failure.
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.url = url
        self.cause = cause
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including URL if available."""
        if self.url:
            return f"{self.message} (url: {self.url})"
        return self.message


class TimeoutError(StorySpoilerError):
    """Request timed out.

    Attributes:
        message: Human-readable error description.
        timeout: The timeout value in seconds.
        url: The URL that timed out.
    """

    def __init__(
        self,
        message: str,
        timeout: float | None = None,
        url: str | None = None,
    ) -> None:
        self.timeout = timeout
        self.url = url
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including timeout if available."""
        parts = [self.message]
        if self.timeout is not None:
            parts.append(f"timeout: {self.timeout}s")
        if self.url:
            parts.append(f"url: {self.url}")
        return " ".join(parts) if len(parts) == 1 else f"{parts[0]} ({', '.join(parts[1:])})"


class AuthenticationError(StorySpoilerError):
    """The cached token was rejected and credential exchange failed.

    Raised by the authentication resolver when the login call returns a
    non-success status, the body carries no usable token, or the login
    request cannot be delivered. This is fatal to the run: no step executes
    without a valid authenticated client.

    Attributes:
        message: Human-readable error description.
        status_code: HTTP status of the login call, if one was received.
        response_body: Raw login response body for diagnostics.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_body: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.response_body = response_body
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including status code if available."""
        if self.status_code is not None:
            return f"[HTTP {self.status_code}] {self.message}"
        return self.message


class StepError(StorySpoilerError):
    """Base class for failures attributed to a single workflow step.

    Attributes:
        message: Human-readable error description.
        step_name: Name of the step the failure belongs to, when known.
    """

    kind = "step_error"

    def __init__(self, message: str, step_name: str | None = None) -> None:
        self.step_name = step_name
        super().__init__(message)


class MissingPreconditionError(StepError):
    """A step needs workflow state that no earlier step produced.

    Raised when a step whose path embeds the created story id runs without
    one, i.e. the create step did not succeed. Only the dependent step
    fails; independent steps still run.
    """

    kind = "missing_precondition"


class ContractMismatchError(StepError):
    """Observed status code or payload diverged from the declared contract.

    Attributes:
        expected: The expected value (status code, message, marker).
        actual: The observed value.
    """

    kind = "contract_mismatch"

    def __init__(
        self,
        message: str,
        expected: Any = None,
        actual: Any = None,
        step_name: str | None = None,
    ) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(message, step_name=step_name)


class MalformedResponseError(ContractMismatchError):
    """Response body could not be parsed into the expected shape.

    Reported as a contract mismatch but kept distinct in diagnostics; the
    raw body is always included.

    Attributes:
        raw_body: The unparseable response body.
    """

    kind = "malformed_response"

    def __init__(
        self,
        message: str,
        raw_body: str | None = None,
        step_name: str | None = None,
    ) -> None:
        self.raw_body = raw_body
        super().__init__(message, expected="JSON object", actual=raw_body, step_name=step_name)

    def __str__(self) -> str:
        """Return string representation including the raw body."""
        return f"{self.message} (raw body: {self.raw_body!r})"
