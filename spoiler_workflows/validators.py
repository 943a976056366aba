"""
Response contract checks for workflow steps.

These validators provide reusable assertion functions that can be
attached to workflow steps to verify a reply after each call. Each
assertion receives an ObservedResponse and raises ContractMismatchError
(or MalformedResponseError) when the reply diverges from the contract.

Example:
    step(
        "create",
        "Create a story with required fields",
        method="POST",
        path="Story/Create",
        expect_status=201,
        assertions=[
            ResponseValidator.message_equals("Successfully created!"),
            ResponseValidator.story_id_present(),
        ],
    )
"""

import json
from typing import Callable

from pydantic import ValidationError

from spoiler_client.exceptions import ContractMismatchError, MalformedResponseError
from spoiler_client.models import ApiResponse, RawResponse


def parse_api_response(raw: RawResponse) -> ApiResponse:
    """Parse a reply body into the normalized ``{message, storyId?}`` shape.

    Raises:
        MalformedResponseError: If the body is empty, not JSON, not a JSON
            object, or carries fields of the wrong type.
    """
    if not raw.body.strip():
        raise MalformedResponseError("Response body is empty", raw_body=raw.body)
    try:
        payload = json.loads(raw.body)
    except ValueError as e:
        raise MalformedResponseError(f"Response body is not JSON: {e}", raw_body=raw.body) from e
    if not isinstance(payload, dict):
        raise MalformedResponseError(
            f"Expected a JSON object, got {type(payload).__name__}",
            raw_body=raw.body,
        )
    try:
        return ApiResponse.model_validate(payload)
    except ValidationError as e:
        raise MalformedResponseError(
            f"Response fields have unexpected types: {e.error_count()} error(s)",
            raw_body=raw.body,
        ) from e


class ObservedResponse:
    """A raw reply plus its lazily parsed contract shape.

    Parsing happens on first access to ``parsed`` so steps that only check
    the status code never fail on an unstructured body. The outcome is
    cached, so a body that cannot be parsed raises the same error on every
    access.
    """

    def __init__(self, raw: RawResponse):
        self.raw = raw
        self._parsed: ApiResponse | None = None
        self._error: MalformedResponseError | None = None

    @property
    def status_code(self) -> int:
        return self.raw.status_code

    @property
    def body(self) -> str:
        return self.raw.body

    @property
    def parsed(self) -> ApiResponse:
        if self._error is not None:
            raise self._error
        if self._parsed is None:
            try:
                self._parsed = parse_api_response(self.raw)
            except MalformedResponseError as e:
                self._error = e
                raise
        return self._parsed


# Type alias for assertion functions
AssertionFunc = Callable[[ObservedResponse], None]


def check_status(observed: ObservedResponse, expected: int) -> None:
    """Assert the observed status code."""
    if observed.status_code != expected:
        raise ContractMismatchError(
            f"Expected status {expected}, got {observed.status_code}",
            expected=expected,
            actual=observed.status_code,
        )


class ResponseValidator:
    """Helpers for validating message/field contracts."""

    @staticmethod
    def message_equals(expected: str) -> AssertionFunc:
        """Assert the reply's message matches exactly."""
        def check(observed: ObservedResponse) -> None:
            actual = observed.parsed.message
            if actual != expected:
                raise ContractMismatchError(
                    f"Expected message {expected!r}, got {actual!r}",
                    expected=expected,
                    actual=actual,
                )
        return check

    @staticmethod
    def story_id_present() -> AssertionFunc:
        """Assert the reply carries a non-empty storyId."""
        def check(observed: ObservedResponse) -> None:
            story_id = observed.parsed.story_id
            if story_id is None or not story_id.strip():
                raise ContractMismatchError(
                    "Expected a non-empty storyId",
                    expected="non-empty storyId",
                    actual=story_id,
                )
        return check

    @staticmethod
    def body_contains(marker: str, case_sensitive: bool = False) -> AssertionFunc:
        """Assert the raw body contains a marker.

        This is a presence check on the raw text, not a structural one.
        """
        def check(observed: ObservedResponse) -> None:
            body = observed.body
            found = marker in body if case_sensitive else marker.lower() in body.lower()
            if not found:
                raise ContractMismatchError(
                    f"Expected body to contain {marker!r}",
                    expected=marker,
                    actual=body,
                )
        return check
