"""
Fluent story builders for workflow scenarios.

Example:
    MY_STORY = (
        story()
        .titled("My Test Story")
        .described("Meowsies")
        .with_url("https://example.com/poster.png")
        .build()
    )
"""

from typing import Self

from spoiler_client.models import StoryEntity


class StoryBuilder:
    """Fluent builder for StoryEntity payloads."""

    def __init__(self):
        self._title = ""
        self._description = ""
        self._url: str | None = None

    def titled(self, title: str) -> Self:
        self._title = title
        return self

    def described(self, description: str) -> Self:
        self._description = description
        return self

    def with_url(self, url: str) -> Self:
        self._url = url
        return self

    def empty(self) -> Self:
        """Clear title and description, leaving the story invalid for create."""
        self._title = ""
        self._description = ""
        return self

    def build(self) -> StoryEntity:
        return StoryEntity(title=self._title, description=self._description, url=self._url)


def story() -> StoryBuilder:
    """Create a new StoryBuilder."""
    return StoryBuilder()
