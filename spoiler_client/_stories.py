"""Story sub-client for the StorySpoil API.

This module provides StoriesClient for the story CRUD endpoints
(Story/*). Every method returns the raw response so callers can assert
negative outcomes as well as positive ones.

This is an internal module. Import from `spoiler_client` instead.
"""

from spoiler_client._base import BaseClient
from spoiler_client.models import RawResponse, StoryEntity

CREATE_PATH = "Story/Create"
EDIT_PATH = "Story/Edit/{story_id}"
LIST_PATH = "Story/All"
DELETE_PATH = "Story/Delete/{story_id}"


class StoriesClient(BaseClient):
    """Client for the story endpoints.

    Example:
        >>> with StorySpoilerClient(base_url, token) as client:
        ...     created = client.stories.create(StoryEntity(Title="T", Description="D"))
        ...     created.status_code
        201
    """

    def create(self, story: StoryEntity) -> RawResponse:
        """Create a story (``POST Story/Create``).

        Args:
            story: The story to create.

        Returns:
            The raw reply; 201 with ``msg`` and ``storyId`` on success.
        """
        return self._post(CREATE_PATH, json=story.to_payload())

    def edit(self, story_id: str, story: StoryEntity) -> RawResponse:
        """Replace a story (``PUT Story/Edit/{id}``).

        Args:
            story_id: Identifier returned by create.
            story: The new story content.

        Returns:
            The raw reply; 200 on success, 404 for an unknown id.
        """
        return self._put(EDIT_PATH.format(story_id=story_id), json=story.to_payload())

    def all(self) -> RawResponse:
        """List every story (``GET Story/All``)."""
        return self._get(LIST_PATH)

    def delete(self, story_id: str) -> RawResponse:
        """Delete a story (``DELETE Story/Delete/{id}``).

        Args:
            story_id: Identifier returned by create.

        Returns:
            The raw reply; 200 on success, 400 for an unknown id.
        """
        return self._delete(DELETE_PATH.format(story_id=story_id))
