"""
Story CRUD contract scenario.

Drives the StorySpoil story endpoints through create, edit, list and
delete, then through the negative paths. Steps 2 and 4 reuse the id step 1
returns; steps 5 to 7 must fail in the exact ways the service documents.

Tests:
- Create with required fields returns 201, a message and a storyId
- Edit of the created story returns 200
- List returns 200 and a body mentioning a title
- Delete of the created story returns 200
- Create without title/description returns 400
- Edit of an id that never existed returns 404 "No spoilers..."
- Delete of an id that never existed returns 400
"""

from ..builders import story
from ..validators import ResponseValidator
from .base import WorkflowScenario, step


# Nil UUID; never assigned by the service
SENTINEL_STORY_ID = "00000000-0000-0000-0000-000000000000"

POSTER_URL = (
    "https://www.artdesign.ph/wp-content/uploads/2024/05/"
    "typ130-No-Problems-Just-Meow-Meow-Poster-02.png"
)

CREATED_MESSAGE = "Successfully created!"
EDITED_MESSAGE = "Successfully edited"
DELETED_MESSAGE = "Deleted successfully!"
NOT_FOUND_MESSAGE = "No spoilers..."
DELETE_FAILED_MESSAGE = "Unable to delete this story spoiler!"


# =============================================================================
# Story Payloads
# =============================================================================

NEW_STORY = story().titled("My Test Story").described("Meowsies").with_url(POSTER_URL).build()

EDITED_STORY = (
    story()
    .titled("Edited Story Title")
    .described("Edited story description")
    .with_url(POSTER_URL)
    .build()
)

EMPTY_STORY = story().empty().build()

MISSING_STORY = story().titled("NonExistent").described("Trying to edit missing story").build()


# =============================================================================
# Scenario Definition
# =============================================================================

STORY_CRUD_SCENARIO = WorkflowScenario(
    name="Story CRUD Contract",
    description="Create, edit, list and delete a story, then probe the failure contracts",
    steps=(
        step(
            "create_story",
            "Create a story with required fields",
            method="POST",
            path="Story/Create",
            body=NEW_STORY,
            expect_status=201,
            assertions=[
                ResponseValidator.message_equals(CREATED_MESSAGE),
                ResponseValidator.story_id_present(),
            ],
            captures_story_id=True,
        ),
        step(
            "edit_story",
            "Edit the created story",
            method="PUT",
            path="Story/Edit/{story_id}",
            body=EDITED_STORY,
            expect_status=200,
            assertions=[ResponseValidator.message_equals(EDITED_MESSAGE)],
        ),
        step(
            "list_stories",
            "List all stories",
            method="GET",
            path="Story/All",
            expect_status=200,
            # Presence of a title field only; list shape is not asserted
            assertions=[ResponseValidator.body_contains("title")],
        ),
        step(
            "delete_story",
            "Delete the created story",
            method="DELETE",
            path="Story/Delete/{story_id}",
            expect_status=200,
            assertions=[ResponseValidator.message_equals(DELETED_MESSAGE)],
        ),
        step(
            "create_story_invalid",
            "Create a story without title and description",
            method="POST",
            path="Story/Create",
            body=EMPTY_STORY,
            expect_status=400,
        ),
        step(
            "edit_missing_story",
            "Edit a story that does not exist",
            method="PUT",
            path=f"Story/Edit/{SENTINEL_STORY_ID}",
            body=MISSING_STORY,
            expect_status=404,
            assertions=[ResponseValidator.message_equals(NOT_FOUND_MESSAGE)],
        ),
        step(
            "delete_missing_story",
            "Delete a story that does not exist",
            method="DELETE",
            path=f"Story/Delete/{SENTINEL_STORY_ID}",
            expect_status=400,
            assertions=[ResponseValidator.message_equals(DELETE_FAILED_MESSAGE)],
        ),
    ),
)
