"""Cross-step workflow state.

The state is an immutable value threaded through the step sequence: each
step receives the current state and the runner hands the next step the
state the previous one returned. Only the create step writes to it.
"""

from pydantic import BaseModel, ConfigDict

from spoiler_client.exceptions import MissingPreconditionError


class WorkflowState(BaseModel):
    """Data produced by one step and consumed by later ones.

    Attributes:
        last_created_story_id: Id returned by the most recent successful
            create step, or None if no create has succeeded yet.
    """

    model_config = ConfigDict(frozen=True)

    last_created_story_id: str | None = None

    def with_story_id(self, story_id: str) -> "WorkflowState":
        """Return a copy carrying ``story_id`` as the last created id."""
        return self.model_copy(update={"last_created_story_id": story_id})

    def require_story_id(self, step_name: str | None = None) -> str:
        """Return the last created id or fail the dependent step.

        Raises:
            MissingPreconditionError: If no create step has produced an id.
        """
        if not self.last_created_story_id:
            raise MissingPreconditionError(
                "No story id available: the create step did not produce one",
                step_name=step_name,
            )
        return self.last_created_story_id
