"""
Base classes for workflow scenario definitions.

This module provides the DSL for declaring contract scenarios: each step
names one HTTP call, its body, the expected status and the assertions run
on the reply. A scenario is a tuple of steps executed in literal order.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Literal

from spoiler_client.models import StoryEntity
from spoiler_workflows.state import WorkflowState
from spoiler_workflows.validators import AssertionFunc

HttpMethod = Literal["GET", "POST", "PUT", "DELETE"]

# Body builders receive the current state and return a JSON body
BodyBuilder = Callable[[WorkflowState], dict[str, Any]]

STORY_ID_PLACEHOLDER = "{story_id}"


@dataclass(frozen=True)
class WorkflowStep:
    """A single step in a workflow scenario.

    Args:
        name: Short identifier used in reports.
        description: Human-readable description of the step.
        method: HTTP method to issue.
        path: Path template; ``{story_id}`` is replaced by the last created id.
        body: Optional body builder.
        expect_status: Expected HTTP status code.
        assertions: Assertion functions to run on the reply.
        captures_story_id: Whether a passing reply's storyId is carried forward.
    """

    name: str
    description: str
    method: HttpMethod
    path: str
    body: BodyBuilder | None = None

    # Expected outcomes
    expect_status: int = 200
    assertions: tuple[AssertionFunc, ...] = ()

    captures_story_id: bool = False

    @property
    def requires_story_id(self) -> bool:
        """Whether the path depends on an id produced by an earlier step."""
        return STORY_ID_PLACEHOLDER in self.path

    def render_path(self, state: WorkflowState) -> str:
        """Substitute workflow state into the path template.

        Raises:
            MissingPreconditionError: If the path needs a story id and the
                state has none.
        """
        if not self.requires_story_id:
            return self.path
        story_id = state.require_story_id(self.name)
        return self.path.replace(STORY_ID_PLACEHOLDER, story_id)

    def build_body(self, state: WorkflowState) -> dict[str, Any] | None:
        if self.body is None:
            return None
        return self.body(state)


@dataclass(frozen=True)
class WorkflowScenario:
    """Complete workflow scenario definition.

    Args:
        name: Short name for the scenario.
        description: What the scenario verifies.
        steps: Ordered steps; executed exactly in this order.
    """

    name: str
    description: str
    steps: tuple[WorkflowStep, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        names = [s.name for s in self.steps]
        duplicates = {n for n in names if names.count(n) > 1}
        if duplicates:
            raise ValueError(f"Duplicate step names: {sorted(duplicates)}")


def send_story(story: StoryEntity) -> BodyBuilder:
    """Return a body builder that always sends ``story``."""
    def build(state: WorkflowState) -> dict[str, Any]:
        return story.to_payload()
    return build


def step(
    name: str,
    description: str,
    *,
    method: HttpMethod,
    path: str,
    body: BodyBuilder | StoryEntity | None = None,
    expect_status: int = 200,
    assertions: list[AssertionFunc] | None = None,
    captures_story_id: bool = False,
) -> WorkflowStep:
    """Factory function for creating WorkflowStep instances.

    Args:
        name: Short identifier used in reports.
        description: Human-readable description of the step.
        method: HTTP method to issue.
        path: Path template.
        body: A StoryEntity to send as-is, or a body builder.
        expect_status: Expected HTTP status code.
        assertions: List of assertion functions.
        captures_story_id: Whether a passing reply's storyId is carried forward.

    Returns:
        A configured WorkflowStep instance.
    """
    if isinstance(body, StoryEntity):
        body = send_story(body)
    return WorkflowStep(
        name=name,
        description=description,
        method=method,
        path=path,
        body=body,
        expect_status=expect_status,
        assertions=tuple(assertions or ()),
        captures_story_id=captures_story_id,
    )
