"""
Workflow scenario definitions.

Each scenario is a declarative, ordered list of steps executed by the
WorkflowRunner.
"""

from .base import WorkflowScenario, WorkflowStep, step
from .story_crud import SENTINEL_STORY_ID, STORY_CRUD_SCENARIO

__all__ = [
    "WorkflowScenario",
    "WorkflowStep",
    "step",
    "SENTINEL_STORY_ID",
    "STORY_CRUD_SCENARIO",
]
