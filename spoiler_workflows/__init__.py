"""
Contract workflows for the StorySpoil API.

This package contains the ordered, state-carrying step sequence that
verifies the StorySpoil service's contracts. Each scenario is defined
declaratively and executed by the WorkflowRunner.

Structure:
- scenarios/: Scenario definitions (data-driven)
- builders.py: Fluent story payload builders
- validators.py: Response contract parsing and assertions
- state.py: Immutable cross-step workflow state
- runner.py: WorkflowRunner class that executes scenarios
- report.py: Step verdicts and run summary
- settings.py: Harness configuration
- harness.py: Authentication plus scenario execution
"""

from .harness import run_harness
from .report import RunReport, RunStatus, StepFailure, StepResult
from .runner import WorkflowRunner
from .scenarios import STORY_CRUD_SCENARIO, WorkflowScenario, WorkflowStep
from .settings import HarnessSettings, load_settings
from .state import WorkflowState

__all__ = [
    "run_harness",
    "RunReport",
    "RunStatus",
    "StepFailure",
    "StepResult",
    "WorkflowRunner",
    "STORY_CRUD_SCENARIO",
    "WorkflowScenario",
    "WorkflowStep",
    "HarnessSettings",
    "load_settings",
    "WorkflowState",
]
