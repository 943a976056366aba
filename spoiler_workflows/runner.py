"""
Workflow execution engine.

The WorkflowRunner executes workflow scenarios step-by-step against one
authenticated client, threading the workflow state from step to step and
recording a verdict for every step.
"""

import logging

from spoiler_client.client import StorySpoilerClient
from spoiler_client.exceptions import (
    ConnectionError,
    StepError,
    TimeoutError,
)

from .report import RunReport, RunStatus, StepFailure, StepResult
from .scenarios.base import WorkflowScenario, WorkflowStep
from .state import WorkflowState
from .validators import ObservedResponse, check_status

logger = logging.getLogger(__name__)


class WorkflowRunner:
    """Executes workflow scenarios against the StorySpoil API.

    The runner handles:
    - Running each workflow step in declared order, never reordering
    - Rendering paths from the workflow state
    - Checking the status code and running every assertion
    - Carrying the created story id forward
    - Recording failures without stopping the sequence
    - Printing progress for debugging

    Args:
        client: Authenticated client used for every step.
        verbose: Whether to print progress messages.
    """

    def __init__(self, client: StorySpoilerClient, verbose: bool = True):
        self.client = client
        self.verbose = verbose
        self.state = WorkflowState()
        self.status = RunStatus.PENDING

    def run(self, scenario: WorkflowScenario, state: WorkflowState | None = None) -> RunReport:
        """Execute a complete workflow scenario.

        Args:
            scenario: The scenario definition to execute.
            state: Initial workflow state (default: empty).

        Returns:
            The run report; inspect ``passed`` for the overall verdict.
        """
        self._print_header(scenario)
        report = RunReport(scenario=scenario.name)
        self.state = state if state is not None else WorkflowState()

        self.status = report.status = RunStatus.RUNNING
        for order, step in enumerate(scenario.steps, 1):
            self._print_step(order, step)
            result, self.state = self._execute_step(order, step, self.state)
            report.add(result)
            self._print_step_complete(result)

        self.status = report.status = RunStatus.COMPLETED
        self._print_footer(report)
        return report

    def _execute_step(
        self,
        order: int,
        step: WorkflowStep,
        state: WorkflowState,
    ) -> tuple[StepResult, WorkflowState]:
        """Execute a single workflow step.

        Args:
            order: 1-based position of the step.
            step: The step to execute.
            state: State produced by the preceding steps.

        Returns:
            The step's verdict and the state for the next step.
        """
        result = StepResult(order=order, name=step.name, method=step.method, path=step.path)

        try:
            result.path = step.render_path(state)
        except StepError as e:
            result.failures.append(StepFailure(e.kind, str(e)))
            logger.warning("Step %s (%s) skipped: %s", order, step.name, e)
            return result, state

        try:
            raw = self.client.http.request(step.method, result.path, json=step.build_body(state))
        except (ConnectionError, TimeoutError) as e:
            result.failures.append(StepFailure("transport_error", str(e)))
            logger.warning("Step %s (%s) could not reach the service: %s", order, step.name, e)
            return result, state

        result.status_code = raw.status_code
        result.body = raw.body
        self._log(f"  Response: {raw.status_code} {raw.body}")

        observed = ObservedResponse(raw)
        checks = [lambda o: check_status(o, step.expect_status), *step.assertions]
        for check in checks:
            try:
                check(observed)
            except StepError as e:
                e.step_name = step.name
                failure = StepFailure(e.kind, str(e))
                # An unparseable body fails every body check the same way
                if failure not in result.failures:
                    result.failures.append(failure)

        if result.passed and step.captures_story_id:
            try:
                story_id = observed.parsed.story_id
            except StepError as e:
                result.failures.append(StepFailure(e.kind, str(e)))
            else:
                if story_id:
                    state = state.with_story_id(story_id)

        if result.passed:
            logger.info("Step %s (%s) passed with HTTP %s", order, step.name, raw.status_code)
        else:
            logger.warning(
                "Step %s (%s) failed: %s",
                order,
                step.name,
                "; ".join(f.message for f in result.failures),
            )
        return result, state

    # -------------------------------------------------------------------------
    # Logging Helpers
    # -------------------------------------------------------------------------

    def _log(self, message: str) -> None:
        """Print a message if verbose mode is enabled."""
        if self.verbose:
            print(message)

    def _print_header(self, scenario: WorkflowScenario) -> None:
        if self.verbose:
            print(f"\n{'='*60}")
            print(f"Running: {scenario.name}")
            print(f"Description: {scenario.description}")
            print(f"Target: {self.client.base_url}")
            print(f"Steps: {len(scenario.steps)}")
            print(f"{'='*60}\n")

    def _print_step(self, index: int, step: WorkflowStep) -> None:
        if self.verbose:
            print(f"Step {index}: {step.description}")

    def _print_step_complete(self, result: StepResult) -> None:
        if not self.verbose:
            return
        if result.passed:
            print("  ✓ Passed\n")
        else:
            for failure in result.failures:
                print(f"  ✗ {failure.kind}: {failure.message}")
            print()

    def _print_footer(self, report: RunReport) -> None:
        if self.verbose:
            passed = len(report.steps) - len(report.failed_steps)
            mark = "✅" if report.passed else "❌"
            print(f"\n{'='*60}")
            print(f"{mark} Scenario '{report.scenario}' {'passed' if report.passed else 'failed'}")
            print(f"   {passed}/{len(report.steps)} steps passed")
            print(f"{'='*60}\n")
