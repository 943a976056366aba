"""
Step verdicts and the run-level summary.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class RunStatus(str, Enum):
    """Lifecycle of a run: PENDING -> RUNNING -> COMPLETED.

    A run aborted during authentication never produces a report.
    """

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"


@dataclass
class StepFailure:
    """One reason a step failed.

    Args:
        kind: ``contract_mismatch``, ``malformed_response``,
            ``missing_precondition`` or ``transport_error``.
        message: Human-readable detail.
    """

    kind: str
    message: str


@dataclass
class StepResult:
    """Verdict for one executed step.

    Args:
        order: 1-based position in the scenario.
        name: Step name.
        method: HTTP method, as declared.
        path: Rendered path, or the template if it could not be rendered.
        status_code: Observed status, None if no call was made.
        body: Observed raw body.
        failures: Every contract the step broke; empty when it passed.
    """

    order: int
    name: str
    method: str
    path: str
    status_code: int | None = None
    body: str = ""
    failures: list[StepFailure] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.failures

    def to_dict(self) -> dict[str, Any]:
        return {
            "order": self.order,
            "name": self.name,
            "method": self.method,
            "path": self.path,
            "passed": self.passed,
            "status_code": self.status_code,
            "body": self.body,
            "failures": [{"kind": f.kind, "message": f.message} for f in self.failures],
        }


@dataclass
class RunReport:
    """Aggregate of all step verdicts for one scenario run."""

    scenario: str
    status: RunStatus = RunStatus.PENDING
    steps: list[StepResult] = field(default_factory=list)

    def add(self, result: StepResult) -> None:
        self.steps.append(result)

    @property
    def passed(self) -> bool:
        """True iff the run completed and every step passed."""
        return self.status is RunStatus.COMPLETED and all(s.passed for s in self.steps)

    @property
    def failed_steps(self) -> list[StepResult]:
        return [s for s in self.steps if not s.passed]

    def summary(self) -> str:
        """Render a plain-text table of step verdicts."""
        lines = [f"Scenario: {self.scenario} [{self.status.value}]"]
        for result in self.steps:
            verdict = "PASS" if result.passed else "FAIL"
            status = result.status_code if result.status_code is not None else "-"
            lines.append(f"  {result.order}. {verdict} {result.name} ({result.method} {result.path}) -> {status}")
            for failure in result.failures:
                lines.append(f"       {failure.kind}: {failure.message}")
        passed = len(self.steps) - len(self.failed_steps)
        lines.append(f"Result: {'PASSED' if self.passed else 'FAILED'} ({passed}/{len(self.steps)} steps passed)")
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        return {
            "scenario": self.scenario,
            "status": self.status.value,
            "passed": self.passed,
            "steps": [s.to_dict() for s in self.steps],
        }
