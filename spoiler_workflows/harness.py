"""
Top-level harness run: resolve authentication once, then execute a scenario.
"""

import logging
from typing import Any

from spoiler_client.auth import resolve

from .report import RunReport
from .runner import WorkflowRunner
from .scenarios.base import WorkflowScenario
from .scenarios.story_crud import STORY_CRUD_SCENARIO
from .settings import HarnessSettings

logger = logging.getLogger(__name__)


def run_harness(
    settings: HarnessSettings,
    scenario: WorkflowScenario = STORY_CRUD_SCENARIO,
    transport: Any = None,
) -> RunReport:
    """Run ``scenario`` against the configured service.

    Args:
        settings: Service location, cached token and fallback credentials.
        scenario: Steps to execute (default: the story CRUD contract).
        transport: Custom httpx transport (e.g., for testing).

    Returns:
        The completed run report.

    Raises:
        AuthenticationError: If no valid token could be obtained; no step
            runs in that case.
    """
    client = resolve(
        settings.cached_token,
        settings.credentials(),
        settings.base_url,
        timeout=settings.timeout,
        transport=transport,
    )
    with client:
        runner = WorkflowRunner(client, verbose=settings.verbose)
        report = runner.run(scenario)

    logger.info(
        "Scenario %r finished: %d/%d steps passed",
        report.scenario,
        len(report.steps) - len(report.failed_steps),
        len(report.steps),
    )
    return report
