"""
End-to-end tests for the story CRUD contract scenario.

These tests run the declared seven-step scenario through the full harness
(authentication resolution plus runner) against the in-process fake of
the StorySpoil service.
"""

import json

import pytest

from spoiler_client.auth import resolve
from spoiler_client.exceptions import AuthenticationError
from spoiler_client.models import Credentials
from spoiler_workflows.harness import run_harness
from spoiler_workflows.report import RunStatus
from spoiler_workflows.runner import WorkflowRunner
from spoiler_workflows.scenarios.base import WorkflowScenario
from spoiler_workflows.scenarios.story_crud import (
    CREATED_MESSAGE,
    DELETE_FAILED_MESSAGE,
    DELETED_MESSAGE,
    EDITED_MESSAGE,
    EMPTY_STORY,
    NEW_STORY,
    NOT_FOUND_MESSAGE,
    SENTINEL_STORY_ID,
    STORY_CRUD_SCENARIO,
)

from tests.fixtures.story_service import (
    BASE_URL,
    STALE_TOKEN,
    VALID_PASSWORD,
    VALID_USERNAME,
    FakeStoryService,
)

CREDENTIALS = Credentials(username=VALID_USERNAME, password=VALID_PASSWORD)


def messages(report) -> list[tuple[int | None, str | None]]:
    """(status, msg) pairs for every step, in order."""
    pairs = []
    for result in report.steps:
        body = json.loads(result.body) if result.body.strip().startswith("{") else {}
        pairs.append((result.status_code, body.get("msg")))
    return pairs


class TestScenarioDefinition:
    """The declared sequence matches the service contract table."""

    def test_step_order(self) -> None:
        assert [s.name for s in STORY_CRUD_SCENARIO.steps] == [
            "create_story",
            "edit_story",
            "list_stories",
            "delete_story",
            "create_story_invalid",
            "edit_missing_story",
            "delete_missing_story",
        ]

    def test_methods_paths_and_statuses(self) -> None:
        assert [(s.method, s.path, s.expect_status) for s in STORY_CRUD_SCENARIO.steps] == [
            ("POST", "Story/Create", 201),
            ("PUT", "Story/Edit/{story_id}", 200),
            ("GET", "Story/All", 200),
            ("DELETE", "Story/Delete/{story_id}", 200),
            ("POST", "Story/Create", 400),
            ("PUT", f"Story/Edit/{SENTINEL_STORY_ID}", 404),
            ("DELETE", f"Story/Delete/{SENTINEL_STORY_ID}", 400),
        ]

    def test_only_create_captures_the_id(self) -> None:
        assert [s.captures_story_id for s in STORY_CRUD_SCENARIO.steps] == [
            True, False, False, False, False, False, False,
        ]

    def test_payloads(self) -> None:
        assert NEW_STORY.title == "My Test Story"
        assert NEW_STORY.description == "Meowsies"
        assert NEW_STORY.url
        assert EMPTY_STORY.to_payload() == {"Title": "", "Description": "", "url": None}

    def test_sentinel_is_nil_uuid(self) -> None:
        assert SENTINEL_STORY_ID == "00000000-0000-0000-0000-000000000000"


class TestFullRun:
    """The whole harness against a well-behaved service."""

    def test_all_steps_pass(self, harness_settings, service_transport) -> None:
        report = run_harness(harness_settings, transport=service_transport)

        assert report.status is RunStatus.COMPLETED
        assert report.passed, report.summary()
        assert len(report.steps) == 7

    def test_observed_contracts_in_order(self, harness_settings, service_transport) -> None:
        report = run_harness(harness_settings, transport=service_transport)

        pairs = messages(report)
        assert pairs[0] == (201, CREATED_MESSAGE)
        assert pairs[1] == (200, EDITED_MESSAGE)
        assert pairs[2][0] == 200
        assert pairs[3] == (200, DELETED_MESSAGE)
        assert pairs[4][0] == 400
        assert pairs[5] == (404, NOT_FOUND_MESSAGE)
        assert pairs[6] == (400, DELETE_FAILED_MESSAGE)

    def test_created_id_reused_by_edit_and_delete(self, harness_settings, service_transport) -> None:
        report = run_harness(harness_settings, transport=service_transport)

        story_id = json.loads(report.steps[0].body)["storyId"]
        assert report.steps[1].path == f"Story/Edit/{story_id}"
        assert report.steps[3].path == f"Story/Delete/{story_id}"

    def test_list_body_mentions_a_title(self, harness_settings, service_transport) -> None:
        report = run_harness(harness_settings, transport=service_transport)

        assert "title" in report.steps[2].body.lower()
        assert "Edited Story Title" in report.steps[2].body

    def test_run_leaves_no_story_behind(self, harness_settings, story_service: FakeStoryService, service_transport) -> None:
        run_harness(harness_settings, transport=service_transport)
        assert story_service.stories == {}

    def test_stale_cached_token_still_passes(self, harness_settings, story_service: FakeStoryService, service_transport) -> None:
        settings = harness_settings.model_copy(update={"cached_token": STALE_TOKEN})

        report = run_harness(settings, transport=service_transport)

        assert report.passed
        assert story_service.login_calls == 1

    def test_authentication_failure_aborts_before_any_step(
        self, harness_settings, story_service: FakeStoryService, service_transport
    ) -> None:
        settings = harness_settings.model_copy(update={"cached_token": STALE_TOKEN, "password": "wrong"})

        with pytest.raises(AuthenticationError):
            run_harness(settings, transport=service_transport)

        story_paths = [path for _, path in story_service.requests if "/Story/" in path and path != "/api/Story/All"]
        assert story_paths == []


class TestContractProperties:
    """Properties of the service contract exercised through the runner."""

    @pytest.fixture
    def client(self, story_service: FakeStoryService, service_transport):
        with resolve(story_service.issue_token(), CREDENTIALS, BASE_URL, transport=service_transport) as client:
            yield client

    def _run(self, client, *names: str, state=None):
        steps = tuple(s for s in STORY_CRUD_SCENARIO.steps if s.name in names)
        scenario = WorkflowScenario(name="subset", description="", steps=steps)
        return WorkflowRunner(client, verbose=False).run(scenario, state=state)

    def test_delete_twice_transitions_to_failure_contract(self, client) -> None:
        """Deleting twice is not a no-op: the second delete hits the not-found contract."""
        runner = WorkflowRunner(client, verbose=False)
        created = runner.run(WorkflowScenario(name="c", description="", steps=(STORY_CRUD_SCENARIO.steps[0],)))
        assert created.passed
        state = runner.state

        first = self._run(client, "delete_story", state=state)
        second = self._run(client, "delete_story", state=state)

        assert first.passed
        assert second.steps[0].status_code == 400
        assert json.loads(second.steps[0].body)["msg"] == DELETE_FAILED_MESSAGE

    def test_invalid_create_is_rejected_regardless_of_prior_steps(self, client) -> None:
        report = self._run(client, "create_story_invalid")
        assert report.passed

    def test_sentinel_edit_independent_of_create(self, client) -> None:
        report = self._run(client, "edit_missing_story", "delete_missing_story")
        assert report.passed

    def test_dependent_steps_fail_without_create(self, client) -> None:
        report = self._run(client, "edit_story", "list_stories", "delete_story")

        assert [r.passed for r in report.steps] == [False, False, False]
        assert report.steps[0].failures[0].kind == "missing_precondition"
        # List runs but sees no story, so its weak title marker is absent
        assert report.steps[1].status_code == 200
        assert report.steps[2].failures[0].kind == "missing_precondition"


class TestBrokenService:
    """A misbehaving service shows up as per-step failures, not a crash."""

    def test_outage_fails_every_step_but_completes(
        self, harness_settings, story_service: FakeStoryService, service_transport
    ) -> None:
        story_service.outage_status = 503

        report = run_harness(harness_settings, transport=service_transport)

        assert report.status is RunStatus.COMPLETED
        assert not report.passed
        assert len(report.steps) == 7
        kinds = {f.kind for r in report.steps for f in r.failures}
        assert kinds == {"contract_mismatch", "malformed_response", "missing_precondition"}
