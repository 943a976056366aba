"""Tests for the command-line entry point."""

import json
from pathlib import Path

import httpx
import pytest

import main
from tests.fixtures.story_service import BASE_URL, STALE_TOKEN, VALID_PASSWORD, VALID_USERNAME, FakeStoryService


@pytest.fixture
def env_file(clean_env, tmp_path: Path) -> Path:
    path = tmp_path / ".env"
    path.write_text(
        f"STORYSPOIL_BASE_URL={BASE_URL}\n"
        f"STORYSPOIL_TOKEN={STALE_TOKEN}\n"
        f"STORYSPOIL_USERNAME={VALID_USERNAME}\n"
        f"STORYSPOIL_PASSWORD={VALID_PASSWORD}\n"
    )
    return path


class TestMain:
    """Exit codes and output of main()."""

    def test_passing_run_exits_zero(self, env_file: Path, service_transport, capsys) -> None:
        code = main.main(["--env-file", str(env_file), "--quiet"], transport=service_transport)

        out = capsys.readouterr().out
        assert code == main.EXIT_PASSED
        assert "Result: PASSED (7/7 steps passed)" in out
        assert "Running:" not in out

    def test_verbose_run_prints_progress(self, env_file: Path, service_transport, capsys) -> None:
        main.main(["--env-file", str(env_file)], transport=service_transport)

        out = capsys.readouterr().out
        assert "Running: Story CRUD Contract" in out

    def test_json_report(self, env_file: Path, service_transport, capsys) -> None:
        code = main.main(["--env-file", str(env_file), "--json"], transport=service_transport)

        report = json.loads(capsys.readouterr().out)
        assert code == main.EXIT_PASSED
        assert report["passed"] is True
        assert report["status"] == "completed"
        assert [s["order"] for s in report["steps"]] == [1, 2, 3, 4, 5, 6, 7]

    def test_failed_step_exits_one(
        self, env_file: Path, story_service: FakeStoryService, service_transport, capsys
    ) -> None:
        story_service.outage_status = 500

        code = main.main(["--env-file", str(env_file), "--quiet"], transport=service_transport)

        assert code == main.EXIT_FAILED
        assert "FAIL create_story" in capsys.readouterr().out

    def test_authentication_failure_exits_two(self, env_file: Path, clean_env, service_transport, capsys) -> None:
        clean_env.setenv("STORYSPOIL_PASSWORD", "wrong")

        code = main.main(["--env-file", str(env_file), "--quiet"], transport=service_transport)

        captured = capsys.readouterr()
        assert code == main.EXIT_ABORTED
        assert "Authentication failed" in captured.err
        assert "PASS" not in captured.out

    def test_invalid_configuration_exits_two(self, clean_env, tmp_path: Path, capsys) -> None:
        path = tmp_path / ".env"
        path.write_text("STORYSPOIL_USERNAME=LilTest\n")

        code = main.main(["--env-file", str(path)])

        assert code == main.EXIT_ABORTED
        assert "Invalid configuration" in capsys.readouterr().err

    def test_base_url_flag_overrides_environment(self, env_file: Path, clean_env, service_transport) -> None:
        clean_env.setenv("STORYSPOIL_BASE_URL", "ftp://not-http/api/")

        code = main.main(["--env-file", str(env_file), "--quiet", "--base-url", BASE_URL], transport=service_transport)

        assert code == main.EXIT_PASSED

    def test_dropped_connections_fail_steps_without_crashing(self, env_file: Path, capsys) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadError("connection reset")

        code = main.main(["--env-file", str(env_file), "--quiet"], transport=httpx.MockTransport(handler))

        assert code == main.EXIT_FAILED
        assert "transport_error" in capsys.readouterr().out

    def test_dropped_login_connection_exits_two(self, env_file: Path, clean_env, capsys) -> None:
        clean_env.setenv("STORYSPOIL_TOKEN", "")

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadError("connection reset")

        code = main.main(["--env-file", str(env_file), "--quiet"], transport=httpx.MockTransport(handler))

        assert code == main.EXIT_ABORTED
        assert "Authentication failed" in capsys.readouterr().err

    def test_missing_env_file_exits_two(self, clean_env, tmp_path: Path, capsys) -> None:
        missing = tmp_path / "absent.env"

        code = main.main(["--env-file", str(missing)])

        assert code == main.EXIT_ABORTED
        assert f"Env file not found: {missing}" in capsys.readouterr().err
