"""Command-line entry point for the StorySpoil contract harness.

Resolves an authenticated client, runs the story CRUD contract scenario
and reports a verdict per step.

To run against the configured service:
    python main.py --env-file .env

Exit codes:
    0  every step passed
    1  at least one step failed
    2  the run was aborted (authentication or configuration failure)
"""

import argparse
import json
import logging
import sys

from pydantic import ValidationError

from spoiler_client.exceptions import AuthenticationError
from spoiler_workflows.harness import run_harness
from spoiler_workflows.settings import load_settings

EXIT_PASSED = 0
EXIT_FAILED = 1
EXIT_ABORTED = 2

logger = logging.getLogger("storyspoil")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="StorySpoil API contract harness")
    parser.add_argument("--env-file", default=None, help="dotenv file with STORYSPOIL_* settings")
    parser.add_argument("--base-url", default=None, help="Override STORYSPOIL_BASE_URL")
    parser.add_argument("--json", action="store_true", help="Print the run report as JSON")
    parser.add_argument("--quiet", action="store_true", help="Suppress step progress output")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    return parser


def main(argv: list[str] | None = None, transport=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = load_settings(
            args.env_file,
            base_url=args.base_url,
            verbose=False if (args.quiet or args.json) else None,
        )
    except ValidationError as e:
        print(f"Invalid configuration:\n{e}", file=sys.stderr)
        return EXIT_ABORTED
    except FileNotFoundError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return EXIT_ABORTED

    try:
        report = run_harness(settings, transport=transport)
    except AuthenticationError as e:
        logger.error("Run aborted before any step: %s", e)
        print(f"🛑 Authentication failed: {e}", file=sys.stderr)
        return EXIT_ABORTED

    if args.json:
        print(json.dumps(report.to_dict(), indent=2))
    else:
        print(report.summary())
    return EXIT_PASSED if report.passed else EXIT_FAILED


if __name__ == "__main__":
    sys.exit(main())
