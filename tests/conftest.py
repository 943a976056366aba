"""Pytest configuration and shared fixtures."""

# Import the fake StorySpoil service and environment fixtures
pytest_plugins = [
    "tests.fixtures.story_service",
    "tests.fixtures.environment",
]
