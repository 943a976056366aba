"""Harness configuration.

Settings are read from the process environment after loading an optional
``.env`` file with python-dotenv:

    STORYSPOIL_BASE_URL   service base URL (default: public StorySpoil API)
    STORYSPOIL_TOKEN      cached bearer token, may be empty
    STORYSPOIL_USERNAME   fallback login name (required)
    STORYSPOIL_PASSWORD   fallback login password (required)
    STORYSPOIL_TIMEOUT    request timeout in seconds (default: 30)
    STORYSPOIL_VERBOSE    print step progress (default: true)
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from spoiler_client.models import Credentials

DEFAULT_BASE_URL = "https://d3s5nxhwblsjbi.cloudfront.net/api/"

ENV_PREFIX = "STORYSPOIL_"


class HarnessSettings(BaseModel):
    """Inputs a harness run needs.

    Attributes:
        base_url: The base URL of the service.
        cached_token: Previously issued token to try first.
        username: Fallback login name.
        password: Fallback login password.
        timeout: Request timeout in seconds.
        verbose: Whether the runner prints step progress.
    """

    base_url: str = Field(DEFAULT_BASE_URL, min_length=1)
    cached_token: str | None = None
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    timeout: float = Field(30.0, gt=0)
    verbose: bool = True

    @field_validator("base_url")
    @classmethod
    def _http_url(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError("base_url must be an http(s) URL")
        return value

    def credentials(self) -> Credentials:
        """Return the fallback login pair."""
        return Credentials(username=self.username, password=self.password)


def load_settings(env_file: str | Path | None = None, **overrides: object) -> HarnessSettings:
    """Load settings from ``.env`` and the environment.

    Args:
        env_file: Explicit dotenv file; defaults to a ``.env`` found by search.
        **overrides: Values that take precedence over the environment
            (None values are ignored).

    Returns:
        Validated settings.

    Raises:
        FileNotFoundError: If ``env_file`` is given but does not exist.
        pydantic.ValidationError: If required values are missing or invalid.
    """
    if env_file is not None and not Path(env_file).is_file():
        raise FileNotFoundError(f"Env file not found: {env_file}")
    load_dotenv(dotenv_path=env_file)

    values: dict[str, object] = {}
    for field_name, env_name in (
        ("base_url", "BASE_URL"),
        ("cached_token", "TOKEN"),
        ("username", "USERNAME"),
        ("password", "PASSWORD"),
        ("timeout", "TIMEOUT"),
        ("verbose", "VERBOSE"),
    ):
        raw = os.environ.get(ENV_PREFIX + env_name)
        if raw is not None:
            values[field_name] = raw

    values.update({k: v for k, v in overrides.items() if v is not None})
    return HarnessSettings.model_validate(values)
