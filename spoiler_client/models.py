"""Value types exchanged with the StorySpoil service.

Wire field names follow the service's real contract, including its mixed
casing: stories are sent as ``Title``/``Description``/``url`` and replies
carry ``msg``/``storyId``. Reply keys are matched case-insensitively because
the service does not keep its casing stable.
"""

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator


class Credentials(BaseModel):
    """Username/password pair used for the fallback login.

    Attributes:
        username: Account name sent as ``userName``.
        password: Account password.
    """

    model_config = ConfigDict(frozen=True)

    username: str = Field(..., description="Login name")
    password: str = Field(..., description="Login password")

    @field_validator("username", "password")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    def login_payload(self) -> dict[str, str]:
        """Return the JSON body for ``POST User/Authentication``."""
        return {"userName": self.username, "password": self.password}

    def __repr__(self) -> str:
        return f"Credentials(username={self.username!r}, password='***')"


class Token(BaseModel):
    """Opaque bearer credential presented on every authenticated call."""

    model_config = ConfigDict(frozen=True)

    access_token: str = Field(..., description="Bearer token value")

    @field_validator("access_token")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("token must not be blank")
        return value

    def authorization_header(self) -> dict[str, str]:
        """Return the ``Authorization`` header carrying this token."""
        return {"Authorization": f"Bearer {self.access_token}"}

    def __str__(self) -> str:
        return self.access_token

    def __repr__(self) -> str:
        return f"Token(access_token='{self.access_token[:8]}...')"


class StoryEntity(BaseModel):
    """A story spoiler as sent to ``Story/Create`` and ``Story/Edit``.

    Empty titles and descriptions are allowed so that negative steps can
    send them; use ``is_complete`` to check the required fields.

    Attributes:
        title: Story title (wire name ``Title``).
        description: Story text (wire name ``Description``).
        url: Optional picture URL (wire name ``url``, lowercase).
    """

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field("", alias="Title")
    description: str = Field("", alias="Description")
    url: str | None = Field(None, alias="url")

    @property
    def is_complete(self) -> bool:
        """Whether the fields the service requires on create are populated."""
        return bool(self.title.strip()) and bool(self.description.strip())

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON body with the service's field names."""
        return self.model_dump(by_alias=True)


class ApiResponse(BaseModel):
    """Normalized server reply ``{message, storyId?}``.

    Attributes:
        message: The ``msg`` (or ``message``) field of the reply.
        story_id: The ``storyId`` field, present only on a successful create.
    """

    model_config = ConfigDict(populate_by_name=True)

    message: str | None = Field(None, validation_alias=AliasChoices("msg", "message"))
    story_id: str | None = Field(None, validation_alias="storyid")

    @model_validator(mode="before")
    @classmethod
    def _fold_keys(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {str(key).lower(): value for key, value in data.items()}
        return data


class RawResponse(BaseModel):
    """Status code and raw body of one HTTP round-trip.

    Attributes:
        method: HTTP method that was issued.
        path: Request path relative to the base URL.
        status_code: HTTP status returned by the service.
        body: Response body as text (may be empty).
    """

    method: str
    path: str
    status_code: int
    body: str = ""

    @property
    def is_success(self) -> bool:
        """Whether the status code is in the 2xx range."""
        return 200 <= self.status_code < 300
