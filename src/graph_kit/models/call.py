"""Request and response models passed between the dispatcher and transports."""

from collections.abc import Callable
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

HTTPVerb = Literal["GET", "POST", "DELETE"]


class HTTPComponent(str, Enum):
    """Part of the HTTP response the caller wants back."""

    BODY = "body"
    HEADERS = "headers"
    STATUS = "status"


class Call(BaseModel):
    """A single logical API call.

    ``path`` is an object id, an ``id/connection`` path, or an absolute
    cursor URL. ``post_process`` runs on the final result, after error
    classification and collection wrapping.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    path: str
    verb: HTTPVerb = "GET"
    args: dict[str, Any] = Field(default_factory=dict)
    options: dict[str, Any] = Field(default_factory=dict)
    post_process: Callable[[Any], Any] | None = None

    @field_validator("verb", mode="before")
    @classmethod
    def upper_verb(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value

    @field_validator("args", "options", mode="before")
    @classmethod
    def copy_mapping(cls, value: Any) -> Any:
        # Detach from the caller's dict so later mutation can't leak in
        return dict(value) if value is not None else {}

    @property
    def requires_access_token(self) -> bool:
        return self.verb in ("POST", "DELETE")

    @property
    def http_component(self) -> HTTPComponent:
        return HTTPComponent(self.options.get("http_component", HTTPComponent.BODY))


class RawResponse(BaseModel):
    """Response produced by a transport.

    Header names are lower-cased.
    """

    status: int
    headers: dict[str, str] = Field(default_factory=dict)
    body: Any = None

    @field_validator("headers", mode="before")
    @classmethod
    def lower_header_names(cls, value: Any) -> Any:
        if value is None:
            return {}
        return {str(k).lower(): v for k, v in dict(value).items()}
