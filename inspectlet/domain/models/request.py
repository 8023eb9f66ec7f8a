"""Request descriptors and credentials."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping
from urllib.parse import urlencode

from inspectlet.domain.errors import MissingCredentialsError


class HttpMethod(str, Enum):
    """HTTP methods the dashboard endpoints are called with."""

    GET = "GET"
    POST = "POST"

    @classmethod
    def from_string(cls, value: "str | HttpMethod") -> "HttpMethod":
        """Convert ``"get"``/``"POST"``/an existing member to a member."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            raise ValueError(f"Unsupported HTTP method: {value!r}") from None


class ResponseFormat(str, Enum):
    """Format the caller expects the endpoint to answer with."""

    JSON = "JSON"
    HTML = "HTML"

    @classmethod
    def from_string(cls, value: "str | ResponseFormat") -> "ResponseFormat":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            raise ValueError(f"Unsupported response format: {value!r}") from None


@dataclass(frozen=True)
class RequestDescriptor:
    """A single dashboard request issued between login and logout."""

    path: str
    method: HttpMethod = HttpMethod.POST
    response_format: ResponseFormat = ResponseFormat.JSON
    params: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def build(
        cls,
        path: str,
        method: "str | HttpMethod" = HttpMethod.POST,
        response_format: "str | ResponseFormat" = ResponseFormat.JSON,
        params: Mapping[str, Any] | None = None,
    ) -> "RequestDescriptor":
        return cls(
            path=path,
            method=HttpMethod.from_string(method),
            response_format=ResponseFormat.from_string(response_format),
            params=dict(params or {}),
        )


@dataclass(frozen=True)
class EncodedRequest:
    """Content type and payload for one request.

    ``body`` is sent verbatim; ``form`` is handed to the transport, which
    form-encodes it. At most one of them is set.
    """

    content_type: str
    body: str | None = None
    form: Mapping[str, Any] | None = None


@dataclass(frozen=True)
class Credentials:
    """Dashboard login credentials."""

    username: str
    password: str = field(repr=False)

    def __post_init__(self) -> None:
        if not self.username:
            raise MissingCredentialsError("Missing username.")
        if not self.password:
            raise MissingCredentialsError("Missing password.")

    def form_body(self) -> str:
        """Return the urlencoded body posted by the sign-in form."""
        return urlencode(
            {
                "email": self.username,
                "password": self.password,
                "submform": "Sign In",
            }
        )
