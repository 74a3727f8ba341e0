from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import ClassVar

from pydantic import Field

from restify.core.domain.base import ValueObject


class SameSite(str, Enum):
    """Values of the ``SameSite`` cookie attribute."""

    LAX = "Lax"
    NONE = "None"
    STRICT = "Strict"


class Cookie(ValueObject):
    """An HTTP cookie.

    Built by the ``Set-Cookie`` parser or by callers that want to send cookies
    with a request. Attributes the parser does not recognise are kept in
    ``attributes`` under their original name.
    """

    repr_fields: ClassVar[tuple[str, ...]] = ("name", "domain", "path")

    name: str
    value: str = ""
    domain: str | None = None
    expires: datetime | None = None
    http_only: bool = False
    max_age: int | None = None
    path: str | None = None
    same_site: SameSite | None = None
    secure: bool = False
    attributes: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_request_header(cls, header: str) -> list[Cookie]:
        """Build cookies from a ``Cookie`` request header."""
        from restify.http.cookies import parse_cookie_header

        return [cls(name=name, value=value) for name, value in parse_cookie_header(header)]

    @classmethod
    def from_response_header(cls, header: str) -> Cookie | None:
        """Build a cookie from a ``Set-Cookie`` response header, or None if it is broken."""
        from restify.http.cookies import parse_set_cookie

        return parse_set_cookie(header)

    def get_attribute(self, name: str) -> str | None:
        """Look up an extension attribute, ignoring case."""
        lowered = name.lower()
        for key, value in self.attributes.items():
            if key.lower() == lowered:
                return value
        return None

    def has_attribute(self, name: str) -> bool:
        lowered = name.lower()
        return any(key.lower() == lowered for key in self.attributes)

    def to_request_header(self) -> str:
        from restify.http.cookies import format_for_request

        return format_for_request(self)

    def to_response_header(self) -> str:
        from restify.http.cookies import format_for_response

        return format_for_response(self)
