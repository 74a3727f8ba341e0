from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Generic, TypeVar

from restify.core.domain.cookie import Cookie
from restify.core.interfaces.model_bases import InternalDTO
from restify.http.cookies import parse_set_cookie
from restify.http.dates import parse_rfc5322
from restify.http.strings import Headers

RS = TypeVar("RS")
ERS = TypeVar("ERS")

TRANSPORT_FAILURE_STATUS = -1


@dataclass
class ClientResponse(InternalDTO, Generic[RS, ERS]):
    """Result of a single ``RESTClient.execute()`` call.

    ``status`` is -1 when the exchange never reached the server; ``exception``
    is then always set. A real status together with an ``exception`` means the
    response body could not be decoded.
    """

    status: int = TRANSPORT_FAILURE_STATUS
    headers: dict[str, list[str]] = field(default_factory=dict)
    date: datetime | None = None
    last_modified: datetime | None = None
    cookies: list[Cookie] = field(default_factory=list)
    method: str | None = None
    url: str | None = None
    # Unserialized request body, echoed for logging and introspection
    request: Any = None
    success_response: RS | None = None
    error_response: ERS | None = None
    exception: BaseException | None = None

    def set_headers(self, headers: list[tuple[str, str]]) -> None:
        """Store response headers and derive the date, last-modified and cookie fields."""
        for name, value in headers:
            self.headers.setdefault(name.lower(), []).append(value)

        self.date = parse_rfc5322(self.get_header(Headers.DATE))
        self.last_modified = parse_rfc5322(self.get_header(Headers.LAST_MODIFIED))

        for header in self.headers.get(Headers.SET_COOKIE.lower(), []):
            cookie = parse_set_cookie(header)
            if cookie is not None:
                self.cookies.append(cookie)

    def get_header(self, name: str) -> str | None:
        values = self.headers.get(name.lower())
        return values[0] if values else None

    def get_cookie(self, name: str) -> Cookie | None:
        return next((cookie for cookie in self.cookies if cookie.name == name), None)

    def was_successful(self) -> bool:
        return 200 <= self.status <= 299 and self.exception is None
