"""
Response body handlers.
"""

from __future__ import annotations

from typing import Any, BinaryIO, Generic, TypeVar

from pydantic import TypeAdapter, ValidationError

from restify.core.common.exceptions import CodecError, JSONError
from restify.core.interfaces.response_handler_interface import IResponseHandler

T = TypeVar("T")

# Number of body bytes quoted in decode failure messages
BODY_SNIPPET_BYTES = 1024


def describe_body(body: bytes, limit: int = BODY_SNIPPET_BYTES) -> str:
    """Render a response body for an error message, truncated to ``limit`` bytes."""
    if len(body) <= limit:
        return body.decode("utf-8", errors="replace")
    return (
        f"Note: Output has been truncated to the first {limit} of {len(body)} bytes.\n\n"
        + body[:limit].decode("utf-8", errors="replace")
    )


class JSONResponseHandler(IResponseHandler[T], Generic[T]):
    """Decodes a JSON body into ``response_type`` using pydantic.

    ``response_type`` may be a pydantic model, a ``dict``/``list`` annotation
    or any other type pydantic can validate. An empty body decodes to None
    unless ``allow_empty`` is False, in which case it is a decoding error.
    """

    def __init__(self, response_type: Any = Any, allow_empty: bool = True) -> None:
        self.response_type = response_type
        self.allow_empty = allow_empty
        self._adapter: TypeAdapter[T] = TypeAdapter(response_type)

    def parse(self, stream: BinaryIO | None) -> T | None:
        body = stream.read() if stream is not None else b""
        if not body:
            if self.allow_empty:
                return None
            raise JSONError("Failed to parse the HTTP response as JSON. The body was empty.")

        try:
            return self._adapter.validate_json(body)
        except ValidationError as e:
            raise JSONError(
                "Failed to parse the HTTP response as JSON. Actual HTTP response body:\n"
                + describe_body(body)
            ) from e


class TextResponseHandler(IResponseHandler[str]):
    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def parse(self, stream: BinaryIO | None) -> str | None:
        if stream is None:
            return None
        body = stream.read()
        if not body:
            return None
        try:
            return body.decode(self.encoding)
        except UnicodeDecodeError as e:
            raise CodecError(
                "Failed to decode the HTTP response as text. Actual HTTP response body:\n"
                + describe_body(body)
            ) from e


class ByteArrayResponseHandler(IResponseHandler[bytes]):
    def parse(self, stream: BinaryIO | None) -> bytes | None:
        if stream is None:
            return None
        return stream.read() or None
