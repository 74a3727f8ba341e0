"""
Request body handlers.

Each handler serializes its payload once, on first use, and reports the
headers describing the bytes it produces.
"""

from __future__ import annotations

import json
import uuid
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, BinaryIO
from urllib.parse import urlencode

from pydantic import BaseModel
from pydantic_core import to_jsonable_python

from restify.core.common.exceptions import CodecError, JSONError
from restify.core.interfaces.body_handler_interface import IBodyHandler
from restify.core.interfaces.model_bases import InternalDTO
from restify.http.strings import ContentTypes, Headers


def _drop_none(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: _drop_none(item) for key, item in value.items() if item is not None}
    if isinstance(value, list):
        return [_drop_none(item) for item in value]
    return value


class JSONBodyHandler(IBodyHandler):
    """Sends a JSON body.

    Pydantic models are dumped with their aliases; ``None`` values are left out
    and object keys are sorted so that bodies are stable for signing.
    """

    def __init__(self, request: Any) -> None:
        self.request = request
        self._body: bytes | None = None

    def serialize(self) -> bytes | None:
        if self.request is None:
            return None
        if self._body is None:
            try:
                if isinstance(self.request, BaseModel):
                    payload = self.request.model_dump(
                        mode="json", by_alias=True, exclude_none=True
                    )
                else:
                    payload = _drop_none(to_jsonable_python(self.request))
                self._body = json.dumps(
                    payload, sort_keys=True, separators=(",", ":")
                ).encode("utf-8")
            except (TypeError, ValueError) as e:
                raise JSONError(
                    f"Failed to serialize the request body as JSON ({e})"
                ) from e
        return self._body

    def content_headers(self) -> dict[str, str]:
        body = self.serialize()
        if body is None:
            return {}
        return {
            Headers.CONTENT_TYPE: ContentTypes.APPLICATION_JSON,
            Headers.CONTENT_LENGTH: str(len(body)),
        }

    def raw_payload(self) -> Any:
        return self.request


class FormDataBodyHandler(IBodyHandler):
    """Sends an ``application/x-www-form-urlencoded`` body; each name may repeat."""

    def __init__(self, request: Mapping[str, Sequence[str]] | None) -> None:
        self.request = request
        self._body: bytes | None = None

    def serialize(self) -> bytes | None:
        if self.request is None:
            return None
        if self._body is None:
            pairs = [
                (name, value)
                for name, values in self.request.items()
                for value in values
            ]
            self._body = urlencode(pairs).encode("utf-8")
        return self._body

    def content_headers(self) -> dict[str, str]:
        body = self.serialize()
        if body is None:
            return {}
        return {
            Headers.CONTENT_TYPE: ContentTypes.FORM,
            Headers.CONTENT_LENGTH: str(len(body)),
        }

    def raw_payload(self) -> Any:
        return self.request


class SimpleFormDataBodyHandler(FormDataBodyHandler):
    """Form body built from single-valued parameters."""

    def __init__(self, request: Mapping[str, str] | None) -> None:
        super().__init__(
            {name: [value] for name, value in request.items()}
            if request is not None
            else None
        )
        self._original = request

    def raw_payload(self) -> Any:
        return self._original


class ByteArrayBodyHandler(IBodyHandler):
    def __init__(self, body: bytes | None, content_type: str | None = None) -> None:
        self.body = body
        self.content_type = content_type

    def serialize(self) -> bytes | None:
        return self.body

    def content_headers(self) -> dict[str, str]:
        if self.body is None:
            return {}
        headers = {Headers.CONTENT_LENGTH: str(len(self.body))}
        if self.content_type is not None:
            headers[Headers.CONTENT_TYPE] = self.content_type
        return headers


class StreamBodyHandler(IBodyHandler):
    """Sends the contents of a binary stream.

    The stream is read to the end on first use; it is not closed.
    """

    def __init__(
        self, content_type: str | None, request: BinaryIO, length: int | None = None
    ) -> None:
        self.content_type = content_type
        self.request = request
        self.length = length
        self._body: bytes | None = None

    def serialize(self) -> bytes | None:
        if self._body is None:
            try:
                self._body = self.request.read()
            except (OSError, ValueError) as e:
                raise CodecError(f"Failed to read the request body stream ({e})") from e
        return self._body

    def content_headers(self) -> dict[str, str]:
        headers: dict[str, str] = {}
        if self.content_type is not None:
            headers[Headers.CONTENT_TYPE] = self.content_type
        if self.length is not None:
            headers[Headers.CONTENT_LENGTH] = str(self.length)
        return headers

    def raw_payload(self) -> Any:
        return self.request


@dataclass
class FileUpload(InternalDTO):
    """A file sent as one part of a multipart body."""

    name: str
    file: Path
    content_type: str | None = None
    file_name: str | None = None

    def __post_init__(self) -> None:
        self.file = Path(self.file)
        if self.file_name is None:
            self.file_name = self.file.name


@dataclass
class Multiparts(InternalDTO):
    files: list[FileUpload] = field(default_factory=list)
    parameters: dict[str, list[str]] = field(default_factory=dict)


def _quote_disposition(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


class MultipartBodyHandler(IBodyHandler):
    """Sends a ``multipart/form-data`` body made of files and form parameters."""

    def __init__(self, request: Multiparts) -> None:
        self.request = request
        self.boundary = uuid.uuid4().hex
        self._body: bytes | None = None

    def _is_empty(self) -> bool:
        return not self.request.files and not self.request.parameters

    def serialize(self) -> bytes | None:
        if self._is_empty():
            return None
        if self._body is None:
            delimiter = f"--{self.boundary}\r\n".encode()
            chunks: list[bytes] = []
            for upload in self.request.files:
                disposition = (
                    f'Content-Disposition: form-data; name="{_quote_disposition(upload.name)}"'
                    f'; filename="{_quote_disposition(upload.file_name or "")}"'
                )
                if upload.content_type is not None:
                    disposition += f"\r\n{Headers.CONTENT_TYPE}: {upload.content_type}"
                try:
                    content = upload.file.read_bytes()
                except OSError as e:
                    raise CodecError(
                        f"Failed to read the upload file [{upload.file}] ({e})"
                    ) from e
                chunks += [delimiter, disposition.encode(), b"\r\n\r\n", content, b"\r\n"]

            for name, values in self.request.parameters.items():
                for value in values:
                    disposition = f'Content-Disposition: form-data; name="{_quote_disposition(name)}"'
                    chunks += [
                        delimiter,
                        disposition.encode(),
                        b"\r\n\r\n",
                        value.encode("utf-8"),
                        b"\r\n",
                    ]

            chunks.append(f"--{self.boundary}--".encode())
            self._body = b"".join(chunks)
        return self._body

    def content_headers(self) -> dict[str, str]:
        body = self.serialize()
        if body is None:
            return {}
        return {
            Headers.CONTENT_TYPE: f"{ContentTypes.MULTIPART}; boundary={self.boundary}",
            Headers.CONTENT_LENGTH: str(len(body)),
        }

    def raw_payload(self) -> Any:
        return self.request
