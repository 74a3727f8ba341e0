"""
Tests for request body handlers.
"""

import io
import json
from pathlib import Path

import pytest
from pydantic import BaseModel, Field

from restify.core.common.exceptions import CodecError, JSONError
from restify.handlers.body_handlers import (
    ByteArrayBodyHandler,
    FileUpload,
    FormDataBodyHandler,
    JSONBodyHandler,
    MultipartBodyHandler,
    Multiparts,
    SimpleFormDataBodyHandler,
    StreamBodyHandler,
)


class Widget(BaseModel):
    widget_name: str = Field(alias="widgetName")
    size: int | None = None


class TestJSONBodyHandler:
    def test_model_uses_aliases_and_drops_none(self) -> None:
        handler = JSONBodyHandler(Widget(widgetName="gear"))

        assert handler.serialize() == b'{"widgetName":"gear"}'
        assert handler.raw_payload() == Widget(widgetName="gear")

    def test_plain_data_has_sorted_keys(self) -> None:
        handler = JSONBodyHandler({"b": 1, "a": [1, None], "c": None})

        body = handler.serialize()

        assert body == b'{"a":[1,null],"b":1}'
        assert json.loads(body) == {"a": [1, None], "b": 1}

    def test_content_headers(self) -> None:
        handler = JSONBodyHandler({"code": 200})

        assert handler.content_headers() == {
            "Content-Type": "application/json",
            "Content-Length": str(len(b'{"code":200}')),
        }

    def test_serializes_once(self) -> None:
        payload = {"a": 1}
        handler = JSONBodyHandler(payload)
        first = handler.serialize()
        payload["a"] = 2

        assert handler.serialize() is first

    def test_none_payload_has_no_body(self) -> None:
        handler = JSONBodyHandler(None)

        assert handler.serialize() is None
        assert handler.content_headers() == {}

    def test_unserializable_payload(self) -> None:
        with pytest.raises(JSONError):
            JSONBodyHandler({"a": object()}).serialize()


class TestFormDataBodyHandlers:
    def test_repeated_names(self) -> None:
        handler = FormDataBodyHandler({"a": ["1", "2"], "b c": ["x&y"]})

        assert handler.serialize() == b"a=1&a=2&b+c=x%26y"
        assert handler.content_headers() == {
            "Content-Type": "application/x-www-form-urlencoded",
            "Content-Length": "17",
        }

    def test_simple_form_data(self) -> None:
        request = {"user": "fred", "password": "p@ss"}
        handler = SimpleFormDataBodyHandler(request)

        assert handler.serialize() == b"user=fred&password=p%40ss"
        assert handler.raw_payload() is request

    def test_none_request(self) -> None:
        assert FormDataBodyHandler(None).serialize() is None
        assert SimpleFormDataBodyHandler(None).content_headers() == {}


class TestRawBodyHandlers:
    def test_byte_array(self) -> None:
        handler = ByteArrayBodyHandler(b"\x00\x01\x02", "application/octet-stream")

        assert handler.serialize() == b"\x00\x01\x02"
        assert handler.content_headers() == {
            "Content-Length": "3",
            "Content-Type": "application/octet-stream",
        }

    def test_stream(self) -> None:
        stream = io.BytesIO(b"hello")
        handler = StreamBodyHandler("text/plain", stream, length=5)

        assert handler.serialize() == b"hello"
        assert handler.serialize() == b"hello"
        assert handler.content_headers() == {
            "Content-Type": "text/plain",
            "Content-Length": "5",
        }
        assert handler.raw_payload() is stream

    def test_unreadable_stream(self) -> None:
        stream = io.BytesIO(b"hello")
        stream.close()

        with pytest.raises(CodecError):
            StreamBodyHandler(None, stream).serialize()


class TestMultipartBodyHandler:
    def test_files_and_parameters(self, tmp_path: Path) -> None:
        upload = tmp_path / "report.txt"
        upload.write_bytes(b"file contents")
        handler = MultipartBodyHandler(
            Multiparts(
                files=[FileUpload("attachment", upload, "text/plain")],
                parameters={"title": ["Q1 & Q2"]},
            )
        )

        body = handler.serialize()
        boundary = handler.boundary

        assert body == (
            f"--{boundary}\r\n"
            'Content-Disposition: form-data; name="attachment"; filename="report.txt"\r\n'
            "Content-Type: text/plain\r\n\r\n"
            "file contents\r\n"
            f"--{boundary}\r\n"
            'Content-Disposition: form-data; name="title"\r\n\r\n'
            "Q1 & Q2\r\n"
            f"--{boundary}--"
        ).encode()
        assert handler.content_headers()["Content-Type"] == (
            f"multipart/form-data; boundary={boundary}"
        )

    def test_missing_file(self, tmp_path: Path) -> None:
        handler = MultipartBodyHandler(
            Multiparts(files=[FileUpload("attachment", tmp_path / "missing.bin")])
        )

        with pytest.raises(CodecError):
            handler.serialize()

    def test_empty_multipart_has_no_body(self) -> None:
        handler = MultipartBodyHandler(Multiparts())

        assert handler.serialize() is None
        assert handler.content_headers() == {}
