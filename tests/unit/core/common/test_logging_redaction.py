"""
Tests for logging utilities.
"""

import logging
from pathlib import Path

import pytest

from restify.core.common.logging_utils import (
    LogFormat,
    configure_logging,
    redact,
    redact_headers,
)


class TestRedaction:
    def test_redact(self) -> None:
        assert redact("api_key_12345678") == "ap***78"
        assert redact("key") == "***"
        assert redact("") == ""
        assert redact("secret-value", mask="[x]") == "se[x]ue"

    def test_redact_headers(self) -> None:
        headers = {
            "Authorization": ["Bearer abcdefgh"],
            "Cookie": ["session=1234567"],
            "Accept": ["application/json"],
        }

        redacted = redact_headers(headers)

        assert redacted == {
            "Authorization": ["Be***gh"],
            "Cookie": ["se***67"],
            "Accept": ["application/json"],
        }
        assert headers["Authorization"] == ["Bearer abcdefgh"]

    def test_redact_headers_custom_names(self) -> None:
        redacted = redact_headers({"X-Api-Key": ["k" * 10], "Authorization": ["a"]}, {"x-api-key"})

        assert redacted == {"X-Api-Key": ["kk***kk"], "Authorization": ["a"]}


@pytest.mark.parametrize("log_format", list(LogFormat))
def test_configure_logging(
    log_format: LogFormat, tmp_path: Path
) -> None:
    log_file = tmp_path / "restify.log"
    configure_logging(logging.DEBUG, log_format, str(log_file))
    try:
        logging.getLogger("restify.test").debug("hello %s", "world")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert "hello world" in log_file.read_text(encoding="utf-8")
    finally:
        for handler in logging.getLogger().handlers:
            handler.close()
        logging.basicConfig(level=logging.WARNING, force=True)
