"""
Tests for ClientSettings loading.
"""

from pathlib import Path

import pytest

from restify.core.common.exceptions import ConfigurationError
from restify.core.config.client_settings import DEFAULT_USER_AGENT, ClientSettings


def test_defaults() -> None:
    settings = ClientSettings()

    assert settings.connect_timeout == 2000
    assert settings.read_timeout == 2000
    assert settings.user_agent == DEFAULT_USER_AGENT
    assert settings.follow_redirects is True
    assert settings.sni_verification is True


def test_negative_timeout_rejected() -> None:
    with pytest.raises(ValueError):
        ClientSettings(connect_timeout=-1)


class TestFromEnv:
    def test_reads_restify_variables(self) -> None:
        settings = ClientSettings.from_env(
            environ={
                "RESTIFY_CONNECT_TIMEOUT": "500",
                "RESTIFY_READ_TIMEOUT": "0",
                "RESTIFY_USER_AGENT": "Tests/1.0",
                "RESTIFY_FOLLOW_REDIRECTS": "false",
                "RESTIFY_SNI_VERIFICATION": "no",
            }
        )

        assert settings.connect_timeout == 500
        assert settings.read_timeout == 0
        assert settings.user_agent == "Tests/1.0"
        assert settings.follow_redirects is False
        assert settings.sni_verification is False

    def test_bad_numbers_fall_back(self) -> None:
        settings = ClientSettings.from_env(environ={"RESTIFY_READ_TIMEOUT": "soon"})

        assert settings.read_timeout == 2000

    def test_process_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RESTIFY_CONNECT_TIMEOUT", "750")

        assert ClientSettings.from_env().connect_timeout == 750


class TestFromYaml:
    def test_loads_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "client.yaml"
        path.write_text("connect_timeout: 100\nfollow_redirects: false\n", encoding="utf-8")

        settings = ClientSettings.from_yaml(path)

        assert settings.connect_timeout == 100
        assert settings.read_timeout == 2000
        assert settings.follow_redirects is False

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "client.yaml"
        path.write_text("", encoding="utf-8")

        assert ClientSettings.from_yaml(path) == ClientSettings()

    @pytest.mark.parametrize(
        "content",
        ["- a\n- b\n", "unknown_key: 1\n", "read_timeout: -5\n", "connect_timeout: [\n"],
    )
    def test_invalid_content(self, tmp_path: Path, content: str) -> None:
        path = tmp_path / "client.yaml"
        path.write_text(content, encoding="utf-8")

        with pytest.raises(ConfigurationError):
            ClientSettings.from_yaml(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            ClientSettings.from_yaml(tmp_path / "missing.yaml")

        assert "error" in exc_info.value.details
