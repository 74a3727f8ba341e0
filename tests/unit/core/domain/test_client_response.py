from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from restify.core.domain.client_response import ClientResponse
from restify.core.domain.cookie import Cookie
from restify.core.domain.proxy_info import ProxyInfo


class TestClientResponse:
    def test_defaults_to_transport_failure(self) -> None:
        response: ClientResponse[dict, dict] = ClientResponse()

        assert response.status == -1
        assert response.was_successful() is False

    def test_set_headers(self) -> None:
        response: ClientResponse[dict, dict] = ClientResponse(status=200)
        response.set_headers(
            [
                ("Content-Type", "application/json"),
                ("Date", "Wed, 21 Oct 2015 07:28:00 GMT"),
                ("Last-Modified", "not a date"),
                ("Set-Cookie", "session=abc; HttpOnly"),
                ("Set-Cookie", "=broken"),
                ("set-cookie", "theme=dark"),
            ]
        )

        assert response.get_header("content-type") == "application/json"
        assert response.get_header("CONTENT-TYPE") == "application/json"
        assert response.headers["set-cookie"] == [
            "session=abc; HttpOnly",
            "=broken",
            "theme=dark",
        ]
        assert response.date == datetime(2015, 10, 21, 7, 28, tzinfo=timezone.utc)
        assert response.last_modified is None
        assert [cookie.name for cookie in response.cookies] == ["session", "theme"]
        assert response.get_cookie("session").http_only is True
        assert response.get_cookie("missing") is None
        assert response.get_header("missing") is None

    def test_was_successful(self) -> None:
        assert ClientResponse(status=204).was_successful() is True
        assert ClientResponse(status=302).was_successful() is False
        assert ClientResponse(status=200, exception=ValueError("bad")).was_successful() is False


class TestProxyInfo:
    def test_without_credentials(self) -> None:
        proxy = ProxyInfo(host="proxy.local", port=3128)

        assert proxy.url == "http://proxy.local:3128"
        assert proxy.has_credentials is False
        assert proxy.authorization_header() is None
        assert repr(proxy) == "<ProxyInfo host='proxy.local' port=3128>"

    def test_basic_credentials(self) -> None:
        proxy = ProxyInfo(host="proxy.local", port=3128, username="user", password="pass")

        assert proxy.authorization_header() == "Basic dXNlcjpwYXNz"

    def test_is_immutable(self) -> None:
        proxy = ProxyInfo(host="proxy.local", port=3128)

        with pytest.raises(ValidationError):
            proxy.port = 8080  # type: ignore[misc]

    def test_to_dict(self) -> None:
        proxy = ProxyInfo(host="proxy.local", port=3128, username="user")

        assert proxy.to_dict() == {
            "host": "proxy.local",
            "port": 3128,
            "username": "user",
            "password": None,
        }

    def test_repr_hides_password(self) -> None:
        proxy = ProxyInfo(host="proxy.local", port=3128, username="user", password="pass")

        assert repr(proxy) == "<ProxyInfo host='proxy.local' port=3128 username='user'>"


def test_cookie_repr_hides_value() -> None:
    cookie = Cookie(name="session", value="secret", path="/")

    assert repr(cookie) == "<Cookie name='session' path='/'>"
