"""
Single-exchange HTTP connection on top of httpx.

A ``Connection`` is configured, written to and read from exactly once, then
closed. The request is sent lazily, when the status is first asked for.
"""

from __future__ import annotations

import io
import logging
import ssl
from typing import BinaryIO

import httpx

from restify.core.domain.proxy_info import ProxyInfo
from restify.http.strings import Headers

logger = logging.getLogger(__name__)


def _to_seconds(milliseconds: int) -> float | None:
    # Zero or negative means no timeout
    return milliseconds / 1000 if milliseconds > 0 else None


class Connection:
    """One HTTP request/response exchange."""

    def __init__(self, url: str, proxy: ProxyInfo | None = None) -> None:
        self.url = httpx.URL(url)
        self.proxy = proxy
        self.request_method = "GET"
        self.follow_redirects = True
        self.connect_timeout = 2000
        self.read_timeout = 2000
        self.ssl_context: ssl.SSLContext | None = None
        self._headers: list[tuple[str, str]] = []
        self._body: bytes | None = None
        self._client: httpx.Client | None = None
        self._response: httpx.Response | None = None
        self._content: bytes | None = None

    @property
    def is_secure(self) -> bool:
        return self.url.scheme == "https"

    def add_header(self, name: str, value: str) -> None:
        self._headers.append((name, value))

    def set_headers(self, headers: dict[str, list[str]]) -> None:
        for name, values in headers.items():
            for value in values:
                self.add_header(name, value)

    def write(self, body: bytes | None) -> None:
        self._body = body

    def _proxy(self) -> httpx.Proxy | None:
        if self.proxy is None:
            return None
        # Tunnelled (https) requests authenticate on CONNECT; plain requests
        # carry Proxy-Authorization with the request itself.
        authorization = self.proxy.authorization_header()
        if self.is_secure and authorization is not None:
            return httpx.Proxy(
                self.proxy.url,
                headers={Headers.PROXY_AUTHORIZATION: authorization},
            )
        return httpx.Proxy(self.proxy.url)

    def _send(self) -> httpx.Response:
        if self._response is None:
            connect = _to_seconds(self.connect_timeout)
            read = _to_seconds(self.read_timeout)
            self._client = httpx.Client(
                proxy=self._proxy(),
                verify=self.ssl_context if self.ssl_context is not None else True,
                follow_redirects=self.follow_redirects,
                timeout=httpx.Timeout(connect=connect, read=read, write=read, pool=connect),
            )
            request = self._client.build_request(
                self.request_method,
                self.url,
                headers=self._headers,
                content=self._body,
            )
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("Sending %s %s", request.method, request.url)
            self._response = self._client.send(request, stream=True)
        return self._response

    def response_status(self) -> int:
        """Send the request if needed and return the response status code."""
        return self._send().status_code

    def response_headers(self) -> list[tuple[str, str]]:
        return self._send().headers.multi_items()

    def _read(self) -> bytes:
        if self._content is None:
            self._content = self._send().read()
        return self._content

    def body_stream(self) -> BinaryIO:
        return io.BytesIO(self._read())

    def error_stream(self) -> BinaryIO:
        # httpx does not separate error bodies from regular ones
        return io.BytesIO(self._read())

    def close(self) -> None:
        if self._response is not None:
            self._response.close()
        if self._client is not None:
            self._client.close()


def open_connection(url: str, proxy: ProxyInfo | None = None) -> Connection:
    """Open a connection to ``url``, optionally through ``proxy``.

    Raises:
        httpx.InvalidURL: If ``url`` is malformed.
    """
    return Connection(url, proxy)
