"""
RESTful web service call builder.

``RESTClient`` collects everything needed for one HTTP call through fluent
setters and performs it with ``execute()``. Configuration mistakes raise
``ConfigurationError``; everything that goes wrong on the wire is reported on
the returned ``ClientResponse`` instead.

A client instance holds mutable state and must not be shared between threads
that execute concurrently. It may be reconfigured and executed again.
"""

from __future__ import annotations

import base64
import logging
import ssl
from collections.abc import Callable, Iterable, Mapping
from datetime import datetime
from enum import Enum
from typing import Any, Generic, TypeVar
from urllib.parse import quote_plus

import httpx

from restify.core.common.exceptions import (
    CodecError,
    ConfigurationError,
    PEMFormatError,
    TransportError,
)
from restify.core.common.logging_utils import redact_headers
from restify.core.config.client_settings import ClientSettings
from restify.core.domain.client_response import (
    TRANSPORT_FAILURE_STATUS,
    ClientResponse,
)
from restify.core.domain.cookie import Cookie
from restify.core.domain.http_method import HTTPMethod
from restify.core.domain.proxy_info import ProxyInfo
from restify.core.domain.request_config import RequestConfig
from restify.core.interfaces.body_handler_interface import IBodyHandler
from restify.core.interfaces.response_handler_interface import IResponseHandler
from restify.http.cookies import format_for_request
from restify.http.dates import to_epoch_millis
from restify.http.strings import Headers
from restify.net.connection import Connection, open_connection
from restify.net.tls import build_tls_context

logger = logging.getLogger(__name__)

RS = TypeVar("RS")
ERS = TypeVar("ERS")
T = TypeVar("T")

# Failures that mean the exchange never produced a status code
_TRANSPORT_FAILURES = (
    httpx.HTTPError,
    httpx.InvalidURL,
    OSError,
    CodecError,
    PEMFormatError,
)


def _from_body_handler(call: Callable[[], T]) -> T:
    """Run a body handler method, reporting any failure as a ``CodecError``."""
    try:
        return call()
    except CodecError:
        raise
    except Exception as e:
        raise CodecError(f"Failed to serialize the request body ({e})") from e


def _parameter_value(value: Any) -> str:
    if isinstance(value, datetime):
        return str(to_epoch_millis(value))
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def _parameter_values(value: Any) -> list[str]:
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_parameter_value(item) for item in value if item is not None]
    return [_parameter_value(value)]


class RESTClient(Generic[RS, ERS]):
    """Builder and executor for a single REST call.

    Args:
        success_type: Type expected for 2xx bodies; None means no body is
            expected and no success handler is required.
        error_type: Type expected for non-2xx bodies; None means no body is
            expected and no error handler is required.
        settings: Defaults for timeouts, user agent and redirect handling.
    """

    def __init__(
        self,
        success_type: type[RS] | Any | None = None,
        error_type: type[ERS] | Any | None = None,
        *,
        settings: ClientSettings | None = None,
    ) -> None:
        settings = settings or ClientSettings()
        self.success_type = success_type
        self.error_type = error_type
        self.config = RequestConfig(
            connect_timeout=settings.connect_timeout,
            read_timeout=settings.read_timeout,
            user_agent=settings.user_agent,
            follow_redirects=settings.follow_redirects,
            sni_verification=settings.sni_verification,
        )

    # -- method selection -------------------------------------------------

    def method(self, method: HTTPMethod | str) -> RESTClient[RS, ERS]:
        self.config.method = HTTPMethod(method.upper() if isinstance(method, str) else method)
        return self

    def get(self) -> RESTClient[RS, ERS]:
        return self.method(HTTPMethod.GET)

    def post(self) -> RESTClient[RS, ERS]:
        return self.method(HTTPMethod.POST)

    def put(self) -> RESTClient[RS, ERS]:
        return self.method(HTTPMethod.PUT)

    def delete(self) -> RESTClient[RS, ERS]:
        return self.method(HTTPMethod.DELETE)

    def head(self) -> RESTClient[RS, ERS]:
        return self.method(HTTPMethod.HEAD)

    def options(self) -> RESTClient[RS, ERS]:
        return self.method(HTTPMethod.OPTIONS)

    def patch(self) -> RESTClient[RS, ERS]:
        return self.method(HTTPMethod.PATCH)

    def patch_override(self) -> RESTClient[RS, ERS]:
        """Send a POST carrying ``X-HTTP-Method-Override: PATCH``.

        For servers and proxies that do not accept the PATCH verb.
        """
        self.method(HTTPMethod.POST)
        return self.header(Headers.METHOD_OVERRIDE, HTTPMethod.PATCH.value)

    # -- URL ---------------------------------------------------------------

    def url(self, url: str) -> RESTClient[RS, ERS]:
        self.config.url = url
        return self

    def uri(self, uri: str) -> RESTClient[RS, ERS]:
        """Append ``uri`` to the URL with exactly one slash between them.

        Ignored until a URL has been set.
        """
        current = self.config.url
        if not current:
            return self

        if current.endswith("/") and uri.startswith("/"):
            self.config.url = current + uri[1:]
        elif not current.endswith("/") and not uri.startswith("/"):
            self.config.url = f"{current}/{uri}"
        else:
            self.config.url = current + uri
        return self

    def url_segment(self, value: Any) -> RESTClient[RS, ERS]:
        """Append a path segment, e.g. ``url("http://foo.com").url_segment("bar")``
        gives ``http://foo.com/bar``. None is ignored.
        """
        if value is None:
            return self
        if self.config.url and not self.config.url.endswith("/"):
            self.config.url += "/"
        self.config.url += str(value)
        return self

    def url_parameter(self, name: str, value: Any) -> RESTClient[RS, ERS]:
        """Add a query parameter value.

        A None value is ignored. A ``datetime`` is sent as epoch milliseconds.
        A list, tuple or set adds one value per element. Anything else is sent
        as ``str(value)``.
        """
        if value is None:
            return self
        self.config.parameters.setdefault(name, []).extend(_parameter_values(value))
        return self

    def url_parameters(self, parameters: Mapping[str, Any] | None) -> RESTClient[RS, ERS]:
        if parameters is not None:
            for name, value in parameters.items():
                self.url_parameter(name, value)
        return self

    def set_url_parameter(self, name: str, value: Any) -> RESTClient[RS, ERS]:
        """Replace every value of a query parameter; None removes it."""
        self.config.parameters.pop(name, None)
        return self.url_parameter(name, value)

    def build_url(self) -> str:
        """Return the URL with the query string appended."""
        url = self.config.url
        query = "&".join(
            f"{quote_plus(name)}={quote_plus(value)}"
            for name, values in self.config.parameters.items()
            for value in values
        )
        if not query:
            return url

        if "?" not in url:
            separator = "?"
        elif url.endswith(("?", "&")):
            separator = ""
        else:
            separator = "&"
        return url + separator + query

    # -- headers and cookies -----------------------------------------------

    def header(self, name: str, value: str) -> RESTClient[RS, ERS]:
        """Set a header, replacing any value it had under any spelling."""
        self.remove_header(name)
        self.config.headers[name] = [value]
        return self

    def add_header(self, name: str, value: str) -> RESTClient[RS, ERS]:
        """Add a value to a header, keeping the values it already has."""
        key = self.config.find_header(name) or name
        self.config.headers.setdefault(key, []).append(value)
        return self

    def headers(self, headers: Mapping[str, str]) -> RESTClient[RS, ERS]:
        for name, value in headers.items():
            self.header(name, value)
        return self

    def remove_header(self, name: str) -> RESTClient[RS, ERS]:
        key = self.config.find_header(name)
        if key is not None:
            del self.config.headers[key]
        return self

    def authorization(self, key: str | None) -> RESTClient[RS, ERS]:
        """Set the ``Authorization`` header; None or empty removes it."""
        if key:
            return self.header(Headers.AUTHORIZATION, key)
        return self.remove_header(Headers.AUTHORIZATION)

    def basic_authorization(
        self, username: str | None, password: str | None
    ) -> RESTClient[RS, ERS]:
        if username is not None and password is not None:
            credentials = f"{username}:{password}".encode()
            self.header(
                Headers.AUTHORIZATION,
                "Basic " + base64.b64encode(credentials).decode("ascii"),
            )
        return self

    def cookie(self, cookie: Cookie) -> RESTClient[RS, ERS]:
        self.config.cookies.append(cookie)
        return self

    def cookies(self, cookies: Iterable[Cookie]) -> RESTClient[RS, ERS]:
        self.config.cookies.extend(cookies)
        return self

    def user_agent(self, user_agent: str) -> RESTClient[RS, ERS]:
        self.config.user_agent = user_agent
        return self

    # -- body and response handling ------------------------------------------

    def body_handler(self, body_handler: IBodyHandler | None) -> RESTClient[RS, ERS]:
        self.config.body_handler = body_handler
        return self

    def success_response_handler(
        self, handler: IResponseHandler[RS] | None
    ) -> RESTClient[RS, ERS]:
        self.config.success_response_handler = handler
        return self

    def error_response_handler(
        self, handler: IResponseHandler[ERS] | None
    ) -> RESTClient[RS, ERS]:
        self.config.error_response_handler = handler
        return self

    # -- transport -----------------------------------------------------------

    def proxy(self, proxy: ProxyInfo | None) -> RESTClient[RS, ERS]:
        self.config.proxy = proxy
        return self

    def certificate(self, certificate: str | None) -> RESTClient[RS, ERS]:
        """Set the PEM certificate used for ``https`` URLs."""
        self.config.certificate = certificate
        return self

    def key(self, key: str | None) -> RESTClient[RS, ERS]:
        """Set the PEM private key (PKCS#8 or PKCS#1) paired with the certificate."""
        self.config.key = key
        return self

    def disable_sni_verification(self) -> RESTClient[RS, ERS]:
        """Accept any server hostname on this client's connections.

        Insecure; only for servers whose certificate names cannot be fixed.
        """
        self.config.sni_verification = False
        return self

    def follow_redirects(self, follow_redirects: bool) -> RESTClient[RS, ERS]:
        self.config.follow_redirects = follow_redirects
        return self

    def connect_timeout(self, connect_timeout: int) -> RESTClient[RS, ERS]:
        self.config.connect_timeout = connect_timeout
        return self

    def read_timeout(self, read_timeout: int) -> RESTClient[RS, ERS]:
        self.config.read_timeout = read_timeout
        return self

    # -- execution -----------------------------------------------------------

    def _validate(self) -> HTTPMethod:
        if not self.config.url:
            raise ConfigurationError("You must specify a URL")

        if self.config.method is None:
            raise ConfigurationError("You must specify a HTTP method")

        if self.success_type is not None and self.config.success_response_handler is None:
            raise ConfigurationError(
                "You specified a success response type, you must then provide a success response handler.",
                details={"success_type": repr(self.success_type)},
            )

        if self.error_type is not None and self.config.error_response_handler is None:
            raise ConfigurationError(
                "You specified an error response type, you must then provide an error response handler.",
                details={"error_type": repr(self.error_type)},
            )

        return self.config.method

    def _request_headers(self, connection: Connection) -> dict[str, list[str]]:
        config = self.config
        headers = {name: list(values) for name, values in config.headers.items()}

        def is_set(name: str) -> bool:
            lowered = name.lower()
            return any(key.lower() == lowered for key in headers)

        if config.proxy is not None and not connection.is_secure:
            authorization = config.proxy.authorization_header()
            if authorization is not None and not is_set(Headers.PROXY_AUTHORIZATION):
                headers[Headers.PROXY_AUTHORIZATION] = [authorization]

        if not is_set(Headers.USER_AGENT):
            headers[Headers.USER_AGENT] = [config.user_agent]

        if config.cookies and not is_set(Headers.COOKIE):
            headers[Headers.COOKIE] = [
                "; ".join(format_for_request(cookie) for cookie in config.cookies)
            ]

        if config.body_handler is not None:
            content_headers = _from_body_handler(config.body_handler.content_headers)
            for name, value in content_headers.items():
                if not is_set(name):
                    headers[name] = [value]

        return headers

    def _connect(self, url: str, method: HTTPMethod) -> Connection:
        config = self.config
        proxy = config.proxy if config.proxy is not None and config.proxy.host else None
        connection = open_connection(url, proxy)
        try:
            connection.request_method = method.value

            if connection.is_secure:
                context: ssl.SSLContext | None = None
                if config.certificate is not None:
                    context = build_tls_context(config.certificate, config.key)
                if not config.sni_verification:
                    if context is None:
                        context = ssl.create_default_context()
                    context.check_hostname = False
                connection.ssl_context = context

            connection.follow_redirects = config.follow_redirects
            connection.connect_timeout = config.connect_timeout
            connection.read_timeout = config.read_timeout

            headers = self._request_headers(connection)
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug(
                    "Calling %s %s with headers %s",
                    method.value,
                    url,
                    redact_headers(headers),
                )
            connection.set_headers(headers)

            if config.body_handler is not None:
                connection.write(_from_body_handler(config.body_handler.serialize))
        except BaseException:
            connection.close()
            raise
        return connection

    def _transport_failure(
        self, response: ClientResponse[RS, ERS], url: str, error: Exception
    ) -> ClientResponse[RS, ERS]:
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Error calling REST service at [%s]", url, exc_info=True)

        response.status = TRANSPORT_FAILURE_STATUS
        if isinstance(error, (CodecError, PEMFormatError)):
            response.exception = error
        else:
            failure = TransportError(
                f"Error calling REST service at [{url}]: {error}", url=url
            )
            failure.__cause__ = error
            response.exception = failure
        return response

    def execute(self) -> ClientResponse[RS, ERS]:
        """Perform the HTTP call.

        Returns:
            A new ``ClientResponse``. Its ``status`` is -1 and ``exception`` is
            set if no status code was received.

        Raises:
            ConfigurationError: If the URL or method is missing, or a declared
                response type has no handler.
        """
        method = self._validate()
        config = self.config

        response: ClientResponse[RS, ERS] = ClientResponse()
        response.method = method.value
        url = self.build_url()
        response.url = url

        connection: Connection | None = None
        try:
            try:
                if config.body_handler is not None:
                    response.request = _from_body_handler(config.body_handler.raw_payload)
                connection = self._connect(url, method)
                status = connection.response_status()
            except _TRANSPORT_FAILURES as e:
                return self._transport_failure(response, url, e)

            response.status = status
            response.set_headers(connection.response_headers())

            successful = 200 <= status <= 299
            handler = (
                config.success_response_handler
                if successful
                else config.error_response_handler
            )
            if method == HTTPMethod.HEAD or handler is None:
                return response

            try:
                stream = connection.body_stream() if successful else connection.error_stream()
                value = handler.parse(stream)
            except Exception as e:
                if logger.isEnabledFor(logging.DEBUG):
                    logger.debug(
                        "Error handling the response from [%s]", url, exc_info=True
                    )
                response.exception = e
                return response

            if successful:
                response.success_response = value
            else:
                response.error_response = value
            return response
        finally:
            if connection is not None:
                connection.close()

    go = execute
