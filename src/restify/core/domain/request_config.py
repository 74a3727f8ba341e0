from __future__ import annotations

from dataclasses import dataclass, field

from restify.core.config.client_settings import DEFAULT_USER_AGENT
from restify.core.domain.cookie import Cookie
from restify.core.domain.http_method import HTTPMethod
from restify.core.domain.proxy_info import ProxyInfo
from restify.core.interfaces.body_handler_interface import IBodyHandler
from restify.core.interfaces.model_bases import InternalDTO
from restify.core.interfaces.response_handler_interface import IResponseHandler


@dataclass
class RequestConfig(InternalDTO):
    """Mutable request state owned by a ``RESTClient``.

    Header names keep the case they were set with; lookups ignore case.
    Parameters and headers keep insertion order, per name and across names.
    """

    url: str = ""
    method: HTTPMethod | None = None
    parameters: dict[str, list[str]] = field(default_factory=dict)
    headers: dict[str, list[str]] = field(default_factory=dict)
    cookies: list[Cookie] = field(default_factory=list)
    body_handler: IBodyHandler | None = None
    success_response_handler: IResponseHandler | None = None
    error_response_handler: IResponseHandler | None = None
    proxy: ProxyInfo | None = None
    certificate: str | None = None
    key: str | None = None
    sni_verification: bool = True
    follow_redirects: bool = True
    connect_timeout: int = 2000
    read_timeout: int = 2000
    user_agent: str = DEFAULT_USER_AGENT

    def find_header(self, name: str) -> str | None:
        """Return the stored spelling of header ``name``, if it is set."""
        lowered = name.lower()
        return next((key for key in self.headers if key.lower() == lowered), None)
