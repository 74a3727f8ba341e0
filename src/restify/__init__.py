"""Restify: a fluent HTTP client for calling REST services."""

from restify.core.common.exceptions import (
    CodecError,
    ConfigurationError,
    JSONError,
    PEMFormatError,
    RestifyError,
    TransportError,
)
from restify.core.config.client_settings import DEFAULT_USER_AGENT, ClientSettings
from restify.core.domain.client_response import ClientResponse
from restify.core.domain.cookie import Cookie, SameSite
from restify.core.domain.http_method import HTTPMethod
from restify.core.domain.proxy_info import ProxyInfo
from restify.core.services.rest_client import RESTClient

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_USER_AGENT",
    "ClientResponse",
    "ClientSettings",
    "CodecError",
    "ConfigurationError",
    "Cookie",
    "HTTPMethod",
    "JSONError",
    "PEMFormatError",
    "ProxyInfo",
    "RESTClient",
    "RestifyError",
    "SameSite",
    "TransportError",
]
