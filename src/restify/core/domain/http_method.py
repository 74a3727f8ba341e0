from enum import Enum


class HTTPMethod(str, Enum):
    """HTTP methods supported by the client. CONNECT and TRACE are not."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    HEAD = "HEAD"
    PATCH = "PATCH"
    OPTIONS = "OPTIONS"
