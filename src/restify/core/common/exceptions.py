"""
Common exception classes for the Restify client.

This module defines the exception hierarchy used throughout the client. Only
configuration errors are raised out of ``RESTClient.execute()``; transport and
codec errors are attached to the returned ``ClientResponse``.
"""

from __future__ import annotations


class RestifyError(Exception):
    """Base exception class for all Restify errors."""

    def __init__(
        self,
        message: str,
        details: dict | None = None,
        **kwargs,
    ):
        """Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        for key, value in (kwargs or {}).items():
            setattr(self, key, value)

    def to_dict(self) -> dict:
        error_dict = {
            "message": self.message,
            "type": self.__class__.__name__,
            "details": self.details,
        }

        for attr_name in dir(self):
            if (
                not attr_name.startswith("_")
                and attr_name not in ["message", "details", "args"]
                and not callable(getattr(self, attr_name))
            ):
                error_dict[attr_name] = getattr(self, attr_name)

        return {"error": error_dict}


class ConfigurationError(RestifyError):
    """Raised when a request is executed with an incomplete configuration."""

    def __init__(
        self,
        message: str = "Configuration error",
        details: dict | None = None,
        **kwargs,
    ):
        super().__init__(message, details, **kwargs)


class TransportError(RestifyError):
    """Raised when the exchange never produced an HTTP status code."""

    def __init__(
        self,
        message: str = "Transport error",
        url: str | None = None,
        details: dict | None = None,
        **kwargs,
    ):
        super().__init__(message, details, **kwargs)
        self.url = url


class CodecError(RestifyError):
    """Raised when a request body or response body could not be converted."""

    def __init__(
        self, message: str = "Codec error", details: dict | None = None, **kwargs
    ):
        super().__init__(message, details, **kwargs)


class JSONError(CodecError):
    def __init__(
        self,
        message: str = "JSON processing failed",
        details: dict | None = None,
        **kwargs,
    ):
        super().__init__(message, details, **kwargs)


class PEMFormatError(RestifyError):
    """Raised when PEM certificate or key text is malformed."""

    def __init__(
        self, message: str = "Invalid PEM format", details: dict | None = None, **kwargs
    ):
        super().__init__(message, details, **kwargs)
