"""
Request body handler interface.

A body handler turns a request payload into bytes and declares the headers
that describe those bytes (typically ``Content-Type`` and ``Content-Length``).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class IBodyHandler(ABC):
    """Interface for request body serialization strategies."""

    @abstractmethod
    def serialize(self) -> bytes | None:
        """Serialize the request payload.

        Implementations serialize at most once and return the cached bytes on
        later calls.

        Returns:
            The request body, or None when there is nothing to send
        """

    @abstractmethod
    def content_headers(self) -> dict[str, str]:
        """Return the headers describing the serialized body."""

    def raw_payload(self) -> Any:
        """Return the unserialized payload, echoed on the response."""
        return None
