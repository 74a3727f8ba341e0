"""
Response handler interface.

A response handler decodes the response body stream into a value.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import BinaryIO, Generic, TypeVar

T = TypeVar("T")


class IResponseHandler(ABC, Generic[T]):
    """Interface for response body decoding strategies."""

    @abstractmethod
    def parse(self, stream: BinaryIO | None) -> T | None:
        """Decode a response body.

        Args:
            stream: The response body, or None when the response had none

        Returns:
            The decoded value, or None for a missing or empty body

        Raises:
            CodecError: If the body cannot be decoded
        """
