"""Base classes for the package's models.

`DomainModel` is the pydantic base for value objects and settings;
`InternalDTO` marks plain dataclasses that carry mutable request and response
state between the client and its collaborators.
"""

from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel


class DomainModel(BaseModel):
    """Pydantic base with a one-line repr.

    Only the fields named in ``repr_fields`` are shown, and only when set, so
    secrets such as cookie values and proxy passwords stay out of log output.
    """

    repr_fields: ClassVar[tuple[str, ...]] = ()

    def __repr__(self) -> str:
        shown = " ".join(
            f"{field}={getattr(self, field)!r}"
            for field in self.repr_fields
            if getattr(self, field, None) is not None
        )
        class_name = self.__class__.__name__
        return f"<{class_name} {shown}>" if shown else f"<{class_name}>"


class InternalDTO:
    """Marker mixed into dataclass DTOs."""
