from __future__ import annotations

import base64
from typing import ClassVar

from restify.core.domain.base import ValueObject


class ProxyInfo(ValueObject):
    """Proxy a request is routed through, with optional Basic credentials."""

    repr_fields: ClassVar[tuple[str, ...]] = ("host", "port", "username")

    host: str
    port: int
    username: str | None = None
    password: str | None = None

    @property
    def url(self) -> str:
        return f"http://{self.host}:{self.port}"

    @property
    def has_credentials(self) -> bool:
        return self.username is not None and self.password is not None

    def authorization_header(self) -> str | None:
        """Return the ``Proxy-Authorization`` value, or None without credentials."""
        if not self.has_credentials:
            return None
        credentials = f"{self.username}:{self.password}".encode()
        return "Basic " + base64.b64encode(credentials).decode("ascii")
