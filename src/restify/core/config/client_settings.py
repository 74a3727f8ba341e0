from __future__ import annotations

import logging
import os
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any, ClassVar

from pydantic import ConfigDict, field_validator

from restify.core.common.exceptions import ConfigurationError
from restify.core.interfaces.model_bases import DomainModel

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "Restify (https://github.com/inversoft/restify)"


def _env_to_bool(name: str, default: bool, env: Mapping[str, str]) -> bool:
    """Return an environment variable parsed as a boolean flag."""
    value = env.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_env_value(
    env: Mapping[str, str],
    name: str,
    default: Any,
    *,
    transform: Callable[[str], Any] | None = None,
) -> Any:
    if name in env:
        raw_value = env[name]
        return transform(raw_value) if transform is not None else raw_value
    return default


def _to_int(value: str, fallback: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return fallback


class ClientSettings(DomainModel):
    """Defaults applied to every ``RESTClient`` built from these settings.

    Timeouts are in milliseconds; zero disables the timeout.
    """

    model_config = ConfigDict(extra="forbid")
    repr_fields: ClassVar[tuple[str, ...]] = ("connect_timeout", "read_timeout", "user_agent")

    connect_timeout: int = 2000
    read_timeout: int = 2000
    user_agent: str = DEFAULT_USER_AGENT
    follow_redirects: bool = True
    sni_verification: bool = True

    @field_validator("connect_timeout", "read_timeout")
    @classmethod
    def validate_timeout(cls, v: int) -> int:
        if v < 0:
            raise ValueError("Timeouts must not be negative")
        return v

    @classmethod
    def from_env(cls, *, environ: Mapping[str, str] | None = None) -> ClientSettings:
        """Create ClientSettings from ``RESTIFY_*`` environment variables."""
        env: Mapping[str, str] = environ if environ is not None else os.environ
        return cls(
            connect_timeout=_get_env_value(
                env,
                "RESTIFY_CONNECT_TIMEOUT",
                2000,
                transform=lambda value: _to_int(value, 2000),
            ),
            read_timeout=_get_env_value(
                env,
                "RESTIFY_READ_TIMEOUT",
                2000,
                transform=lambda value: _to_int(value, 2000),
            ),
            user_agent=_get_env_value(env, "RESTIFY_USER_AGENT", DEFAULT_USER_AGENT),
            follow_redirects=_env_to_bool("RESTIFY_FOLLOW_REDIRECTS", True, env),
            sni_verification=_env_to_bool("RESTIFY_SNI_VERIFICATION", True, env),
        )

    @classmethod
    def from_yaml(cls, path: str | Path) -> ClientSettings:
        """Load settings from a YAML mapping.

        Raises:
            ConfigurationError: If the file is missing, is not a mapping or
                holds invalid values.
        """
        import yaml
        from pydantic import ValidationError

        p = Path(path)
        try:
            with p.open(encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(
                f"Could not read client settings from {p}", details={"error": str(e)}
            ) from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Client settings in {p} must be a mapping",
                details={"type": type(data).__name__},
            )

        try:
            settings = cls(**data)
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid client settings in {p}", details={"errors": e.errors()}
            ) from e

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Loaded client settings from %s", p)
        return settings
