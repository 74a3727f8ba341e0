# Configuration package

from restify.core.config.client_settings import DEFAULT_USER_AGENT, ClientSettings

__all__ = ["DEFAULT_USER_AGENT", "ClientSettings"]
