"""
Cookie header parsing and formatting.

``Set-Cookie`` parsing is deliberately lenient: unparseable ``Expires``,
``Max-Age`` or ``SameSite`` values leave the field unset instead of failing
the cookie, and attributes with an empty name are dropped. Only a broken
first segment (no ``=`` or an empty name) rejects the whole header.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from restify.core.domain.cookie import Cookie, SameSite
from restify.http.dates import format_rfc5322, parse_rfc5322
from restify.http.strings import CookieAttributes

logger = logging.getLogger(__name__)

_MAX_AGE_PATTERN = re.compile(r"[+-]?\d+")


def _segments(header: str) -> list[str]:
    """Split a cookie header on ``;``, dropping blank segments."""
    return [segment.strip() for segment in header.split(";") if segment.strip()]


def _unquote(value: str) -> str:
    # Best effort: an unmatched leading or trailing quote is still removed
    if value.startswith('"'):
        value = value[1:]
    if value.endswith('"'):
        value = value[:-1]
    return value


def _apply_attribute(fields: dict[str, Any], name: str, value: str) -> None:
    lowered = name.lower()
    if lowered == "domain":
        fields["domain"] = value
    elif lowered == "expires":
        expires = parse_rfc5322(value)
        if expires is not None:
            fields["expires"] = expires
    elif lowered == "httponly":
        fields["http_only"] = True
    elif lowered == "max-age":
        if _MAX_AGE_PATTERN.fullmatch(value):
            fields["max_age"] = int(value)
    elif lowered == "path":
        fields["path"] = value
    elif lowered == "samesite":
        try:
            fields["same_site"] = SameSite(value)
        except ValueError:
            pass
    elif lowered == "secure":
        fields["secure"] = True
    else:
        fields["attributes"][name] = value


def parse_set_cookie(header: str | None) -> Cookie | None:
    """Parse a single ``Set-Cookie`` header value.

    Returns:
        The cookie, or None if the header does not start with a ``name=value``
        pair that has a non-empty name.
    """
    if not header:
        return None

    segments = _segments(header)
    if not segments:
        return None

    name, separator, value = segments[0].partition("=")
    name = name.strip()
    if not separator or not name:
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Ignoring malformed Set-Cookie header: %r", header)
        return None

    fields: dict[str, Any] = {
        "name": name,
        "value": _unquote(value.strip()),
        "attributes": {},
    }

    for segment in segments[1:]:
        attribute_name, _, attribute_value = segment.partition("=")
        attribute_name = attribute_name.strip()
        if not attribute_name:
            continue
        _apply_attribute(fields, attribute_name, attribute_value.strip())

    return Cookie(**fields)


def parse_cookie_header(header: str | None) -> list[tuple[str, str]]:
    """Parse a ``Cookie`` request header into ``(name, value)`` pairs.

    Pairs with an empty name or an empty value are skipped; this never fails.
    """
    if not header:
        return []

    pairs: list[tuple[str, str]] = []
    for segment in _segments(header):
        name, separator, value = segment.partition("=")
        name = name.strip()
        value = value.strip()
        if separator and name and value:
            pairs.append((name, value))
    return pairs


def format_for_request(cookie: Cookie) -> str:
    return f"{cookie.name}={cookie.value}"


def format_for_response(cookie: Cookie) -> str:
    """Render a cookie as a ``Set-Cookie`` header value.

    Attributes are written in a fixed order; extension attributes are not
    written back.
    """
    parts = [f"{cookie.name}={cookie.value}"]
    if cookie.domain is not None:
        parts.append(f"{CookieAttributes.DOMAIN}={cookie.domain}")
    if cookie.expires is not None:
        parts.append(f"{CookieAttributes.EXPIRES}={format_rfc5322(cookie.expires)}")
    if cookie.http_only:
        parts.append(CookieAttributes.HTTP_ONLY)
    if cookie.max_age is not None:
        parts.append(f"{CookieAttributes.MAX_AGE}={cookie.max_age}")
    if cookie.path is not None:
        parts.append(f"{CookieAttributes.PATH}={cookie.path}")
    if cookie.same_site is not None:
        parts.append(f"{CookieAttributes.SAME_SITE}={cookie.same_site.value}")
    if cookie.secure:
        parts.append(CookieAttributes.SECURE)
    return "; ".join(parts)
