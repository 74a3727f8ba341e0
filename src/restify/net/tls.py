"""
TLS context construction from PEM text.

Useful for trusting a single supplied certificate on the client side, or for
presenting a client certificate and private key held as strings.
"""

from __future__ import annotations

import base64
import binascii
import logging
import re
import ssl
import tempfile
from pathlib import Path

from restify.core.common.exceptions import PEMFormatError

logger = logging.getLogger(__name__)

_CERTIFICATE_PATTERN = re.compile(
    r"-----BEGIN CERTIFICATE-----(?P<body>.*?)-----END CERTIFICATE-----", re.DOTALL
)
# PKCS#8 ("PRIVATE KEY") and PKCS#1 ("RSA PRIVATE KEY") keys
_PRIVATE_KEY_PATTERN = re.compile(
    r"-----BEGIN (?P<kind>(?:RSA )?PRIVATE KEY)-----(?P<body>.*?)-----END (?P=kind)-----",
    re.DOTALL,
)


def _der_from_pem(body: str) -> bytes:
    try:
        return base64.b64decode("".join(body.split()), validate=True)
    except (binascii.Error, ValueError) as e:
        raise PEMFormatError(f"Invalid PEM format ({e})") from e


def _certificate_der(certificate_pem: str) -> bytes:
    match = _CERTIFICATE_PATTERN.search(certificate_pem or "")
    if match is None:
        raise PEMFormatError("Invalid PEM format: missing certificate delimiters")
    return _der_from_pem(match.group("body"))


def _private_key_block(private_key_pem: str) -> str:
    match = _PRIVATE_KEY_PATTERN.search(private_key_pem or "")
    if match is None:
        raise PEMFormatError("Invalid PEM format: missing private key delimiters")
    _der_from_pem(match.group("body"))
    return match.group(0)


def build_tls_context(
    certificate_pem: str, private_key_pem: str | None = None
) -> ssl.SSLContext:
    """Build a client TLS context from PEM text.

    Without a private key the certificate becomes the only trusted
    certificate for the connection. With a private key the pair is presented
    as the client certificate and the default trust store is used.

    Raises:
        PEMFormatError: If the PEM text is missing delimiters or is not a
            valid certificate or key.
    """
    certificate_der = _certificate_der(certificate_pem)

    if private_key_pem is None:
        context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
        try:
            context.load_verify_locations(cadata=certificate_der)
        except ssl.SSLError as e:
            raise PEMFormatError(f"Invalid certificate ({e})") from e
        return context

    key_block = _private_key_block(private_key_pem)
    certificate_block = ssl.DER_cert_to_PEM_cert(certificate_der)
    context = ssl.create_default_context(ssl.Purpose.SERVER_AUTH)

    # load_cert_chain only reads from files
    with tempfile.TemporaryDirectory(prefix="restify-tls-") as directory:
        chain = Path(directory) / "chain.pem"
        chain.write_text(certificate_block + key_block + "\n", encoding="ascii")
        try:
            context.load_cert_chain(certfile=str(chain))
        except ssl.SSLError as e:
            raise PEMFormatError(f"Invalid certificate or private key ({e})") from e

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Built TLS context with client certificate")
    return context


def valid_certificate_string(certificate_pem: str) -> bool:
    """Return True if ``certificate_pem`` holds a loadable PEM certificate."""
    try:
        build_tls_context(certificate_pem)
    except PEMFormatError:
        return False
    return True
