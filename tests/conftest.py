from pathlib import Path

import pytest

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def tls_fixtures() -> Path:
    return FIXTURES / "tls"


@pytest.fixture
def certificate_pem(tls_fixtures: Path) -> str:
    return (tls_fixtures / "cert.pem").read_text(encoding="ascii")


@pytest.fixture
def pkcs8_key_pem(tls_fixtures: Path) -> str:
    return (tls_fixtures / "key_pkcs8.pem").read_text(encoding="ascii")


@pytest.fixture
def pkcs1_key_pem(tls_fixtures: Path) -> str:
    return (tls_fixtures / "key_pkcs1.pem").read_text(encoding="ascii")
