# --------------------------------------------------------------
# File: conftest.py
# Description: Fixtures compartidas para aislar el entorno y la configuración.
# --------------------------------------------------------------

from typing import Dict, Iterator

import pytest

from core.config import ApiKeyConfig, REQUIRED_ENV_VARS

SCENARIO_ENV: Dict[str, str] = {
    "API_KEY_SECRET": "test-secret-value",
    "API_KEY_CIPHER": "expected-key-123",
    "GCM_TAG_LENGTH": "128",
    "PBKDF2_ITERATIONS": "100000",
    "API_KEY_IV_LENGTH": "12",
    "API_KEY_SALT_LENGTH": "16",
}


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch) -> Iterator[None]:
    """Elimina del entorno las variables de la API key antes de cada prueba.

    Args:
        monkeypatch (pytest.MonkeyPatch): Fixture para ajustar variables de entorno.

    Returns:
        Iterator[None]: Control del fixture autouse durante la ejecución de cada test.
    """
    for name in (*REQUIRED_ENV_VARS, "PBKDF2_HASH", "HEALTHCHECK_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def api_env(monkeypatch) -> Dict[str, str]:
    """Publica en el entorno la configuración del escenario de referencia."""
    for name, value in SCENARIO_ENV.items():
        monkeypatch.setenv(name, value)
    return dict(SCENARIO_ENV)


@pytest.fixture
def config() -> ApiKeyConfig:
    """Configuración de referencia: salt 16, nonce 12, etiqueta 16, 100 000 iteraciones."""
    return ApiKeyConfig(
        secret=b"test-secret-value",
        expected_plaintext=b"expected-key-123",
        iterations=100_000,
        tag_length=16,
        nonce_length=12,
        salt_length=16,
    )
