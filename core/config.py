# --------------------------------------------------------------
# File: config.py
# Description: Carga y validación de los parámetros criptográficos de las API keys.
# --------------------------------------------------------------
"""Configuración inmutable compartida por el emisor y el verificador."""

import logging
import os
from typing import Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from core.crypto_kdf import MIN_ITERATIONS, resolve_hash
from core.crypto_sym import SUPPORTED_TAG_LENGTHS
from core.errors import ConfigurationError, KeyDerivationError

__all__ = ["ApiKeyConfig", "REQUIRED_ENV_VARS", "configure_logging", "load_config"]

REQUIRED_ENV_VARS = (
    "API_KEY_SECRET",
    "API_KEY_CIPHER",
    "GCM_TAG_LENGTH",
    "PBKDF2_ITERATIONS",
    "API_KEY_IV_LENGTH",
    "API_KEY_SALT_LENGTH",
)

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%d-%b-%Y %I:%M:%S %p"

# Límites que acepta AES-GCM en la librería `cryptography`.
MIN_NONCE_LENGTH = 8
MAX_NONCE_LENGTH = 128
MIN_SALT_LENGTH = 8


class ApiKeyConfig(BaseModel):
    """Parámetros del esquema PBKDF2 + AES-GCM.

    Se construye una única vez al arrancar y se pasa explícitamente a
    :func:`core.api_key.issue_api_key` y :func:`core.api_key.verify_api_key`.
    Todos los valores deben coincidir entre emisor y verificador.

    Attributes:
        secret (bytes): Secreto compartido; nunca se transmite ni se muestra.
        expected_plaintext (bytes): Valor cuyo descifrado prueba la posesión del secreto.
        iterations (int): Iteraciones PBKDF2 (mínimo 100 000).
        hash_name (str): Hash de PBKDF2 en notación WebCrypto.
        tag_length (int): Longitud de la etiqueta AES-GCM en bytes.
        nonce_length (int): Longitud del nonce en bytes.
        salt_length (int): Longitud de la salt en bytes.

    """

    model_config = ConfigDict(frozen=True)

    secret: bytes = Field(repr=False)
    expected_plaintext: bytes = Field(repr=False)
    iterations: int
    hash_name: str = "SHA-256"
    tag_length: int = 16
    nonce_length: int = 12
    salt_length: int = 16

    @field_validator("secret", "expected_plaintext", mode="before")
    @classmethod
    def _encode_text(cls, value):
        if isinstance(value, str):
            value = value.encode("utf-8")
        if not value:
            raise ValueError("no puede estar vacío")
        return value

    @field_validator("iterations")
    @classmethod
    def _check_iterations(cls, value: int) -> int:
        if value < MIN_ITERATIONS:
            raise ValueError(f"debe ser al menos {MIN_ITERATIONS}")
        return value

    @field_validator("hash_name")
    @classmethod
    def _check_hash(cls, value: str) -> str:
        try:
            resolve_hash(value)
        except KeyDerivationError as exc:
            raise ValueError(str(exc)) from exc
        return value

    @field_validator("tag_length")
    @classmethod
    def _check_tag_length(cls, value: int) -> int:
        if value not in SUPPORTED_TAG_LENGTHS:
            allowed = ", ".join(str(n) for n in sorted(SUPPORTED_TAG_LENGTHS))
            raise ValueError(f"debe ser uno de: {allowed} bytes")
        return value

    @field_validator("nonce_length")
    @classmethod
    def _check_nonce_length(cls, value: int) -> int:
        if not MIN_NONCE_LENGTH <= value <= MAX_NONCE_LENGTH:
            raise ValueError(f"debe estar entre {MIN_NONCE_LENGTH} y {MAX_NONCE_LENGTH} bytes")
        return value

    @field_validator("salt_length")
    @classmethod
    def _check_salt_length(cls, value: int) -> int:
        if value < MIN_SALT_LENGTH:
            raise ValueError(f"debe ser al menos {MIN_SALT_LENGTH} bytes")
        return value

    @property
    def ciphertext_length(self) -> int:
        """Bytes de texto cifrado más etiqueta dentro de cada API key."""

        return len(self.expected_plaintext) + self.tag_length

    @property
    def token_length(self) -> int:
        """Bytes de la API key antes de la codificación Base64."""

        return self.ciphertext_length + self.nonce_length + self.salt_length


def _parse_int(env: Mapping[str, str], name: str) -> int:
    raw = env[name].strip()
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} debe ser un número entero (valor: {raw!r}).") from None


def load_config(env: Optional[Mapping[str, str]] = None) -> ApiKeyConfig:
    """Construye la configuración a partir de variables de entorno.

    Si no se indica ``env`` se carga el fichero ``.env`` (sin sobrescribir el
    entorno existente) y se usa ``os.environ``. ``GCM_TAG_LENGTH`` se expresa
    en bits, igual que en WebCrypto.

    Args:
        env (Optional[Mapping[str, str]]): Variables a usar en lugar del entorno.

    Returns:
        ApiKeyConfig: Configuración validada e inmutable.

    Raises:
        ConfigurationError: Si falta alguna variable o algún valor no es válido.

    """

    if env is None:
        load_dotenv()
        env = os.environ

    missing = [name for name in REQUIRED_ENV_VARS if not env.get(name)]
    if missing:
        raise ConfigurationError(
            "Faltan variables de entorno obligatorias: " + ", ".join(missing)
        )

    tag_bits = _parse_int(env, "GCM_TAG_LENGTH")
    if tag_bits % 8:
        raise ConfigurationError("GCM_TAG_LENGTH debe ser un múltiplo de 8 bits.")

    try:
        return ApiKeyConfig(
            secret=env["API_KEY_SECRET"],
            expected_plaintext=env["API_KEY_CIPHER"],
            iterations=_parse_int(env, "PBKDF2_ITERATIONS"),
            hash_name=env.get("PBKDF2_HASH") or "SHA-256",
            tag_length=tag_bits // 8,
            nonce_length=_parse_int(env, "API_KEY_IV_LENGTH"),
            salt_length=_parse_int(env, "API_KEY_SALT_LENGTH"),
        )
    except ValidationError as exc:
        # Solo nombres de campo y motivo; nunca los valores recibidos.
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        raise ConfigurationError(f"Configuración de API key inválida: {problems}") from None


def configure_logging(level: Optional[str] = None) -> None:
    """Configura el logging raíz con el formato común de la aplicación.

    Args:
        level (Optional[str]): Nivel de log; por defecto ``LOG_LEVEL`` o ``INFO``.

    """

    level_name = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    logging.basicConfig(
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
        level=getattr(logging, level_name, logging.INFO),
    )
