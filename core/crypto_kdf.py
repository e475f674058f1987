# --------------------------------------------------------------
# File: crypto_kdf.py
# Description: Derivación de claves simétricas de un solo uso mediante PBKDF2.
# --------------------------------------------------------------
"""Funciones de derivación de claves para las API keys cifradas."""

from typing import Dict, Type

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from core.errors import KeyDerivationError

__all__ = ["DERIVED_KEY_LENGTH", "MIN_ITERATIONS", "derive_key", "resolve_hash"]

# AES-256: 32 bytes de clave derivada.
DERIVED_KEY_LENGTH = 32
MIN_ITERATIONS = 100_000

_HASHES: Dict[str, Type[hashes.HashAlgorithm]] = {
    "SHA256": hashes.SHA256,
    "SHA384": hashes.SHA384,
    "SHA512": hashes.SHA512,
}


def resolve_hash(hash_name: str) -> hashes.HashAlgorithm:
    """Traduce un identificador estilo WebCrypto (``SHA-256``) a su algoritmo.

    Args:
        hash_name (str): Nombre del hash, sin distinguir mayúsculas ni guiones.

    Returns:
        hashes.HashAlgorithm: Instancia lista para PBKDF2HMAC.

    Raises:
        KeyDerivationError: Si el hash no está soportado.

    """

    normalized = (hash_name or "").replace("-", "").replace("_", "").upper()
    algorithm = _HASHES.get(normalized)
    if algorithm is None:
        raise KeyDerivationError(f"Hash no soportado para PBKDF2: {hash_name!r}")
    return algorithm()


def derive_key(
    secret: bytes,
    salt: bytes,
    *,
    iterations: int,
    hash_name: str = "SHA-256",
    min_iterations: int = MIN_ITERATIONS,
) -> bytes:
    """Deriva una clave AES-256 a partir del secreto compartido y una salt.

    Args:
        secret (bytes): Secreto compartido entre emisor y verificador.
        salt (bytes): Salt aleatoria de la API key.
        iterations (int): Número de iteraciones PBKDF2.
        hash_name (str): Hash subyacente de HMAC.
        min_iterations (int): Suelo de iteraciones aceptado.

    Returns:
        bytes: Clave de 32 bytes para usar directamente con AES-GCM.

    Raises:
        KeyDerivationError: Si alguna entrada no es válida.

    """

    if not secret:
        raise KeyDerivationError("El secreto compartido no puede estar vacío.")
    if not salt:
        raise KeyDerivationError("La salt no puede estar vacía.")
    # bool es subclase de int y no debe aceptarse como número de iteraciones.
    if isinstance(iterations, bool) or not isinstance(iterations, int) or iterations <= 0:
        raise KeyDerivationError("Las iteraciones deben ser un entero positivo.")
    if iterations < min_iterations:
        raise KeyDerivationError(
            f"Las iteraciones ({iterations}) están por debajo del mínimo ({min_iterations})."
        )

    kdf = PBKDF2HMAC(
        algorithm=resolve_hash(hash_name),
        length=DERIVED_KEY_LENGTH,
        salt=bytes(salt),
        iterations=iterations,
    )
    return kdf.derive(bytes(secret))
