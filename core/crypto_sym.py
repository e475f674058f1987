# --------------------------------------------------------------
# File: crypto_sym.py
# Description: Primitivas AES-GCM para sellar y abrir el contenido de las API keys.
# --------------------------------------------------------------
"""Rutinas de cifrado autenticado con longitud de etiqueta configurable."""

from typing import Optional

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from core.crypto_kdf import DERIVED_KEY_LENGTH
from core.errors import AuthenticationFailure

__all__ = [
    "DEFAULT_TAG_LENGTH",
    "SUPPORTED_TAG_LENGTHS",
    "open_sealed",
    "seal",
]

DEFAULT_TAG_LENGTH = 16
# Longitudes admitidas por WebCrypto para AES-GCM (32..128 bits), en bytes.
SUPPORTED_TAG_LENGTHS = frozenset({4, 8, 12, 13, 14, 15, 16})


def _check_params(key: bytes, nonce: bytes, tag_length: int, nonce_length: Optional[int]) -> None:
    if len(key) != DERIVED_KEY_LENGTH:
        raise ValueError("La clave AES-GCM debe ser de 256 bits.")
    if tag_length not in SUPPORTED_TAG_LENGTHS:
        raise ValueError(f"Longitud de etiqueta no soportada: {tag_length} bytes.")
    if nonce_length is not None and len(nonce) != nonce_length:
        raise ValueError("El nonce no tiene la longitud configurada.")


def seal(
    key: bytes,
    nonce: bytes,
    plaintext: bytes,
    *,
    tag_length: int = DEFAULT_TAG_LENGTH,
    nonce_length: Optional[int] = None,
) -> bytes:
    """Cifra ``plaintext`` con AES-256-GCM y devuelve ``ciphertext ‖ tag``.

    Args:
        key (bytes): Clave derivada de 256 bits.
        nonce (bytes): Vector de inicialización aleatorio.
        plaintext (bytes): Datos en claro.
        tag_length (int): Bytes de etiqueta que se conservan.
        nonce_length (Optional[int]): Longitud exigida al nonce, si se indica.

    Returns:
        bytes: Texto cifrado de ``len(plaintext) + tag_length`` bytes.

    Raises:
        ValueError: Si la clave, el nonce o la etiqueta no son válidos.

    """

    _check_params(key, nonce, tag_length, nonce_length)

    if tag_length == DEFAULT_TAG_LENGTH:
        return AESGCM(key).encrypt(nonce, plaintext, None)

    encryptor = Cipher(algorithms.AES(key), modes.GCM(nonce)).encryptor()
    ciphertext = encryptor.update(plaintext) + encryptor.finalize()
    return ciphertext + encryptor.tag[:tag_length]


def open_sealed(
    key: bytes,
    nonce: bytes,
    sealed: bytes,
    *,
    tag_length: int = DEFAULT_TAG_LENGTH,
    nonce_length: Optional[int] = None,
) -> bytes:
    """Descifra y autentica ``ciphertext ‖ tag`` producido por :func:`seal`.

    Cualquier fallo (etiqueta inválida, longitudes incorrectas, entrada basura)
    se notifica con el mismo :class:`AuthenticationFailure` genérico.

    Args:
        key (bytes): Clave derivada de 256 bits.
        nonce (bytes): Vector de inicialización recibido.
        sealed (bytes): Texto cifrado con la etiqueta al final.
        tag_length (int): Bytes de etiqueta al final de ``sealed``.
        nonce_length (Optional[int]): Longitud exigida al nonce, si se indica.

    Returns:
        bytes: Mensaje original en claro.

    Raises:
        AuthenticationFailure: Si el mensaje no se puede autenticar.

    """

    try:
        _check_params(key, nonce, tag_length, nonce_length)
        if len(sealed) < tag_length:
            raise ValueError("Texto cifrado más corto que la etiqueta.")

        if tag_length == DEFAULT_TAG_LENGTH:
            return AESGCM(key).decrypt(nonce, sealed, None)

        ciphertext, tag = sealed[:-tag_length], sealed[-tag_length:]
        decryptor = Cipher(
            algorithms.AES(key), modes.GCM(nonce, tag, min_tag_length=tag_length)
        ).decryptor()
        return decryptor.update(ciphertext) + decryptor.finalize()
    except (InvalidTag, ValueError):
        # Sin encadenar: el motivo concreto no debe viajar con la excepción.
        raise AuthenticationFailure() from None
