# --------------------------------------------------------------
# File: token_codec.py
# Description: Empaquetado de (ciphertext, nonce, salt) en una API key opaca.
# --------------------------------------------------------------
"""Serialización de las API keys para su transporte en una cabecera HTTP."""

import base64
import binascii
from typing import Union

from core.errors import MalformedTokenError
from core.models import TokenParts

__all__ = ["expected_token_length", "pack", "unpack"]


def expected_token_length(
    plaintext_length: int, tag_length: int, nonce_length: int, salt_length: int
) -> int:
    """Longitud en bytes de una API key antes de codificarla en Base64."""

    return plaintext_length + tag_length + nonce_length + salt_length


def pack(ciphertext: bytes, nonce: bytes, salt: bytes) -> str:
    """Concatena ``ciphertext ‖ nonce ‖ salt`` y lo codifica en Base64.

    Args:
        ciphertext (bytes): Texto cifrado con la etiqueta AES-GCM.
        nonce (bytes): Vector de inicialización usado al cifrar.
        salt (bytes): Salt usada en la derivación de la clave.

    Returns:
        str: API key en Base64 estándar con relleno.

    """

    return base64.b64encode(ciphertext + nonce + salt).decode("ascii")


def unpack(
    token: Union[str, bytes],
    *,
    ciphertext_length: int,
    nonce_length: int,
    salt_length: int,
) -> TokenParts:
    """Decodifica una API key y la separa en sus tres segmentos.

    La longitud total se comprueba antes de cortar; no se valida nada más.

    Args:
        token (Union[str, bytes]): API key recibida en Base64.
        ciphertext_length (int): Bytes esperados de texto cifrado + etiqueta.
        nonce_length (int): Bytes esperados de nonce.
        salt_length (int): Bytes esperados de salt.

    Returns:
        TokenParts: Segmentos ``ciphertext``, ``nonce`` y ``salt``.

    Raises:
        MalformedTokenError: Si no es Base64 válido o la longitud no cuadra.

    """

    if not token:
        raise MalformedTokenError("API key vacía.")

    try:
        raw = base64.b64decode(token.strip(), validate=True)
    except (binascii.Error, ValueError):
        raise MalformedTokenError("La API key no es Base64 válido.") from None

    expected = ciphertext_length + nonce_length + salt_length
    if len(raw) != expected:
        raise MalformedTokenError(
            f"Longitud de API key inesperada: {len(raw)} bytes (se esperaban {expected})."
        )

    nonce_end = ciphertext_length + nonce_length
    return TokenParts(
        ciphertext=raw[:ciphertext_length],
        nonce=raw[ciphertext_length:nonce_end],
        salt=raw[nonce_end:],
    )
