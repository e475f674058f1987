# --------------------------------------------------------------
# File: api_key.py
# Description: Emisión y verificación de API keys cifradas con PBKDF2 + AES-GCM.
# --------------------------------------------------------------
"""Funciones de negocio para emitir y validar la cabecera ``X-API-Key``."""

from __future__ import annotations

import asyncio
import hmac
import logging
import os
from typing import Optional, Union

from core.config import ApiKeyConfig
from core.crypto_kdf import derive_key
from core.crypto_sym import open_sealed, seal
from core.errors import (
    AuthenticationFailure,
    IssuanceError,
    KeyDerivationError,
    MalformedTokenError,
    PlaintextMismatch,
)
from core.models import RejectReason, VerificationResult
from core.token_codec import pack, unpack

__all__ = ["API_KEY_HEADER", "averify_api_key", "issue_api_key", "verify_api_key"]

API_KEY_HEADER = "X-API-Key"

logger = logging.getLogger(__name__)


def issue_api_key(config: ApiKeyConfig) -> str:
    """Emite una API key nueva con salt y nonce aleatorios.

    Cada llamada es independiente: dos emisiones consecutivas con la misma
    configuración producen API keys distintas que verifican ambas.

    Args:
        config (ApiKeyConfig): Parámetros compartidos con el verificador.

    Returns:
        str: API key codificada en Base64, lista para la cabecera ``X-API-Key``.

    Raises:
        IssuanceError: Si falla la derivación, el generador aleatorio o el cifrado.

    """

    try:
        salt = os.urandom(config.salt_length)
        nonce = os.urandom(config.nonce_length)
        key = derive_key(
            config.secret,
            salt,
            iterations=config.iterations,
            hash_name=config.hash_name,
        )
        ciphertext = seal(
            key,
            nonce,
            config.expected_plaintext,
            tag_length=config.tag_length,
            nonce_length=config.nonce_length,
        )
    except (KeyDerivationError, ValueError, OSError) as exc:
        raise IssuanceError("No se ha podido emitir la API key.") from exc

    token = pack(ciphertext, nonce, salt)
    logger.debug("API key emitida (%d bytes sin codificar).", config.token_length)
    return token


def _check_api_key(token: Union[str, bytes], config: ApiKeyConfig) -> None:
    """Lanza la :class:`VerificationError` concreta si la API key no es válida."""

    parts = unpack(
        token,
        ciphertext_length=config.ciphertext_length,
        nonce_length=config.nonce_length,
        salt_length=config.salt_length,
    )
    try:
        key = derive_key(
            config.secret,
            parts.salt,
            iterations=config.iterations,
            hash_name=config.hash_name,
        )
    except KeyDerivationError:
        raise AuthenticationFailure() from None

    recovered = open_sealed(
        key,
        parts.nonce,
        parts.ciphertext,
        tag_length=config.tag_length,
        nonce_length=config.nonce_length,
    )
    if not hmac.compare_digest(recovered, config.expected_plaintext):
        raise PlaintextMismatch("El contenido descifrado no coincide.")


def verify_api_key(token: Optional[Union[str, bytes]], config: ApiKeyConfig) -> VerificationResult:
    """Verifica una API key recibida en la cabecera ``X-API-Key``.

    Todos los fallos se recuperan aquí y se convierten en un rechazo; el
    motivo solo se registra en el log y nunca debe llegar al cliente.

    Args:
        token (Optional[Union[str, bytes]]): Valor de la cabecera.
        config (ApiKeyConfig): Parámetros compartidos con el emisor.

    Returns:
        VerificationResult: Aceptación o rechazo con su motivo interno.

    """

    try:
        _check_api_key(token or "", config)
    except MalformedTokenError:
        reason = RejectReason.MALFORMED
    except AuthenticationFailure:
        reason = RejectReason.AUTHENTICATION_FAILED
    except PlaintextMismatch:
        reason = RejectReason.MISMATCH
    else:
        return VerificationResult.accept()

    logger.info("API key rechazada: %s", reason.value)
    return VerificationResult.reject(reason)


async def averify_api_key(
    token: Optional[Union[str, bytes]], config: ApiKeyConfig
) -> VerificationResult:
    """Variante asíncrona que ejecuta la verificación en un hilo de trabajo."""

    return await asyncio.to_thread(verify_api_key, token, config)
