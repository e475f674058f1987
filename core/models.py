# --------------------------------------------------------------
# File: models.py
# Description: Modelos de datos comunes utilizados por la capa criptográfica.
# --------------------------------------------------------------
"""Modelos Pydantic que encapsulan estructuras de intercambio de API keys."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class TokenParts(BaseModel):
    """Segmentos de una API key tras desempaquetarla.

    Attributes:
        ciphertext (bytes): Texto cifrado seguido de la etiqueta AES-GCM.
        nonce (bytes): Vector de inicialización utilizado durante el cifrado.
        salt (bytes): Salt aleatoria empleada en la derivación PBKDF2.

    """

    model_config = ConfigDict(frozen=True)

    ciphertext: bytes
    nonce: bytes
    salt: bytes


class RejectReason(str, Enum):
    """Motivos internos de rechazo; nunca se exponen al cliente."""

    MALFORMED = "malformed"
    AUTHENTICATION_FAILED = "authentication_failed"
    MISMATCH = "mismatch"


class VerificationResult(BaseModel):
    """Resultado de verificar una API key.

    Attributes:
        accepted (bool): ``True`` si la API key es válida.
        reason (Optional[RejectReason]): Motivo del rechazo, solo para logs.

    """

    model_config = ConfigDict(frozen=True)

    accepted: bool
    reason: Optional[RejectReason] = None

    @classmethod
    def accept(cls) -> "VerificationResult":
        return cls(accepted=True)

    @classmethod
    def reject(cls, reason: RejectReason) -> "VerificationResult":
        return cls(accepted=False, reason=reason)

    def __bool__(self) -> bool:
        return self.accepted
