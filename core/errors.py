# --------------------------------------------------------------
# File: errors.py
# Description: Jerarquía de excepciones del esquema de API keys cifradas.
# --------------------------------------------------------------
"""Excepciones propias para emisión, verificación y configuración de API keys."""

__all__ = [
    "ApiKeyError",
    "AuthenticationFailure",
    "ConfigurationError",
    "IssuanceError",
    "KeyDerivationError",
    "MalformedTokenError",
    "PlaintextMismatch",
    "VerificationError",
]


class ApiKeyError(Exception):
    """Base común de todos los errores del esquema de API keys."""


class ConfigurationError(ApiKeyError):
    """Parámetros ausentes o inválidos; el proceso no debe arrancar con ellos."""


class KeyDerivationError(ApiKeyError):
    """Entradas inválidas para PBKDF2 (secreto, salt, iteraciones o hash)."""


class IssuanceError(ApiKeyError):
    """Fallo al emitir una API key; no existe alternativa de recuperación."""


class VerificationError(ApiKeyError):
    """Base de los rechazos de verificación.

    El motivo concreto solo sirve para diagnóstico interno; hacia el exterior
    todos los rechazos se presentan de forma idéntica.
    """


class MalformedTokenError(VerificationError):
    """El token no decodifica o no tiene la longitud total esperada."""


class AuthenticationFailure(VerificationError):
    """La etiqueta AES-GCM no verifica (manipulación, clave o nonce erróneos)."""

    # Mensaje fijo para no distinguir entre tipos de fallo.
    GENERIC_MESSAGE = "No se ha podido autenticar el mensaje cifrado."

    def __init__(self, message: str = GENERIC_MESSAGE) -> None:
        super().__init__(message)


class PlaintextMismatch(VerificationError):
    """La etiqueta es válida pero el contenido descifrado no coincide."""
