# --------------------------------------------------------------
# File: __init__.py
# Description: Exposición pública del esquema de API keys del paquete core.
# --------------------------------------------------------------
"""Inicializa el paquete `core` y documenta sus módulos principales."""

__all__ = [
    "api_key",
    "config",
    "crypto_kdf",
    "crypto_sym",
    "errors",
    "models",
    "token_codec",
]
