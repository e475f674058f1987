# --------------------------------------------------------------
# File: services.py
# Description: Servicios de autenticación por API key para la capa HTTP.
# --------------------------------------------------------------
"""Adaptadores independientes del framework entre las cabeceras HTTP y el núcleo."""

import logging
from typing import Any, Dict, Mapping, Optional, Tuple

from core.api_key import API_KEY_HEADER, issue_api_key, verify_api_key
from core.config import ApiKeyConfig

logger = logging.getLogger(__name__)

# Respuestas fijas: el motivo interno de rechazo nunca forma parte del cuerpo.
MISSING_KEY_RESPONSE: Tuple[int, Dict[str, Any]] = (401, {"error": "Missing X-API-Key header"})
INVALID_KEY_RESPONSE: Tuple[int, Dict[str, Any]] = (403, {"error": "Invalid API key"})


def _header_value(headers: Mapping[str, str], name: str) -> Optional[str]:
    """Busca una cabecera sin distinguir mayúsculas de minúsculas.

    Args:
        headers (Mapping[str, str]): Cabeceras de la petición.
        name (str): Nombre de la cabecera buscada.

    Returns:
        Optional[str]: Valor de la cabecera o ``None`` si no existe.
    """

    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None


def authenticate_request(
    headers: Mapping[str, str], config: ApiKeyConfig
) -> Tuple[int, Dict[str, Any]]:
    """Valida la cabecera ``X-API-Key`` de una petición entrante.

    Args:
        headers (Mapping[str, str]): Cabeceras de la petición.
        config (ApiKeyConfig): Configuración del verificador.

    Returns:
        Tuple[int, Dict[str, Any]]: Código HTTP y cuerpo JSON. ``200`` con un
        cuerpo vacío indica que la petición puede continuar.
    """

    api_key = _header_value(headers, API_KEY_HEADER)
    if not api_key:
        return MISSING_KEY_RESPONSE[0], dict(MISSING_KEY_RESPONSE[1])

    result = verify_api_key(api_key, config)
    if not result.accepted:
        logger.warning("Petición rechazada por API key inválida (%s).", result.reason.value)
        return INVALID_KEY_RESPONSE[0], dict(INVALID_KEY_RESPONSE[1])

    return 200, {}


def build_auth_headers(config: ApiKeyConfig) -> Dict[str, str]:
    """Genera las cabeceras de una petición autenticada con una API key nueva.

    Args:
        config (ApiKeyConfig): Configuración del emisor.

    Returns:
        Dict[str, str]: Cabeceras ``Content-Type`` y ``X-API-Key``.
    """

    return {
        "Content-Type": "application/json",
        API_KEY_HEADER: issue_api_key(config),
    }
