# --------------------------------------------------------------
# File: healthcheck.py
# Description: Sonda de salud que se autentica con una API key recién emitida.
# --------------------------------------------------------------
"""Comprueba ``/health`` del servicio local; sale con 0 si responde 200."""

import logging
import os
import sys
from typing import List, Optional

import requests

from api.services import build_auth_headers
from core.config import configure_logging, load_config
from core.errors import ConfigurationError, IssuanceError

logger = logging.getLogger(__name__)

DEFAULT_PORT = 3000
DEFAULT_TIMEOUT = 5.0


def probe(port: int = DEFAULT_PORT, *, timeout: float = DEFAULT_TIMEOUT) -> bool:
    """Envía ``POST /health`` a ``localhost`` con una API key nueva.

    Args:
        port (int): Puerto del servicio local.
        timeout (float): Segundos máximos de espera.

    Returns:
        bool: ``True`` si el servicio responde con HTTP 200.

    Raises:
        ConfigurationError: Si la configuración de la API key no es válida.
        IssuanceError: Si no se puede emitir la API key.
    """

    config = load_config()
    headers = build_auth_headers(config)
    url = f"http://localhost:{port}/health"
    try:
        response = requests.post(url, headers=headers, timeout=timeout)
    except requests.RequestException as exc:
        logger.error("No se ha podido contactar con %s: %s", url, exc)
        return False

    logger.debug("Respuesta de %s: %d", url, response.status_code)
    return response.status_code == 200


def main(argv: Optional[List[str]] = None) -> int:
    """Punto de entrada de la sonda; devuelve el código de salida."""

    configure_logging()
    args = sys.argv[1:] if argv is None else argv
    try:
        port = int(args[0]) if args else DEFAULT_PORT
        timeout = float(os.getenv("HEALTHCHECK_TIMEOUT") or DEFAULT_TIMEOUT)
    except ValueError:
        logger.error("Puerto o timeout inválido: %s", args)
        return 1

    try:
        healthy = probe(port, timeout=timeout)
    except (ConfigurationError, IssuanceError) as exc:
        logger.error("%s", exc)
        return 1
    return 0 if healthy else 1


if __name__ == "__main__":
    sys.exit(main())
