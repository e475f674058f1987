# --------------------------------------------------------------
# File: __init__.py
# Description: Adaptadores HTTP del esquema de API keys.
# --------------------------------------------------------------
"""Inicializa el paquete `api` con los servicios y la sonda de salud."""

__all__ = ["healthcheck", "services"]
