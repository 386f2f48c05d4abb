"""Capa HTTP (FastAPI).

Por qué un paquete separado:
- El Core no conoce FastAPI; la API solo traduce JSON <-> servicios.
"""

from api.app import create_app

__all__ = ["create_app"]
