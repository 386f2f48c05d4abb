"""Orquestación de consultas (validar -> consultar fuente -> mapear)."""
