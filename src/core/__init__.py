"""Core: dominio, contratos, servicios y configuración (sin HTTP ni CLI)."""
