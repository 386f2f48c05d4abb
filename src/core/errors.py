"""Taxonomía de errores de consulta.

Cada error sabe con qué código HTTP se expone y qué mensaje ve el cliente.
Los detalles de diagnóstico (URL consultada, fragmento de respuesta) quedan
en el error para los logs, nunca en la respuesta pública.
"""

from __future__ import annotations


class LookupFailure(Exception):
    """Base de los fallos esperables durante una consulta."""

    status_code: int = 500
    default_message: str = "Error interno del servidor al consultar"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInputError(LookupFailure):
    """Entrada malformada (cédula con otra forma, JSON inválido, campos vacíos)."""

    status_code = 400
    default_message = "Solicitud inválida"


class NotFoundError(LookupFailure):
    """La fuente no tiene registro para lo consultado."""

    status_code = 404
    default_message = "Cédula no encontrada"


class UpstreamError(LookupFailure):
    """Fallo de red, estado HTTP inesperado o payload con forma desconocida."""

    status_code = 500

    def __init__(
        self,
        reason: str,
        *,
        target: str | None = None,
        body_preview: str | None = None,
    ) -> None:
        super().__init__()
        self.reason = reason
        self.target = target
        self.body_preview = body_preview

    def __str__(self) -> str:
        parts = [self.reason]
        if self.target:
            parts.append(f"target={self.target}")
        if self.body_preview:
            parts.append(f"body={self.body_preview!r}")
        return " ".join(parts)


class NameLookupUnavailable(Exception):
    """La consulta por nombres no se ofrece; `details` describe las alternativas."""

    def __init__(self, details: str) -> None:
        super().__init__(details)
        self.details = details
