"""Fuente de nombres por cédula: API móvil del SRI.

Implementación:
- GET `{sri_base_url}/{cedula}/?tipoPersona=N&_=<epoch ms>` (el timestamp evita cachés).
- Headers de navegador (User-Agent, Accept-Language, Referer).
- Nombre: `contribuyente.denominacion`, y si viene vacío `contribuyente.nombreComercial`.

Notas:
- 404 => la cédula no existe para el SRI.
- Otro status != 200, errores de red o JSON con otra forma => `UpstreamError`.
"""

from __future__ import annotations

import logging
import time

import httpx
from pydantic import ValidationError

from adapters.http_client import body_preview, build_async_client
from core.config import AppSettings
from core.domain.models import SriResponse
from core.errors import UpstreamError
from core.interfaces.lookup import IdentifierLookup

logger = logging.getLogger(__name__)


def interpret_sri_payload(body: bytes | str) -> str | None:
    """Extrae el nombre completo de la respuesta del SRI.

    Devuelve `None` si ningún campo de nombre trae texto. Eleva
    `UpstreamError` si el cuerpo no es JSON o no tiene la forma esperada.
    """

    try:
        data = SriResponse.model_validate_json(body)
    except ValidationError as exc:
        raise UpstreamError(f"respuesta del SRI con formato inesperado: {exc.error_count()} error(es)") from exc

    contribuyente = data.contribuyente
    if contribuyente is None:
        return None

    for candidate in (contribuyente.denominacion, contribuyente.nombre_comercial):
        if candidate and candidate.strip():
            logger.info(
                "Datos encontrados - Identificación: %s, Nombre: %s, Clase: %s",
                contribuyente.identificacion,
                candidate.strip(),
                contribuyente.clase,
            )
            return candidate.strip()
    return None


class SriIdentifierSource(IdentifierLookup):
    """Consulta el nombre asociado a una cédula en el SRI."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport

    def _url(self, identifier: str) -> str:
        return f"{self._settings.sri_base_url.rstrip('/')}/{identifier}/"

    async def lookup(self, identifier: str) -> str | None:
        url = self._url(identifier)
        params = {"tipoPersona": "N", "_": str(int(time.time() * 1000))}
        headers = {
            "Accept": "application/json, text/plain, */*",
            "Referer": self._settings.sri_referer,
        }
        preview_chars = self._settings.body_preview_chars

        logger.info("Consultando API del SRI: %s", url)
        try:
            async with build_async_client(
                self._settings,
                extra_headers=headers,
                transport=self._transport,
            ) as client:
                response = await client.get(url, params=params)
        except httpx.HTTPError as exc:
            logger.warning("Fallo de red consultando el SRI (%s): %s", url, exc)
            raise UpstreamError(f"error de red: {type(exc).__name__}", target=url) from exc

        text = response.text
        preview = body_preview(text, preview_chars)
        logger.debug("Respuesta del SRI (HTTP %s): %s", response.status_code, preview)

        if response.status_code == 404:
            return None
        if response.status_code != 200:
            logger.warning("SRI devolvió HTTP %s para %s: %s", response.status_code, url, preview)
            raise UpstreamError(
                f"HTTP {response.status_code}",
                target=url,
                body_preview=preview,
            )

        try:
            full_name = interpret_sri_payload(response.content)
        except UpstreamError as exc:
            exc.target = url
            exc.body_preview = preview
            logger.warning("No se pudo interpretar la respuesta del SRI: %s", exc)
            raise

        if full_name is None:
            logger.info("No se encontró información del nombre en la respuesta")
        return full_name
