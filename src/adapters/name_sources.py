"""Fuentes para la consulta inversa (nombres -> cédula).

Dos estrategias, elegidas por configuración (`name_lookup_mode`):
- `InformationalNameSource`: no consulta nada; informa de las alternativas
  legales disponibles en Ecuador.
- `ScrapingNameSource`: envía un formulario a un sitio de terceros y busca en
  el HTML la primera secuencia de exactamente 10 dígitos.

Nota:
- El scraping es frágil por naturaleza (el HTML no es un contrato). Por eso la
  heurística vive en `find_identifier_in_text` y detrás de `NameLookup`.
"""

from __future__ import annotations

import logging
import re

import httpx

from adapters.http_client import body_preview, build_async_client, select_markup
from core.config import AppSettings, NameLookupMode
from core.errors import NameLookupUnavailable, UpstreamError
from core.interfaces.lookup import NameLookup

logger = logging.getLogger(__name__)

_IDENTIFIER_IN_TEXT_RE = re.compile(r"(?<![0-9])[0-9]{10}(?![0-9])")

UNAVAILABLE_MESSAGE = "Consulta por nombres no disponible a través de APIs públicas gratuitas"

LEGAL_ALTERNATIVES = """consulta por nombres no disponible a través de APIs públicas gratuitas.

ALTERNATIVAS LEGALES DISPONIBLES:

FUNCIÓN JUDICIAL (SATJE)
• Consulta de procesos judiciales por nombre
• URL: https://procesosjudiciales.funcionjudicial.gob.ec/busqueda
• Permite buscar si una persona tiene procesos judiciales registrados

CONSEJO NACIONAL ELECTORAL (CNE)
• Consulta de personas registradas para votar
• Búsqueda por nombre y apellido
• Solo para ciudadanos habilitados para elecciones

IESS (Instituto Ecuatoriano de Seguridad Social)
• Consulta de afiliados (protegida con captcha)
• No tiene API pública abierta
• URL: https://www.iess.gob.ec/

SERVICIOS DE PAGO DISPONIBLES:
• EcuadorLegalOnline: Consulta por nombres y apellidos
• URL: https://tramites.ecuadorlegalonline.com/
• Incluye datos completos: cédula, estado civil, profesión, etc.

RECOMENDACIÓN: Use el servicio de consulta por cédula, que funciona con datos oficiales del SRI."""


def find_identifier_in_text(text: str) -> str | None:
    """Primera secuencia de exactamente 10 dígitos no rodeada por otros dígitos."""

    if not text:
        return None
    match = _IDENTIFIER_IN_TEXT_RE.search(text)
    return match.group(0) if match else None


class InformationalNameSource(NameLookup):
    """No realiza consultas: siempre informa de las alternativas legales."""

    def __init__(self, details: str = LEGAL_ALTERNATIVES) -> None:
        self._details = details

    async def lookup(self, given_name: str, surname: str) -> str | None:
        logger.info("Consulta por nombres en modo informativo; se devuelven alternativas legales")
        raise NameLookupUnavailable(self._details)


class DisabledNameSource(NameLookup):
    """Consulta por nombres deshabilitada: todo es "no encontrado"."""

    async def lookup(self, given_name: str, surname: str) -> str | None:
        return None


class ScrapingNameSource(NameLookup):
    """Envía nombres/apellidos a un formulario externo y extrae la cédula del HTML."""

    def __init__(
        self,
        settings: AppSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not settings.name_lookup_url:
            raise ValueError("name_lookup_url es obligatorio cuando name_lookup_mode=scrape")
        self._settings = settings
        self._url = settings.name_lookup_url
        self._transport = transport

    async def lookup(self, given_name: str, surname: str) -> str | None:
        form = {
            self._settings.name_lookup_given_field: given_name,
            self._settings.name_lookup_surname_field: surname,
        }
        headers = {"Referer": self._settings.name_lookup_referer or self._url}

        logger.info("Consultando por nombres en: %s", self._url)
        try:
            async with build_async_client(
                self._settings,
                extra_headers=headers,
                transport=self._transport,
            ) as client:
                response = await client.post(self._url, data=form)
        except httpx.HTTPError as exc:
            logger.warning("Fallo de red en consulta por nombres (%s): %s", self._url, exc)
            raise UpstreamError(f"error de red: {type(exc).__name__}", target=self._url) from exc

        html = response.text
        preview = body_preview(html, self._settings.body_preview_chars)
        if response.status_code != 200:
            logger.warning("HTTP %s en consulta por nombres: %s", response.status_code, preview)
            raise UpstreamError(
                f"HTTP {response.status_code}",
                target=self._url,
                body_preview=preview,
            )

        selector = self._settings.name_lookup_result_selector
        if selector:
            scoped = select_markup(html=html, selector=selector)
            if scoped is None:
                logger.info("El selector %r no encontró resultados", selector)
                return None
            html = scoped

        return find_identifier_in_text(html)


def build_name_source(
    settings: AppSettings,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> NameLookup:
    """Elige la estrategia de consulta por nombres según la configuración."""

    if settings.name_lookup_mode is NameLookupMode.SCRAPE:
        return ScrapingNameSource(settings, transport=transport)
    if settings.name_lookup_mode is NameLookupMode.DISABLED:
        return DisabledNameSource()
    return InformationalNameSource()
