"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts y headers "de navegador" para todas las fuentes.
- Facilita testeo: se puede inyectar un `httpx.MockTransport`.
"""

from __future__ import annotations

import httpx
from bs4 import BeautifulSoup

from core.config import AppSettings


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` que se presenta como un navegador.

    Por qué un builder:
    - Centraliza timeout/User-Agent/Accept-Language para que todas las fuentes
      se comporten igual.
    - `transport` permite sustituir la red en tests.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": settings.accept_language,
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


def body_preview(text: str, limit: int) -> str:
    """Primeros `limit` caracteres de una respuesta, para logs."""

    if limit <= 0:
        return ""
    return text[:limit]


def select_markup(*, html: str, selector: str) -> str | None:
    """Devuelve el HTML del primer elemento que coincide con `selector`.

    `None` si no hay coincidencia. Se devuelve el markup (no el texto) para
    no fusionar contenidos de celdas contiguas al quitar las etiquetas.
    """

    if not html:
        return None
    soup = BeautifulSoup(html, "html.parser")
    node = soup.select_one(selector)
    if node is None:
        return None
    return str(node)
