"""Aplicación FastAPI: endpoints de consulta por cédula y por nombres.

La capa HTTP solo traduce: JSON de entrada -> servicio -> JSON de salida.
Todos los errores salen con la misma forma `{"error": "..."}`.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response
from fastapi.staticfiles import StaticFiles
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from adapters.name_sources import UNAVAILABLE_MESSAGE, build_name_source
from adapters.sri_source import SriIdentifierSource
from core.config import AppSettings
from core.domain.models import (
    ErrorResponse,
    IdentifierLookupRequest,
    NameLookupInfoResponse,
    NameLookupRequest,
)
from core.errors import InvalidInputError, LookupFailure, NameLookupUnavailable, UpstreamError
from core.interfaces.lookup import IdentifierLookup, NameLookup
from core.services.lookup_service import (
    INVALID_IDENTIFIER_MESSAGE,
    MISSING_NAMES_MESSAGE,
    lookup_by_identifier,
    lookup_by_name,
)

logger = logging.getLogger(__name__)

IDENTIFIER_PATH = "/api/consultar"
NAMES_PATH = "/api/consultar-nombres"

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

_OTHER_METHODS = ["GET", "PUT", "PATCH", "DELETE"]

_HTTP_ERROR_MESSAGES = {
    404: "Recurso no encontrado",
    405: "Método no permitido",
}


def _error(status_code: int, message: str, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(
        ErrorResponse(error=message).model_dump(),
        status_code=status_code,
        headers=headers,
    )


async def _read_json(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError as exc:
        raise InvalidInputError("JSON inválido") from exc


async def _on_lookup_failure(request: Request, exc: LookupFailure) -> JSONResponse:
    if isinstance(exc, UpstreamError):
        logger.warning("Fallo de la fuente externa en %s: %s", request.url.path, exc)
    return _error(exc.status_code, exc.message)


async def _on_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = _HTTP_ERROR_MESSAGES.get(exc.status_code) or str(exc.detail)
    return _error(exc.status_code, message, headers=exc.headers)


async def _on_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Error no controlado en %s", request.url.path)
    # Este handler corre fuera del middleware de CORS.
    headers = dict(CORS_HEADERS) if request.url.path.startswith("/api/") else None
    return _error(500, "Error interno del servidor al consultar", headers=headers)


async def _preflight() -> Response:
    return Response(status_code=200)


async def _method_not_allowed() -> Response:
    raise StarletteHTTPException(status_code=405, headers={"Allow": "POST, OPTIONS"})


def create_app(
    settings: AppSettings | None = None,
    *,
    identifier_source: IdentifierLookup | None = None,
    name_source: NameLookup | None = None,
) -> FastAPI:
    """Construye la app.

    Las fuentes se pueden inyectar (tests, otras integraciones); si no, se
    derivan de `settings`.
    """

    settings = settings or AppSettings()
    identifier_source = identifier_source or SriIdentifierSource(settings)
    name_source = name_source or build_name_source(settings)

    app = FastAPI(title="Consulta de Cédula", docs_url=None, redoc_url=None)
    app.state.settings = settings

    app.add_exception_handler(LookupFailure, _on_lookup_failure)
    app.add_exception_handler(StarletteHTTPException, _on_http_exception)
    app.add_exception_handler(Exception, _on_unexpected)

    @app.middleware("http")
    async def add_cors_headers(request: Request, call_next):
        response = await call_next(request)
        if request.url.path.startswith("/api/"):
            response.headers.update(CORS_HEADERS)
        return response

    @app.get("/api/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post(IDENTIFIER_PATH)
    async def consultar(request: Request) -> JSONResponse:
        payload = await _read_json(request)
        try:
            body = IdentifierLookupRequest.model_validate(payload)
        except ValidationError as exc:
            raise InvalidInputError(INVALID_IDENTIFIER_MESSAGE) from exc

        result = await lookup_by_identifier(body.identifier, identifier_source)
        return JSONResponse(result.model_dump(by_alias=True))

    @app.post(NAMES_PATH)
    async def consultar_nombres(request: Request) -> JSONResponse:
        payload = await _read_json(request)
        try:
            body = NameLookupRequest.model_validate(payload)
        except ValidationError as exc:
            raise InvalidInputError(MISSING_NAMES_MESSAGE) from exc

        try:
            result = await lookup_by_name(body.given_name, body.surname, name_source)
        except NameLookupUnavailable as exc:
            info = NameLookupInfoResponse(
                given_name=body.given_name,
                surname=body.surname,
                message=UNAVAILABLE_MESSAGE,
                error_details=exc.details,
            )
            return JSONResponse(info.model_dump(by_alias=True))
        return JSONResponse(result.model_dump(by_alias=True))

    app.add_api_route(IDENTIFIER_PATH, _preflight, methods=["OPTIONS"], include_in_schema=False)
    app.add_api_route(NAMES_PATH, _preflight, methods=["OPTIONS"], include_in_schema=False)
    # Con el mount estático en "/" el router ya no responde 405 por sí solo.
    for path in (IDENTIFIER_PATH, NAMES_PATH):
        app.add_api_route(path, _method_not_allowed, methods=_OTHER_METHODS, include_in_schema=False)

    if settings.static_dir is not None:
        if settings.static_dir.is_dir():
            app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")
        else:
            logger.warning("static_dir %s no existe; no se sirven archivos estáticos", settings.static_dir)

    return app
