"""Orquestación de las consultas por cédula y por nombres.

Este módulo concentra el flujo que la API y la CLI comparten:
validar la entrada antes de cualquier I/O, delegar en la fuente
(`core.interfaces.lookup`) y mapear el resultado a los modelos de respuesta.
Los errores se elevan como `core.errors.*`; la capa de transporte decide cómo
presentarlos.
"""

from __future__ import annotations

import logging

from core.domain.identifier import is_valid_identifier
from core.domain.models import IdentifierLookupResponse, NameLookupResponse
from core.domain.names import split_full_name
from core.errors import InvalidInputError, NotFoundError
from core.interfaces.lookup import IdentifierLookup, NameLookup

logger = logging.getLogger(__name__)

INVALID_IDENTIFIER_MESSAGE = "Cédula inválida. Debe contener exactamente 10 dígitos"
MISSING_NAMES_MESSAGE = "Se requieren nombres y apellidos"


async def lookup_by_identifier(identifier: str, source: IdentifierLookup) -> IdentifierLookupResponse:
    """Consulta una cédula y devuelve el nombre separado en nombres/apellidos."""

    if not is_valid_identifier(identifier):
        raise InvalidInputError(INVALID_IDENTIFIER_MESSAGE)

    full_name = await source.lookup(identifier)
    if full_name is None or not full_name.strip():
        logger.info("Cédula %s sin nombre en la fuente", identifier)
        raise NotFoundError("Cédula no encontrada")

    split = split_full_name(full_name.strip())
    return IdentifierLookupResponse(given_name=split.given_name, surname=split.surname)


async def lookup_by_name(given_name: str, surname: str, source: NameLookup) -> NameLookupResponse:
    """Consulta inversa: nombres + apellidos -> cédula.

    Puede elevar `NameLookupUnavailable` si la fuente configurada es informativa.
    """

    given_name = (given_name or "").strip()
    surname = (surname or "").strip()
    if not given_name or not surname:
        raise InvalidInputError(MISSING_NAMES_MESSAGE)

    logger.info("Consulta por nombres solicitada: %s %s", given_name, surname)
    identifier = await source.lookup(given_name, surname)
    if identifier is None:
        raise NotFoundError("No se encontró una cédula para los nombres indicados")

    return NameLookupResponse(identifier=identifier, given_name=given_name, surname=surname)
