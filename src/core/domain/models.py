"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- El mismo modelo valida el JSON entrante y serializa la respuesta (alias camelCase).

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class NameSplit(BaseModel):
    """Resultado de separar un nombre completo. Inmutable."""

    model_config = ConfigDict(frozen=True)

    given_name: str = Field(default="", description="Nombres (mitad izquierda).")
    surname: str = Field(default="", description="Apellidos (mitad derecha).")


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class IdentifierLookupRequest(_WireModel):
    identifier: str = Field(
        ...,
        description="Cédula a consultar (10 dígitos).",
    )


class IdentifierLookupResponse(_WireModel):
    given_name: str = Field(..., alias="givenName")
    surname: str = Field(...)


class NameLookupRequest(_WireModel):
    given_name: str = Field(default="", alias="givenName")
    surname: str = Field(default="")


class NameLookupResponse(_WireModel):
    identifier: str = Field(..., description="Cédula encontrada.")
    given_name: str = Field(..., alias="givenName")
    surname: str = Field(...)


class NameLookupInfoResponse(_WireModel):
    """Respuesta informativa cuando la consulta por nombres no está disponible.

    Se devuelve con HTTP 200: no es un error del cliente, es contenido.
    """

    success: bool = False
    given_name: str = Field(..., alias="givenName")
    surname: str = Field(...)
    message: str = Field(...)
    alternatives_info: bool = Field(default=True, alias="alternativesInfo")
    error_details: str = Field(..., alias="errorDetails")


class ErrorResponse(BaseModel):
    error: str


class SriContribuyente(BaseModel):
    """Subconjunto del contribuyente que devuelve el SRI."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    identificacion: str | None = None
    denominacion: str | None = Field(
        default=None,
        description="Nombre/razón social principal.",
    )
    nombre_comercial: str | None = Field(
        default=None,
        alias="nombreComercial",
        description="Nombre comercial; respaldo si `denominacion` viene vacío.",
    )
    clase: str | None = None


class SriResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    contribuyente: SriContribuyente | None = None
