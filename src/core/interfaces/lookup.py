"""Contratos de las fuentes de consulta.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- El formato de la fuente externa no lo controlamos: aislarlo detrás de
  `lookup` permite cambiar la heurística de extracción sin tocar la API.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class IdentifierLookup(Protocol):
    """Fuente que resuelve una cédula a un nombre completo.

    Reglas:
    - Devuelve el nombre completo tal como lo entrega la fuente (recortado).
    - `None` significa "no encontrado".
    - Cualquier otro fallo se eleva como `core.errors.UpstreamError`.
    """

    async def lookup(self, identifier: str) -> str | None:
        ...


@runtime_checkable
class NameLookup(Protocol):
    """Fuente que resuelve nombres + apellidos a una cédula.

    Mismas reglas que `IdentifierLookup`; además puede elevar
    `core.errors.NameLookupUnavailable` si la consulta no se ofrece.
    """

    async def lookup(self, given_name: str, surname: str) -> str | None:
        ...
