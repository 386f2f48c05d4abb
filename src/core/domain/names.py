"""Separación heurística de un nombre completo en nombres y apellidos.

La fuente entrega un único string ("PEREZ GOMEZ JUAN CARLOS" o similar) sin
delimitar qué parte es nombre y cuál apellido. La política aproxima la
convención de dos nombres + dos apellidos y se conserva tal cual: los
consumidores dependen del reparto exacto.
"""

from __future__ import annotations

from core.domain.models import NameSplit


def split_full_name(full_name: str) -> NameSplit:
    """Divide `full_name` en (nombres, apellidos).

    - 0 tokens: ("", "")
    - 1 token: (token, "")
    - 2 tokens: (t0, t1)
    - 3 tokens: (t0, "t1 t2")
    - 4+ tokens: corte en n // 2; con n impar el token extra va a apellidos.

    Nunca falla.
    """

    tokens = (full_name or "").split()

    if not tokens:
        return NameSplit(given_name="", surname="")
    if len(tokens) == 1:
        return NameSplit(given_name=tokens[0], surname="")
    if len(tokens) == 2:
        return NameSplit(given_name=tokens[0], surname=tokens[1])
    if len(tokens) == 3:
        return NameSplit(given_name=tokens[0], surname=" ".join(tokens[1:]))

    mid = len(tokens) // 2
    return NameSplit(
        given_name=" ".join(tokens[:mid]),
        surname=" ".join(tokens[mid:]),
    )
