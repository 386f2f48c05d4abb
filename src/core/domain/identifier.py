"""Validación de la cédula (identificador de 10 dígitos).

Solo se comprueba la forma: longitud exacta y dígitos ASCII. No se verifica
el dígito de control ni el código de provincia.
"""

from __future__ import annotations

import re

IDENTIFIER_LENGTH = 10

# `[0-9]` en vez de `\d`: `\d` acepta dígitos Unicode (árabes, devanagari...).
_IDENTIFIER_RE = re.compile(r"[0-9]{%d}" % IDENTIFIER_LENGTH)


def is_valid_identifier(value: object) -> bool:
    """True si `value` es un string de exactamente 10 dígitos decimales ASCII."""

    if not isinstance(value, str):
        return False
    return _IDENTIFIER_RE.fullmatch(value) is not None
