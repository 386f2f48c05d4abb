"""Fixtures compartidas."""

from __future__ import annotations

import json

import httpx
import pytest

from core.config import AppSettings


@pytest.fixture
def settings() -> AppSettings:
    """Settings aislados: sin leer `.env` del proyecto ni del usuario."""
    return AppSettings(
        _env_file=None,
        sri_base_url="https://sri.test/api/porIdentificacion",
        sri_referer="https://sri.test/",
        name_lookup_url="https://nombres.test/buscar",
    )


class RecordingTransport(httpx.MockTransport):
    """MockTransport que guarda las requests recibidas."""

    def __init__(self, status_code: int = 200, body: str | bytes | dict = b"") -> None:
        self.requests: list[httpx.Request] = []
        if isinstance(body, dict):
            body = json.dumps(body)
        self._status_code = status_code
        self._body = body.encode("utf-8") if isinstance(body, str) else body
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self._status_code, content=self._body)


@pytest.fixture
def make_transport():
    return RecordingTransport
