"""Tests de la fuente SRI (interpretación del payload + request saliente)."""

import logging

import httpx
import pytest

from adapters.sri_source import SriIdentifierSource, interpret_sri_payload
from core.errors import UpstreamError


class TestInterpretSriPayload:
    def test_denominacion_preferred(self) -> None:
        body = '{"contribuyente": {"denominacion": "PEREZ GOMEZ JUAN", "nombreComercial": "TIENDA"}}'
        assert interpret_sri_payload(body) == "PEREZ GOMEZ JUAN"

    def test_falls_back_to_nombre_comercial(self) -> None:
        body = '{"contribuyente": {"denominacion": "", "nombreComercial": "  TIENDA JUAN  "}}'
        assert interpret_sri_payload(body) == "TIENDA JUAN"

    def test_blank_denominacion_falls_back(self) -> None:
        body = '{"contribuyente": {"denominacion": "   ", "nombreComercial": "TIENDA"}}'
        assert interpret_sri_payload(body) == "TIENDA"

    def test_both_empty_is_not_found(self) -> None:
        body = '{"contribuyente": {"denominacion": "", "nombreComercial": ""}}'
        assert interpret_sri_payload(body) is None

    def test_missing_contribuyente_is_not_found(self) -> None:
        assert interpret_sri_payload("{}") is None
        assert interpret_sri_payload('{"contribuyente": null}') is None

    def test_found_record_is_logged(self, caplog) -> None:
        caplog.set_level(logging.INFO, logger="adapters.sri_source")
        body = '{"contribuyente": {"identificacion": "1710034065", "denominacion": "ANA", "clase": "SIMPLE"}}'

        assert interpret_sri_payload(body) == "ANA"

        assert "Identificación: 1710034065" in caplog.text
        assert "Clase: SIMPLE" in caplog.text

    def test_unknown_fields_ignored(self) -> None:
        body = b'{"contribuyente": {"denominacion": "ANA", "clase": "SIMPLE", "otro": 1}, "deudas": []}'
        assert interpret_sri_payload(body) == "ANA"

    @pytest.mark.parametrize(
        "body",
        ["", "<html>error</html>", "[]", '{"contribuyente": "x"}', '{"contribuyente": {"denominacion": 5}}'],
    )
    def test_malformed_payload_is_upstream_error(self, body: str) -> None:
        with pytest.raises(UpstreamError):
            interpret_sri_payload(body)


class TestSriIdentifierSource:
    @pytest.mark.asyncio
    async def test_request_shape(self, settings, make_transport) -> None:
        transport = make_transport(200, {"contribuyente": {"denominacion": "PEREZ JUAN"}})
        source = SriIdentifierSource(settings, transport=transport)

        assert await source.lookup("1234567890") == "PEREZ JUAN"

        assert len(transport.requests) == 1
        request = transport.requests[0]
        assert request.method == "GET"
        assert request.url.path == "/api/porIdentificacion/1234567890/"
        assert request.url.params["tipoPersona"] == "N"
        assert request.url.params["_"].isdigit()
        assert request.headers["Referer"] == "https://sri.test/"
        assert request.headers["Accept-Language"] == settings.accept_language
        assert request.headers["User-Agent"].startswith("Mozilla/5.0")
        assert request.headers["Accept"].startswith("application/json")

    @pytest.mark.asyncio
    async def test_404_is_not_found(self, settings, make_transport) -> None:
        source = SriIdentifierSource(settings, transport=make_transport(404, "Not Found"))
        assert await source.lookup("1234567890") is None

    @pytest.mark.asyncio
    async def test_other_status_is_upstream_error(self, settings, make_transport) -> None:
        source = SriIdentifierSource(settings, transport=make_transport(503, "x" * 2000))
        with pytest.raises(UpstreamError) as excinfo:
            await source.lookup("1234567890")
        assert excinfo.value.target.endswith("/1234567890/")
        assert len(excinfo.value.body_preview) == settings.body_preview_chars

    @pytest.mark.asyncio
    async def test_malformed_json_carries_context(self, settings, make_transport) -> None:
        source = SriIdentifierSource(settings, transport=make_transport(200, "<html>mantenimiento</html>"))
        with pytest.raises(UpstreamError) as excinfo:
            await source.lookup("1234567890")
        assert excinfo.value.body_preview == "<html>mantenimiento</html>"

    @pytest.mark.asyncio
    async def test_network_error_is_upstream_error(self, settings) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        source = SriIdentifierSource(settings, transport=httpx.MockTransport(handler))
        with pytest.raises(UpstreamError):
            await source.lookup("1234567890")
