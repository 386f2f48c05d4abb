"""Tests de la API HTTP (FastAPI TestClient)."""

import pytest
from fastapi.testclient import TestClient

from adapters.name_sources import ScrapingNameSource
from adapters.sri_source import SriIdentifierSource
from api.app import create_app
from core.errors import UpstreamError


class StubIdentifierSource:
    def __init__(self, full_name: str | None = None, error: Exception | None = None) -> None:
        self.full_name = full_name
        self.error = error
        self.calls: list[str] = []

    async def lookup(self, identifier: str) -> str | None:
        self.calls.append(identifier)
        if self.error:
            raise self.error
        return self.full_name


class StubNameSource:
    def __init__(self, identifier: str | None = None) -> None:
        self.identifier = identifier
        self.calls: list[tuple[str, str]] = []

    async def lookup(self, given_name: str, surname: str) -> str | None:
        self.calls.append((given_name, surname))
        return self.identifier


def _client(settings, identifier_source=None, name_source=None) -> TestClient:
    app = create_app(
        settings,
        identifier_source=identifier_source or StubIdentifierSource("JUAN CARLOS PEREZ GOMEZ"),
        name_source=name_source,
    )
    return TestClient(app)


class TestConsultarEndToEnd:
    """Flujo completo con la fuente SRI real sobre un transporte simulado."""

    def test_empty_name_fields_is_404(self, settings, make_transport) -> None:
        transport = make_transport(200, {"contribuyente": {"denominacion": "", "nombreComercial": ""}})
        client = _client(settings, identifier_source=SriIdentifierSource(settings, transport=transport))

        response = client.post("/api/consultar", json={"identifier": "1234567890"})

        assert response.status_code == 404
        assert response.json() == {"error": "Cédula no encontrada"}
        assert len(transport.requests) == 1

    def test_short_identifier_is_400_without_outbound_call(self, settings, make_transport) -> None:
        transport = make_transport(200, {"contribuyente": {"denominacion": "X"}})
        client = _client(settings, identifier_source=SriIdentifierSource(settings, transport=transport))

        response = client.post("/api/consultar", json={"identifier": "123"})

        assert response.status_code == 400
        assert "10 dígitos" in response.json()["error"]
        assert transport.requests == []

    def test_success_splits_name(self, settings, make_transport) -> None:
        transport = make_transport(200, {"contribuyente": {"denominacion": "PEREZ GOMEZ JUAN CARLOS"}})
        client = _client(settings, identifier_source=SriIdentifierSource(settings, transport=transport))

        response = client.post("/api/consultar", json={"identifier": "1234567890"})

        assert response.status_code == 200
        assert response.json() == {"givenName": "PEREZ GOMEZ", "surname": "JUAN CARLOS"}

    def test_malformed_upstream_is_500(self, settings, make_transport) -> None:
        transport = make_transport(200, "<html>error</html>")
        client = _client(settings, identifier_source=SriIdentifierSource(settings, transport=transport))

        response = client.post("/api/consultar", json={"identifier": "1234567890"})

        assert response.status_code == 500
        body = response.json()
        assert set(body) == {"error"}
        assert "<html>" not in body["error"]


class TestConsultar:
    def test_success(self, settings) -> None:
        source = StubIdentifierSource("Juan Carlos Perez")
        response = _client(settings, identifier_source=source).post(
            "/api/consultar", json={"identifier": "0912345678"}
        )
        assert response.status_code == 200
        assert response.json() == {"givenName": "Juan", "surname": "Carlos Perez"}
        assert source.calls == ["0912345678"]

    def test_malformed_json_is_400(self, settings) -> None:
        response = _client(settings).post(
            "/api/consultar",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json() == {"error": "JSON inválido"}

    @pytest.mark.parametrize("payload", [{}, {"identifier": 1234567890}, [], {"cedula": "1234567890"}])
    def test_missing_or_wrong_field_is_400(self, settings, payload) -> None:
        source = StubIdentifierSource("X")
        response = _client(settings, identifier_source=source).post("/api/consultar", json=payload)
        assert response.status_code == 400
        assert "error" in response.json()
        assert source.calls == []

    def test_not_found(self, settings) -> None:
        response = _client(settings, identifier_source=StubIdentifierSource(None)).post(
            "/api/consultar", json={"identifier": "1234567890"}
        )
        assert response.status_code == 404

    def test_upstream_error_is_500(self, settings) -> None:
        source = StubIdentifierSource(error=UpstreamError("HTTP 502", target="https://sri.test"))
        response = _client(settings, identifier_source=source).post(
            "/api/consultar", json={"identifier": "1234567890"}
        )
        assert response.status_code == 500
        assert response.json() == {"error": "Error interno del servidor al consultar"}

    def test_get_not_allowed(self, settings) -> None:
        response = _client(settings).get("/api/consultar")
        assert response.status_code == 405
        assert response.json() == {"error": "Método no permitido"}
        assert "POST" in response.headers["Allow"]
        assert response.headers["Access-Control-Allow-Origin"] == "*"

    def test_unexpected_error_keeps_cors_headers(self, settings) -> None:
        source = StubIdentifierSource(error=RuntimeError("bug"))
        app = create_app(settings, identifier_source=source)
        client = TestClient(app, raise_server_exceptions=False)

        response = client.post("/api/consultar", json={"identifier": "1234567890"})

        assert response.status_code == 500
        assert response.json() == {"error": "Error interno del servidor al consultar"}
        assert response.headers["Access-Control-Allow-Origin"] == "*"
        assert response.headers["Access-Control-Allow-Headers"] == "Content-Type"

    def test_cors_headers_on_responses(self, settings) -> None:
        response = _client(settings).post("/api/consultar", json={"identifier": "123"})
        assert response.headers["Access-Control-Allow-Origin"] == "*"
        assert "POST" in response.headers["Access-Control-Allow-Methods"]
        assert response.headers["Access-Control-Allow-Headers"] == "Content-Type"


class TestPreflight:
    @pytest.mark.parametrize("path", ["/api/consultar", "/api/consultar-nombres"])
    def test_options_is_200_without_body(self, settings, path: str) -> None:
        response = _client(settings).options(path)
        assert response.status_code == 200
        assert response.content == b""
        assert response.headers["Access-Control-Allow-Origin"] == "*"

    def test_browser_preflight(self, settings) -> None:
        response = _client(settings).options(
            "/api/consultar",
            headers={"Origin": "http://otro.test", "Access-Control-Request-Method": "POST"},
        )
        assert response.status_code == 200
        assert response.headers["Access-Control-Allow-Origin"] == "*"


class TestConsultarNombres:
    def test_informational_mode_default(self, settings) -> None:
        response = _client(settings).post(
            "/api/consultar-nombres", json={"givenName": "Juan", "surname": "Perez"}
        )
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is False
        assert body["alternativesInfo"] is True
        assert body["givenName"] == "Juan"
        assert body["surname"] == "Perez"
        assert "SATJE" in body["errorDetails"]
        assert body["message"]

    def test_found(self, settings) -> None:
        source = StubNameSource("1712345678")
        response = _client(settings, name_source=source).post(
            "/api/consultar-nombres", json={"givenName": " Juan ", "surname": "Perez "}
        )
        assert response.status_code == 200
        assert response.json() == {"identifier": "1712345678", "givenName": "Juan", "surname": "Perez"}
        assert source.calls == [("Juan", "Perez")]

    def test_not_found(self, settings) -> None:
        response = _client(settings, name_source=StubNameSource(None)).post(
            "/api/consultar-nombres", json={"givenName": "Juan", "surname": "Perez"}
        )
        assert response.status_code == 404
        assert "error" in response.json()

    @pytest.mark.parametrize(
        "payload",
        [{}, {"givenName": "Juan"}, {"givenName": "  ", "surname": "Perez"}, {"givenName": 1, "surname": "x"}],
    )
    def test_missing_names_is_400(self, settings, payload) -> None:
        source = StubNameSource("1712345678")
        response = _client(settings, name_source=source).post("/api/consultar-nombres", json=payload)
        assert response.status_code == 400
        assert source.calls == []

    def test_scrape_mode_end_to_end(self, settings, make_transport) -> None:
        transport = make_transport(200, "<table><tr><td>1712345678</td></tr></table>")
        source = ScrapingNameSource(settings, transport=transport)
        response = _client(settings, name_source=source).post(
            "/api/consultar-nombres", json={"givenName": "Juan", "surname": "Perez"}
        )
        assert response.status_code == 200
        assert response.json()["identifier"] == "1712345678"

    def test_scrape_mode_upstream_failure_is_500(self, settings, make_transport) -> None:
        source = ScrapingNameSource(settings, transport=make_transport(502, "bad gateway"))
        response = _client(settings, name_source=source).post(
            "/api/consultar-nombres", json={"givenName": "Juan", "surname": "Perez"}
        )
        assert response.status_code == 500


class TestAppWiring:
    def test_health(self, settings) -> None:
        response = _client(settings).get("/api/health")
        assert response.json() == {"status": "ok"}

    def test_static_dir_served(self, settings, tmp_path) -> None:
        (tmp_path / "index.html").write_text("<h1>Consulta</h1>", encoding="utf-8")
        settings = settings.model_copy(update={"static_dir": tmp_path})
        client = _client(settings)

        assert "Consulta" in client.get("/").text
        assert client.post("/api/consultar", json={"identifier": "1234567890"}).status_code == 200

        for path in ("/api/consultar", "/api/consultar-nombres"):
            response = client.get(path)
            assert response.status_code == 405
            assert response.json() == {"error": "Método no permitido"}
            assert response.headers["Allow"] == "POST, OPTIONS"

    def test_scrape_without_url_fails_at_startup(self, settings) -> None:
        from core.config import NameLookupMode

        settings = settings.model_copy(
            update={"name_lookup_mode": NameLookupMode.SCRAPE, "name_lookup_url": None}
        )
        with pytest.raises(ValueError):
            create_app(settings, identifier_source=StubIdentifierSource("X"))
