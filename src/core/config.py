"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la API ni la CLI.
- Permite que adaptadores (SRI/scraping) lean config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from enum import Enum
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_APP_DIR_NAME = "consulta-cedula"

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / _APP_DIR_NAME
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / _APP_DIR_NAME

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / _APP_DIR_NAME
    return Path.home() / ".config" / _APP_DIR_NAME


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str | None], env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# consulta-cedula user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class NameLookupMode(str, Enum):
    """Cómo se atiende la consulta inversa (nombres -> cédula)."""

    INFORMATIONAL = "informational"
    SCRAPE = "scrape"
    DISABLED = "disabled"


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para API/CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="CONSULTA_CEDULA_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout por request saliente (segundos).",
    )
    user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        min_length=1,
        description="User-Agent de navegador para las fuentes externas.",
    )
    accept_language: str = Field(
        default="es-ES,es;q=0.9,en;q=0.8",
        min_length=1,
        description="Cabecera Accept-Language enviada a las fuentes externas.",
    )

    sri_base_url: str = Field(
        default="https://srienlinea.sri.gob.ec/movil-servicios/api/v1.0/deudas/porIdentificacion",
        min_length=8,
        description="Endpoint del SRI para consulta por identificación (sin la cédula).",
    )
    sri_referer: str = Field(
        default="https://srienlinea.sri.gob.ec/",
        description="Referer enviado al SRI.",
    )

    name_lookup_mode: NameLookupMode = Field(
        default=NameLookupMode.INFORMATIONAL,
        description="Estrategia para la consulta por nombres (informational/scrape/disabled).",
    )
    name_lookup_url: str | None = Field(
        default=None,
        description="URL del formulario a scrapear cuando name_lookup_mode=scrape.",
    )
    name_lookup_referer: str | None = Field(
        default=None,
        description="Referer para el scraping por nombres (por defecto, la propia URL).",
    )
    name_lookup_given_field: str = Field(
        default="nombres",
        min_length=1,
        description="Nombre del campo de formulario para los nombres.",
    )
    name_lookup_surname_field: str = Field(
        default="apellidos",
        min_length=1,
        description="Nombre del campo de formulario para los apellidos.",
    )
    name_lookup_result_selector: str | None = Field(
        default=None,
        description="Selector CSS opcional que acota la zona del HTML donde buscar la cédula.",
    )

    body_preview_chars: int = Field(
        default=500,
        ge=0,
        description="Caracteres de la respuesta externa que se registran en logs.",
    )

    host: str = Field(default="0.0.0.0", description="Interfaz de escucha del servidor.")
    port: int = Field(default=8085, ge=1, le=65535, description="Puerto del servidor.")
    static_dir: Path | None = Field(
        default=None,
        description="Directorio con el formulario web (HTML/CSS/JS) a servir en '/'.",
    )
    log_level: str = Field(default="INFO", description="Nivel de logging (DEBUG, INFO, ...).")
