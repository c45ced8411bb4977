"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- El endpoint del scraper y su token se inyectan al arrancar (env/.env),
  nunca como literales en el código.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "insta-resolver"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "insta-resolver"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "insta-resolver"
    return Path.home() / ".config" / "insta-resolver"


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

    lines = ["# insta-resolver user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="INSTA_RESOLVER_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    scraper_endpoint_url: str | None = Field(
        default=None,
        description="URL del task de scraping (run-sync) que recibe las configuraciones por POST.",
    )
    scraper_api_token: SecretStr | None = Field(
        default=None,
        description="Token del scraper; se envía como query param `token`.",
    )

    http_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Timeout por request (segundos). Los runs síncronos del scraper son lentos.",
    )
    user_agent: str = Field(
        default="insta-resolver/0.1 (+https://local)",
        min_length=1,
        description="User-Agent para las peticiones al scraper.",
    )

    placeholder_avatar_base_url: str = Field(
        default="https://ui-avatars.com/api/",
        min_length=8,
        description="Servicio que renderiza avatares deterministas a partir del nombre.",
    )
    placeholder_avatar_size: int = Field(default=400, ge=16, le=1024)
    placeholder_avatar_background: str = Field(default="fb923c", min_length=3, max_length=8)
    placeholder_avatar_color: str = Field(default="ffffff", min_length=3, max_length=8)
    placeholder_avatar_bold: bool = True

    max_concurrency: int = Field(
        default=4,
        ge=1,
        le=64,
        description="Usernames resueltos en paralelo en modo batch.",
    )
    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging por defecto para la CLI.",
    )
