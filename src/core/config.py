"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP) y `doctor` lean config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias).

    Objetivo: que `doctor setup` guarde preferencias sin editar el `.env` del proyecto.
    """

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "credctl"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "credctl"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "credctl"
    return Path.home() / ".config" / "credctl"


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
    """Escribe/actualiza variables en el .env global del usuario.

    Los valores `None` se omiten: quien llama puede pasar todas las respuestas
    del prompt sin filtrar.
    """

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# credctl user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Settings de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación de configuración.
    - Fácil de testear (override por env vars).

    Los defaults de path (org, project, ...) son preferencias: cualquier flag
    de la línea de comandos tiene prioridad.
    """

    model_config = SettingsConfigDict(
        env_prefix="CREDCTL_",
        extra="ignore",
        case_sensitive=False,
        # Primero el proyecto (dev), luego el global del usuario: el último archivo gana.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    api_base_url: str = Field(
        default="http://127.0.0.1:4430",
        min_length=8,
        description="Base URL of the registry daemon.",
    )
    socket_path: Path | None = Field(
        default=None,
        description="Unix socket of the local daemon; overrides the TCP URL when set.",
    )
    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout per request (seconds).",
    )
    user_agent: str = Field(
        default="credctl/0.1",
        min_length=1,
        description="User-Agent sent to the daemon.",
    )
    token: str | None = Field(
        default=None,
        description="Session token. credctl never logs in by itself.",
    )

    org: str | None = Field(default=None, description="Default organization.")
    project: str | None = Field(default=None, description="Default project.")
    environment: str = Field(default="dev", min_length=1)
    service: str = Field(default="default", min_length=1)
    identity: str = Field(default="*", min_length=1)
    instance: str = Field(default="*", min_length=1)

    log_level: str = Field(
        default="WARNING",
        description="loguru level for the stderr sink.",
    )

    def path_defaults(self) -> dict[str, str | None]:
        return {
            "org": self.org,
            "project": self.project,
            "environment": self.environment,
            "service": self.service,
            "identity": self.identity,
            "instance": self.instance,
        }
