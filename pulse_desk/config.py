"""Pulse Desk configuration via pydantic-settings."""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings


class PulseSettings(BaseSettings):
    environment: str = "development"
    database_url: str = "sqlite+aiosqlite:///pulse.db"
    echo_sql: bool = False
    app_title: str = "Pulse Desk"

    # "sql" keeps everything in database_url; "rest" talks to a hosted
    # PostgREST/GoTrue backend at backend_url.
    backend: str = "sql"
    backend_url: str = ""
    backend_api_key: str = ""
    backend_timeout_seconds: float = 30.0

    auth_cookie_name: str = "pulse_session"
    auth_cookie_secure: bool = False
    auth_session_ttl_seconds: int = 86400

    # Contractor identity printed on every contract
    contractor_name: str = "NEXA PULSE LTDA"
    contractor_tax_id: str = "53.548.850/0001-95"
    contractor_address_lines: str = (
        "com endereço na Conjunto Residencial 7, Condomínio 1, SN, Bloco B, Apt 3,|"
        "Parque das Cachoeiras, Valparaíso de Goiás - GO, CEP 72872-700."
    )
    contractor_city: str = "Valparaíso de Goiás"

    model_config = {"env_prefix": "PULSE_", "env_file": ".env", "extra": "ignore"}

    @property
    def base_dir(self) -> Path:
        return Path(__file__).resolve().parent

    @property
    def templates_dir(self) -> Path:
        return self.base_dir / "templates"

    @property
    def static_dir(self) -> Path:
        return self.base_dir / "static"

    @property
    def uses_rest_backend(self) -> bool:
        return self.backend.strip().lower() == "rest"

    @property
    def contractor_address(self) -> list[str]:
        """Split pipe-separated address lines."""
        return [line.strip() for line in self.contractor_address_lines.split("|") if line.strip()]

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() in {"prod", "production"}


settings = PulseSettings()
