"""
Shared configuration management for the Pokemon Fusion API.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_prefix="FUSION_",
        env_file=".env",
        case_sensitive=False,
        extra="allow"
    )

    # Environment
    env: str = Field(default="local")
    log_level: str = Field(default="info")

    # Upstream data source
    pokeapi_url: str = Field(default="https://pokeapi.co")
    upstream_timeout_seconds: float = Field(default=10.0, gt=0)

    # Pre-rendered fusion sprites
    assets_dir: str = Field(default="assets/custom-fusions")

    # Fusion behaviour
    legacy_speed_formula: bool = Field(default=True)


class ServiceConfig(BaseConfig):
    """Service-specific configuration."""

    service_name: str
    port: int
    host: str = "0.0.0.0"

    def __init__(self, service_name: str, port: int, **kwargs):
        super().__init__(service_name=service_name, port=port, **kwargs)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        # Service code passes its default port; FUSION_PORT and FUSION_HOST still win.
        return env_settings, dotenv_settings, init_settings, file_secret_settings


def get_config(service_name: str, port: int) -> ServiceConfig:
    """Get configuration for a specific service."""
    return ServiceConfig(service_name=service_name, port=port)
