"""
Environment-based configuration for dev and prod deployments.

Usage:
    # Dev mode (default) - debug enabled, any CORS origin
    APP_MODE=dev uvicorn ...

    # Prod mode - CORS origins taken from CORS_ORIGINS
    APP_MODE=prod CORS_ORIGINS='["https://api.example.com"]' uvicorn ...
"""
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Base settings shared across environments."""

    # Application
    ENV_MODE: str = "dev"
    APP_NAME: str = "GraphQL Loader API"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False

    # Aggregated API
    GRAPHQL_PATH: str = "/graphql"
    LOADER_EXTENSIONS: list[str] = ["py", "graphql"]

    @property
    def is_dev(self) -> bool:
        return getattr(self, 'ENV_MODE', 'dev') == 'dev'

    @property
    def cors_origins(self) -> list[str]:
        """Origins allowed by the CORS middleware."""
        return ["*"] if self.is_dev else []


class DevSettings(Settings):
    """Development settings - debug on, CORS wide open."""

    ENV_MODE: str = "dev"
    DEBUG: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def cors_origins(self) -> list[str]:
        return ["*"]


class ProdSettings(Settings):
    """Production settings - explicit CORS origins via CORS_ORIGINS."""

    ENV_MODE: str = "prod"
    CORS_ORIGINS: list[str] = []

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def cors_origins(self) -> list[str]:
        if not self.CORS_ORIGINS:
            raise ValueError("CORS_ORIGINS environment variable is required in prod mode")
        return self.CORS_ORIGINS


def get_settings(env_mode: str = "dev") -> Settings:
    """Get settings based on environment mode."""
    if env_mode == "prod":
        return ProdSettings()
    return DevSettings()
