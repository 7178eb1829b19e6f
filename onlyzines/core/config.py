from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

_LOCALHOST_ORIGIN_REGEX = r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$"


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    app_name: str = "OnlyZines API"
    app_version: str = "0.1.0"

    database_scheme: str = "postgresql+psycopg"
    database_host: str = "localhost"
    database_port: int = 5432
    database_user: str = "onlyzines"
    database_password: str = "onlyzines_password"
    database_name: str = "onlyzines"

    jwt_access_secret: str = "dev-access-secret"
    jwt_refresh_secret: str = "dev-refresh-secret"
    jwt_algorithm: str = "HS256"
    jwt_access_token_expires_minutes: int = 15
    jwt_refresh_token_expires_days: int = 7

    zine_password_bcrypt_rounds: int = 12

    # Browser origins (platform site and builder app)
    platform_url: str = ""
    builder_url: str = ""
    frontend_url: str = ""  # kept for older deployments
    cors_allow_localhost: bool = True

    max_request_bytes: int = 25 * 1024 * 1024  # builder payloads embed images

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="OZ_",
        extra="ignore",
    )

    @property
    def database_url(self) -> str:
        """Assemble a SQLAlchemy compatible database URL."""
        return (
            f"{self.database_scheme}://{self.database_user}:{self.database_password}"
            f"@{self.database_host}:{self.database_port}/{self.database_name}"
        )

    @property
    def access_token_expires_seconds(self) -> int:
        return self.jwt_access_token_expires_minutes * 60

    @property
    def resolved_cors_allowed_origins(self) -> list[str]:
        """Return the configured browser origins, skipping unset ones."""

        return [
            origin.strip().rstrip("/")
            for origin in (self.platform_url, self.builder_url, self.frontend_url)
            if origin and origin.strip()
        ]

    @property
    def cors_allow_origin_regex(self) -> str | None:
        """Regex matching local development origins, when enabled."""

        return _LOCALHOST_ORIGIN_REGEX if self.cors_allow_localhost else None


@lru_cache
def get_settings() -> Settings:
    """Cache settings to avoid re-parsing environment files."""
    return Settings()
