"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="LinkPulse API")
    app_env: str = Field(default="development")
    debug: bool = Field(default=False)

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)

    # Database
    database_url: str = Field(
        default="postgresql+asyncpg://localhost:5432/linkpulse",
        description="PostgreSQL connection URL with asyncpg driver",
    )

    # JWT Authentication
    jwt_secret_key: str = Field(
        default="CHANGE-ME-IN-PRODUCTION",
        description="Secret key for JWT signing",
    )
    jwt_algorithm: str = Field(default="HS256")
    jwt_expire_minutes: int = Field(default=30)

    # Rate Limiting
    rate_limit_enabled: bool = Field(
        default=True,
        description="Enable/disable rate limiting (disable for tests)",
    )

    # CORS
    cors_origins: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        description="Comma-separated list of allowed origins",
    )

    # Branding / public page
    site_name: str = Field(default="LinkPulse")
    homepage_url: str = Field(
        default="https://crewmaster.net",
        description="Marketing site linked from the not-found page",
    )
    default_og_image: str = Field(
        default="https://lovable.dev/opengraph-image-p98pqg.png",
        description="Open Graph image used when a creator has no avatar",
    )

    # Upstream services
    creator_api_base_url: str = Field(
        default="https://api.crewmaster.net",
        description="Base URL of the backend serving published creator profiles",
    )
    oembed_endpoint: str = Field(default="https://www.youtube.com/oembed")
    http_timeout_seconds: float = Field(default=10.0)

    # Profile fetch + cache
    profile_fresh_seconds: int = Field(
        default=300,
        description="How long a fetched profile is served without re-fetching",
    )
    profile_fetch_retries: int = Field(default=1, ge=0, le=1)

    # Live status
    live_status_source: Literal["backend", "twitch"] = Field(
        default="backend",
        description="'backend' consumes twStatus from the creator API, 'twitch' polls Helix",
    )
    twitch_client_id: str = Field(default="")
    twitch_client_secret: str = Field(default="")
    live_poll_interval_seconds: float = Field(default=60.0)
    live_first_result_timeout_seconds: float = Field(default=2.0)
    live_idle_seconds: float = Field(
        default=300.0,
        description="Stop polling a profile nobody has requested for this long",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env == "production"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    def public_profile_url(self, creator_id: str) -> str:
        """Canonical public URL of a creator page."""
        return f"{self.homepage_url.rstrip('/')}/{creator_id}"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
