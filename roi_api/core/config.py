# roi_api/core/config.py
# -----------------------------------------------------------------------------
# Global settings (pydantic-settings v2)
# - read from the .env file and OS environment into a Settings object
# - JWT_* values are placeholders; no auth is enforced yet
# -----------------------------------------------------------------------------
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # basics
    APP_NAME: str = "Serverless ROI Calculator API"
    APP_VERSION: str = "1.0.0"
    ENV: str = "development"
    PORT: int = 3000
    DATABASE_URL: str = "sqlite+aiosqlite:///./roi.db"

    # http
    CORS_ORIGIN: str = "http://localhost:5173"
    API_PREFIX: str = "api"
    API_VERSION: str = "v1"

    # auth stubs
    JWT_SECRET: str = "default-secret"
    JWT_EXPIRATION: str = "1d"

    # fixed-window admission control per client address
    RATE_LIMIT_TTL: int = Field(60, ge=1)  # seconds
    RATE_LIMIT_MAX: int = Field(100, ge=1)

    # one-off migration cost used for the payback period (USD)
    MIGRATION_COST: float = Field(0.0, ge=0)

    # logging / health
    LOG_LEVEL: str | None = None
    LOG_DIR: str = "logs"
    MEMORY_RSS_LIMIT_MB: int = 300
    DISK_PATH: str = "/"
    DISK_THRESHOLD_PERCENT: float = Field(0.5, ge=0, le=1)  # max used fraction

    model_config = SettingsConfigDict(
        env_file=(".env.development", ".env"), extra="ignore"
    )

    @property
    def is_production(self) -> bool:
        return self.ENV == "production"

    @property
    def rate_limit(self) -> str:
        """limits-style string, e.g. '100/60 seconds'"""
        return f"{self.RATE_LIMIT_MAX}/{self.RATE_LIMIT_TTL} seconds"


settings = Settings()
