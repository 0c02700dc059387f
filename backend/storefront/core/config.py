"""Application configuration loaded from environment variables."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Typed settings exposed via dependency injection throughout the app."""

    # Read .env with BOM tolerance; case-sensitive keys
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8-sig",
        case_sensitive=True,
    )

    APP_NAME: str = "Storefront API"
    ENV: str = "dev"  # dev | staging | prod
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # JWT (admin session)
    SECRET_KEY: str  # set via env/.env
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    JWT_ISSUER: str = "storefront-api"
    JWT_AUDIENCE: str = "storefront-admin"
    # bcrypt hash of the admin console password; login is disabled when unset
    ADMIN_PASSWORD_HASH: str | None = None
    LOGIN_RATE: str = "10/minute"
    SECURITY_MAX_CONCURRENCY: int = 4

    # CORS
    CORS_ALLOWED_ORIGINS: list[str] = Field(default_factory=list)

    # DB
    DB_URL: str | None = None  # full SQLAlchemy URL, overrides the DB_* pieces
    DB_HOST: str = "127.0.0.1"
    DB_PORT: int = 3306
    DB_USER: str = "storefront"
    DB_PASSWORD: str = ""  # set via env/.env
    DB_NAME: str = "storefront"
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 3600
    DB_RETRY_ATTEMPTS: int = 4
    DB_RETRY_BASE_DELAY: float = 0.05
    DB_RETRY_JITTER: float = 0.025
    DB_NOWAIT_LOCKS: bool = False
    # How many times a settings write re-runs after losing the first-insert race.
    SETTINGS_WRITE_ATTEMPTS: int = 3

    MAX_BODY_BYTES: int = 1024 * 1024  # 1 MB

    @property
    def DATABASE_URL(self) -> str:
        if self.DB_URL:
            return self.DB_URL
        return (
            f"mysql+aiomysql://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}?charset=utf8mb4"
        )


settings = Settings()
