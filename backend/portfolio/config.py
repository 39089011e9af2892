from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from pathlib import Path


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_ENV: str = Field(default="development")
    APP_SECRET: str = Field(default="please-change-me")
    LOG_LEVEL: str = Field(default="INFO")

    DATABASE_URL: str | None = Field(default=None)
    DB_HOST: str = Field(default="localhost")
    DB_PORT: int = Field(default=5432)
    DB_USER: str = Field(default="postgres")
    DB_PASSWORD: str = Field(default="postgres")
    DB_NAME: str = Field(default="postgres")
    DB_SYNC_ECHO: bool = Field(default=False)
    DB_POOL_SIZE: int = Field(default=10)
    DB_MAX_OVERFLOW: int = Field(default=20)
    DB_POOL_TIMEOUT: int = Field(default=30)

    SITE_URL: str = Field(default="https://www.brandonptdavis.com")
    SITE_NAME: str = Field(default="Brandon PT Davis")
    # legacy CMS host; absolute links to it are rewritten to relative paths
    CMS_URL: str = Field(default="https://cms.brandonptdavis.com")
    STORAGE_PUBLIC_URL: str | None = Field(default=None)

    ADMIN_PASSWORD_HASH: str | None = Field(default=None)
    ADMIN_TOKEN_TTL_SECONDS: int = Field(default=60 * 60 * 12)

    REDIS_URL: str | None = Field(default=None)
    SITEMAP_CACHE_TTL_SECONDS: int = Field(default=3600)

    EMAIL_HOST: str | None = Field(default=None)
    EMAIL_PORT: int = Field(default=587)
    EMAIL_HOST_USER: str | None = Field(default=None)
    EMAIL_HOST_PASSWORD: str | None = Field(default=None)
    EMAIL_FROM: str = Field(default="info@brandonptdavis.com")
    CONTACT_EMAIL: str = Field(default="info@brandonptdavis.com")
    TELEGRAM_BOT_TOKEN: str | None = Field(default=None)
    TELEGRAM_CHAT_ID: str | None = Field(default=None)

    @property
    def sync_database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL.replace("postgresql://", "postgresql+psycopg2://", 1)
        return f"postgresql+psycopg2://{self.DB_USER}:{self.DB_PASSWORD}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    @property
    def package_root(self) -> Path:
        return Path(__file__).resolve().parent

    @property
    def project_root(self) -> Path:
        # backend/portfolio/config.py -> parents[2] == repo root
        return Path(__file__).resolve().parents[2]


settings = Settings()
