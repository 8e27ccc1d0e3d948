from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    PROJECT_NAME: str = "Partner Finder"
    API_V1_STR: str = "/api"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    DEBUG: bool = False

    # JWT session cookie
    SECRET_KEY: str = "changethis"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7  # 7 days
    COOKIE_NAME: str = "bp_token"
    COOKIE_SECURE: bool = False

    FRONTEND_ORIGIN: str = "http://localhost:3000"

    SQLALCHEMY_DATABASE_URI: str = "sqlite:///./data/partnerfinder.db"

    LOG_DIR: str = "logs"
    LOG_TO_FILE: bool = True

    PARTNER_SEARCH_LIMIT: int = 50
    LIVE_LOCATION_TTL_SECONDS: int = 600

    @property
    def access_token_max_age(self) -> int:
        return self.ACCESS_TOKEN_EXPIRE_MINUTES * 60


settings = Settings()
