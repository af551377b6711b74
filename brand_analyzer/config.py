from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL
from typing import Optional

from brand_analyzer.exceptions import ConfigurationError

class Settings(BaseSettings):
    APP_NAME: str = "Brand Analyzer"
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"
    FETCH_TIMEOUT_SECS: float = 5.0
    ENHANCE_TIMEOUT_SECS: float = 15.0
    USER_AGENT: str = ("Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
                       "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36")

    DATABASE_URL: Optional[str] = None  # overrides the DB_* parts, e.g. sqlite:///./local.db
    DB_HOST: Optional[str] = None
    DB_PORT: int = 5432
    DB_USER: Optional[str] = None
    DB_PASSWORD: Optional[str] = None
    DB_NAME: Optional[str] = None
    DB_SSLMODE: Optional[str] = None  # e.g. "require" for hosted postgres
    DB_STATEMENT_TIMEOUT_MS: int = 10000
    DB_CONNECT_TIMEOUT_SECS: int = 10

    # older deployments still export the key as OPENAI_API_KEY
    GEMINI_API_KEY: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("GEMINI_API_KEY", "OPENAI_API_KEY"),
    )
    GEMINI_MODEL: str = "gemini-2.5-flash"
    GEMINI_API_BASE: str = "https://generativelanguage.googleapis.com/v1beta"

    class Config:
        env_file = ".env"
        extra = "ignore"

    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        missing = [name for name in ("DB_HOST", "DB_USER", "DB_NAME")
                   if not getattr(self, name)]
        if missing:
            raise ConfigurationError(
                f"Database is not configured, missing: {', '.join(missing)}"
            )
        url = URL.create(
            "postgresql+psycopg",
            username=self.DB_USER,
            password=self.DB_PASSWORD,
            host=self.DB_HOST,
            port=self.DB_PORT,
            database=self.DB_NAME,
        )
        return url.render_as_string(hide_password=False)

settings = Settings()
