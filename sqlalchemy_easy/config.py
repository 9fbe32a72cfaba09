"""Settings loaded from environment variables with the EASYSQL_ prefix."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="EASYSQL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # SQLAlchemy URL; driver options such as charset belong in the query string
    database_url: str = "sqlite://"

    # Include SQL, bindings and call site in error logs
    debug: bool = False

    # Let SQLAlchemy echo every statement
    echo: bool = False

    # Re-raise after reporting instead of returning None
    raise_errors: bool = False


@lru_cache()
def get_settings() -> Settings:
    return Settings()
