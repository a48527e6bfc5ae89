from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Library configuration loaded from environment variables / .env file."""

    app_env: str = Field(default="development", alias="APP_ENV")

    # Any async SQLAlchemy URL; SQLite (aiosqlite) for local dev
    database_url: str = Field(
        default="sqlite+aiosqlite:///./repository_base.db",
        alias="DATABASE_URL",
    )
    sql_echo: bool = Field(default=False, alias="SQL_ECHO")

    # Page sizes used by the FastAPI pagination dependency
    default_page_size: int = Field(default=20, alias="DEFAULT_PAGE_SIZE")
    max_page_size: int = Field(default=200, alias="MAX_PAGE_SIZE")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "populate_by_name": True,
        "extra": "ignore",
    }

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


settings = Settings()
