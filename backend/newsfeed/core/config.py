import os
from pathlib import Path
from typing import Literal

from pydantic import computed_field
from pydantic_core import MultiHostUrl
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_env_files() -> list[str]:
    """Get the appropriate .env files based on the environment.
    Returns a list of env files in order of precedence (later files override earlier ones).
    """
    working_dir = Path(os.getcwd())

    # A mounted .env file wins over the environment specific one
    mounted_env = working_dir / ".env"
    if mounted_env.exists():
        return [str(mounted_env)]

    env_files = []
    env_type = os.getenv("ENVIRONMENT", "local")
    if env_type in ["local", "staging", "production"]:
        env_file = working_dir / "env-config" / env_type / ".env"
        if env_file.exists():
            env_files.append(str(env_file))

    return env_files


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=get_env_files(),
        env_ignore_empty=True,
        extra="ignore",
    )

    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    PROJECT_NAME: str = "Personalized News Feed"
    API_V1_STR: str = "/api/v1"

    # Debug settings
    DEBUG_SQL: bool = False

    # Database: Postgres when POSTGRES_SERVER is set, SQLite otherwise
    SQLITE_PATH: str = "newsfeed.db"
    POSTGRES_SERVER: str | None = None
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = ""
    POSTGRES_DB: str = ""

    @computed_field  # type: ignore[prop-decorator]
    @property
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        if not self.POSTGRES_SERVER:
            return f"sqlite+aiosqlite:///{self.SQLITE_PATH}"
        return str(
            MultiHostUrl.build(
                scheme="postgresql+psycopg",
                username=self.POSTGRES_USER,
                password=self.POSTGRES_PASSWORD,
                host=self.POSTGRES_SERVER,
                port=self.POSTGRES_PORT,
                path=self.POSTGRES_DB,
            )
        )

    # External services; mock variants are used unless switched off
    USE_MOCK_SERVICES: bool = True
    HTTP_TIMEOUT: float = 30.0

    NEWSAPI_KEY: str = ""
    NEWSAPI_BASE_URL: str = "https://newsapi.org/v2"
    NEWSAPI_LANGUAGE: str = "en"

    OPENAI_API_KEY: str = ""
    OPENAI_BASE_URL: str = "https://api.openai.com/v1"
    OPENAI_MODEL: str = "gpt-3.5-turbo"
    OPENAI_MAX_TOKENS: int = 150
    OPENAI_TEMPERATURE: float = 0.7

    # Ingestion
    DEFAULT_FETCH_LIMIT: int = 50
    # 0 disables the periodic ingestion scheduler
    INGESTION_INTERVAL_SECONDS: int = 0

    # Feed
    FEED_PAGE_SIZE: int = 20
    TRENDING_LIMIT: int = 10
    TRENDING_DAYS: int = 3


settings = Settings()  # type: ignore
