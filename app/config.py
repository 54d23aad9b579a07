"""Application configuration and settings."""
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration for the JobFlow service."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    database_url: str = "sqlite+aiosqlite:///./data/app.db"
    database_echo: bool = False
    data_directory: Path = Path("data")
    sample_job_file: Path = Path("data/sample_jobs.json")
    resume_storage_directory: Path = Path("data/resumes")
    resume_max_bytes: int = 10 * 1024 * 1024

    suggestion_min_query_length: int = 2
    suggestion_max_results: int = 10
    suggestion_remote_threshold: int = 5
    suggestion_remote_timeout_seconds: float = 3.0
    company_lookup_enabled: bool = True
    company_lookup_url: str = "https://autocomplete.clearbit.com/v1/companies/suggest"

    llm_api_base: str = "https://api.openai.com/v1"
    llm_api_key: str | None = None
    llm_model: str = "gpt-4o-mini"
    llm_timeout_seconds: float = 30.0

    admin_user_ids: list[str] = []

    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""

    settings = Settings()
    settings.data_directory.mkdir(parents=True, exist_ok=True)
    settings.resume_storage_directory.mkdir(parents=True, exist_ok=True)
    return settings


settings = get_settings()
