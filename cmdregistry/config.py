"""Configuration settings for the command template registry."""
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="CMDREG_", env_file=".env", extra="ignore")

    source: str = Field(default="directory")
    template_dir: Path = Field(default=Path("commands"))
    template_suffix: str = Field(default=".md")
    placeholder: str = Field(default="$ARGUMENTS", min_length=1)
    database_url: str = Field(default="sqlite:///./commands.db")
    source_url: str | None = Field(default=None)
    http_timeout_seconds: float = Field(default=10)
    api_host: str = Field(default="0.0.0.0")
    api_port: int = Field(default=8000)
    log_level: str = Field(default="INFO")


@lru_cache()
def get_settings() -> Settings:
    return Settings()
