"""Configuration: application settings and the source configuration file."""

import json
import logging
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Files
    config_path: Path = Path("config.json")
    output_path: Path = Path("data/aggregate.json")

    # HTTP Client
    http_timeout_connect: float = 10.0
    http_timeout_read: float = 30.0

    # Open LLM Leaderboard dataset server
    hf_rows_url: str = "https://datasets-server.huggingface.co/rows"
    hf_dataset: str = "open-llm-leaderboard/results"
    hf_page_size: int = 100
    hf_max_rows: int = 2000

    # Logging
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


class SourceConfig(BaseModel):
    """Which leaderboard sources to pull, read from ``config.json``."""

    lmarena_csv_url: str | None = None
    helm_json_urls: list[str] = Field(default_factory=list)


def load_source_config(path: Path | str) -> SourceConfig:
    """
    Load the source configuration file.

    A missing, unreadable or invalid file yields an empty configuration;
    each adapter then decides on its own what an absent setting means.

    Args:
        path: Path to the JSON configuration file

    Returns:
        Parsed SourceConfig, or an empty one on any failure
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        return SourceConfig.model_validate(data)
    except (OSError, ValueError, ValidationError) as e:
        logger.warning(f"Could not load source config from {path}: {e}. Using empty config")
        return SourceConfig()
