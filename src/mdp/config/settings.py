"""Configuration management using Pydantic Settings."""

from pathlib import Path
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    model_config = SettingsConfigDict(
        env_prefix="MDP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Discovery gating
    min_confidence: float = Field(0.75, ge=0.0, le=1.0)
    max_files: int = Field(1000, ge=1)
    snippet_length: int = Field(500, ge=20)

    # Snapshot metadata
    pipeline_version: str = "1.0.0"
    model_version: str = "medical-detector-v1"

    # Directories
    output_dir: Path = Field(Path("output"))
    snapshot_dir: Path = Field(Path("output/snapshots"))

    # Logging
    log_level: str = Field("INFO")
    log_format: str = Field("json", pattern="^(json|text)$")


# Instantiate global settings
settings = Settings()
