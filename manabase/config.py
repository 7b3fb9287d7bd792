from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from manabase.parsers.scryfall import SCRYFALL_BULK_API


class Settings(BaseSettings):
    """Build settings loaded from environment (MANABASE_*) and .env."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="MANABASE_", extra="ignore")

    app_name: str = "manabase"

    # Directory holding lands.toml, rocks.toml, dorks.toml, ramp.toml, categories.toml
    config_dir: Path = Path("config")

    # Local bulk data snapshot; downloaded from bulk_data_api when unset
    data_path: Path | None = None
    bulk_data_api: str = SCRYFALL_BULK_API

    output_dir: Path = Path("target/www")

    # Classification threads; 1 classifies serially
    workers: int = Field(default=1, ge=1)

    log_level: str = "INFO"


settings = Settings()
