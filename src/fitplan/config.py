"""Application settings and logging setup.

Settings are read from environment variables prefixed with ``FITPLAN_``
and from a ``.env`` file in the working directory.

Usage
-----
    from fitplan.config import get_settings

    print(get_settings().data_dir)
"""

import logging
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Repository-level data directory (next to src/)
DEFAULT_DATA_DIR = Path(__file__).parent.parent.parent / "data"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="FITPLAN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    data_dir: Path = DEFAULT_DATA_DIR
    log_level: str = "INFO"
    default_body_weight: float = 70.0  # kg, used when the profile has no weight
    default_frequency: int = 3  # days per week for new plans


@lru_cache
def get_settings() -> Settings:
    """Get the process-wide settings instance."""
    return Settings()


def configure_logging(level: str | int | None = None) -> None:
    """Configure root logging for CLI and server entry points."""
    if level is None:
        level = get_settings().log_level
    if isinstance(level, str):
        level = level.upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)
