"""
Configuration management for store-backed.

Uses pydantic-settings for environment variable binding.
All settings can be overridden via environment variables with STOREBACKED_ prefix.
"""

import logging
import sys
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings with environment variable binding."""

    model_config = SettingsConfigDict(
        env_prefix="STOREBACKED_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ==========================================
    # Default Store
    # ==========================================
    data_dir: Path = Path.home() / ".storebacked"
    """Root directory for the default persistent store."""

    database_name: str = "settings.sqlite"
    """File name of the default SQLite settings database."""

    default_domain: str = "standard"
    """Domain (settings suite) used by the default store."""

    # ==========================================
    # Logging
    # ==========================================
    log_level: str = "INFO"
    log_file: Path | None = None

    # ==========================================
    # Computed Properties
    # ==========================================
    @property
    def database_path(self) -> Path:
        return self.data_dir / self.database_name

    def ensure_directories(self) -> None:
        """Create the data directory if it doesn't exist."""
        self.data_dir.mkdir(parents=True, exist_ok=True)


# Global settings instance
settings = Settings()


def setup_logging(level: str | None = None) -> None:
    """
    Attach handlers to the library's logger.

    Logs go to stdout, and to settings.log_file when set. Calling it again
    replaces the handlers from the previous call.
    """
    log_level = level or settings.log_level
    logger = logging.getLogger("storebacked")

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers: list[logging.Handler] = [
        logging.StreamHandler(sys.stdout),
    ]

    if settings.log_file:
        handlers.append(logging.FileHandler(settings.log_file))

    formatter = logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.setLevel(getattr(logging, log_level.upper()))


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the given name."""
    return logging.getLogger(f"storebacked.{name}")
