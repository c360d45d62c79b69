"""
Configuration settings for the liquidity calculator

Loads environment variables (and a .env file, if present) and provides
default token decimals and logging configuration.
"""
import logging
import os

from dotenv import load_dotenv

from .exceptions import ConfigError

# Load environment variables from .env file
load_dotenv()


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None
    if value < 0:
        raise ConfigError(f"{name} must be non-negative, got {value}")
    return value


def _env_log_level(name: str, default: str) -> str:
    level = os.getenv(name, default).strip().upper() or default
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigError(f"{name} must be a logging level name, got {level!r}")
    return level


class Settings:
    """Application settings"""

    DEFAULT_LOG_FORMAT: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"

    def __init__(self):
        # Token decimals used when the caller does not pass them explicitly
        self.TOKEN0_DECIMALS: int = _env_int("CL_TOKEN0_DECIMALS", 18)
        self.TOKEN1_DECIMALS: int = _env_int("CL_TOKEN1_DECIMALS", 18)

        # Logging
        self.LOG_LEVEL: str = _env_log_level("CL_LOG_LEVEL", "WARNING")
        self.LOG_FORMAT: str = os.getenv("CL_LOG_FORMAT", self.DEFAULT_LOG_FORMAT)


# Create global settings instance
settings = Settings()
