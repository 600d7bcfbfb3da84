"""API configuration from environment variables."""

import os
from functools import lru_cache

from wattwise.config.constants import DEFAULT_EARLY_TERMINATION_FEE


def _env_int(name: str, default: int, minimum: int | None = None) -> int:
    """Read an integer variable, falling back to ``default`` when invalid."""
    try:
        value = int(os.getenv(name, str(default)))
    except ValueError:
        return default
    if minimum is not None and value < minimum:
        return default
    return value


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except ValueError:
        return default


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


class Settings:
    """API configuration settings loaded from environment variables."""

    # API Metadata
    API_TITLE: str = "wattwise API"
    API_DESCRIPTION: str = """
    Energy plan recommendations from Green Button interval usage.

    ## Features

    * **Usage analysis** - Monthly aggregates, validation and a quality score
    * **Plan pricing** - Fixed, tiered, time-of-use, variable and seasonal rates
    * **Recommendations** - Preference-weighted, diversity-constrained top 3
    * **Switching scenarios** - Stay, switch now, or wait out the contract
    """
    API_VERSION: str = "0.1.0"
    API_LICENSE: dict = {"name": "MIT"}

    def __init__(self) -> None:
        # Server configuration
        self.API_HOST: str = os.getenv("WATTWISE_API_HOST", "127.0.0.1")
        self.API_PORT: int = _env_int("WATTWISE_API_PORT", 8000, minimum=1)
        self.API_WORKERS: int = _env_int("WATTWISE_API_WORKERS", 1, minimum=1)
        self.API_RELOAD: bool = _env_bool("WATTWISE_API_RELOAD")

        # Rate Limiting
        self.RATE_LIMIT: int = _env_int("WATTWISE_API_RATE_LIMIT", 100, minimum=0)
        self.RATE_WINDOW: int = _env_int("WATTWISE_API_RATE_WINDOW", 3600, minimum=1)  # 1 hour

        # Plan catalog snapshot
        self.CATALOG_PATH: str | None = os.getenv("WATTWISE_CATALOG_PATH")
        self.CATALOG_TTL: int = _env_int("WATTWISE_CATALOG_TTL", 3600, minimum=0)  # 1 hour

        # Switching scenarios
        self.DEFAULT_EARLY_TERMINATION_FEE: float = _env_float(
            "WATTWISE_DEFAULT_EARLY_TERMINATION_FEE", DEFAULT_EARLY_TERMINATION_FEE
        )

    def __repr__(self) -> str:
        """Return string representation of settings."""
        return (
            f"Settings(API_HOST={self.API_HOST!r}, API_PORT={self.API_PORT}, "
            f"RATE_LIMIT={self.RATE_LIMIT}, CATALOG_PATH={self.CATALOG_PATH!r})"
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns
    -------
    Settings
        Application settings loaded from environment variables.

    Notes
    -----
    This function uses @lru_cache to ensure only one Settings instance
    is created throughout the application lifecycle.
    """
    return Settings()
