"""
Configuration management for Nutrient Navigator.

This module centralizes environment variable loading from the .env file at the
project root. It should be imported early (api/main.py imports it first) so
.env is loaded before any other code reads environment variables.

In deployments without a .env file load_dotenv() is a no-op and the platform
environment is used instead.

Environment Variables:
- USDA_API_KEY: Required for nutrient lookups (USDA FoodData Central key)
- USDA_API_BASE_URL: Optional, defaults to "https://api.nal.usda.gov/fdc/v1"
- UNSPLASH_ACCESS_KEY: Optional, recipe images fall back to placeholders without it
- UNSPLASH_API_BASE_URL: Optional, defaults to "https://api.unsplash.com"
- IMAGE_CACHE_TTL_SECONDS: Optional, defaults to 86400 (24 hours)
- API_BASE_URL: Optional, food backend URL (defaults to http://localhost:8080 for local dev)
- BACKEND_TIMEOUT_SECONDS: Optional, defaults to 10
- LOG_LEVEL: Optional, defaults to "INFO"
"""

import logging
import os
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv

from navigator.backend_client import get_backend_timeout, get_backend_url
from navigator.connectors.unsplash_connector import DEFAULT_UNSPLASH_BASE_URL
from navigator.connectors.usda_connector import DEFAULT_USDA_BASE_URL
from navigator.utils.cache import get_cache_ttl

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def load_env_file() -> None:
    """
    Load environment variables from .env file at project root.

    Safe to call multiple times. Existing environment variables take
    precedence over values in .env (override=False).
    """
    # api/config.py -> api/ -> project root
    project_root = Path(__file__).resolve().parent.parent
    load_dotenv(project_root / ".env", override=False)


# Load .env file on module import
load_env_file()


class UsdaConfig:
    """Configuration for the USDA FoodData Central connector."""

    @staticmethod
    def get_api_key() -> Optional[str]:
        """
        Get the FoodData Central API key from environment.

        Returns:
            API key string or None if not set

        Note:
            This does not raise an error - let the connector handle validation.
        """
        return os.getenv("USDA_API_KEY")

    @staticmethod
    def get_base_url() -> str:
        return os.getenv("USDA_API_BASE_URL", DEFAULT_USDA_BASE_URL)


class UnsplashConfig:
    """Configuration for the Unsplash image connector and image cache."""

    @staticmethod
    def get_access_key() -> Optional[str]:
        return os.getenv("UNSPLASH_ACCESS_KEY")

    @staticmethod
    def get_base_url() -> str:
        return os.getenv("UNSPLASH_API_BASE_URL", DEFAULT_UNSPLASH_BASE_URL)

    @staticmethod
    def get_cache_ttl_seconds() -> int:
        """Image cache TTL in seconds (default: 86400)."""
        return get_cache_ttl()


class BackendConfig:
    """Configuration for the external food backend client."""

    @staticmethod
    def get_base_url() -> str:
        """
        Get the food backend base URL.

        Returns:
            URL string without trailing slash (default: "http://localhost:8080")
        """
        return get_backend_url()

    @staticmethod
    def get_timeout_seconds() -> float:
        return get_backend_timeout()


class LoggingConfig:
    """Logging configuration."""

    @staticmethod
    def get_level() -> str:
        """Log level name from LOG_LEVEL (default: "INFO")."""
        return os.getenv("LOG_LEVEL", "INFO").upper()


def configure_logging() -> None:
    """
    Configure root logging from LOG_LEVEL.

    Unknown level names fall back to INFO with a warning.
    """
    level_name = LoggingConfig.get_level()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
        logging.getLogger(__name__).warning("Unknown LOG_LEVEL %r, using INFO", level_name)
        return
    logging.basicConfig(level=level, format=LOG_FORMAT)


def get_config_status() -> Dict[str, bool]:
    """
    Report which optional integrations are configured.

    Returns:
        Dictionary with keys:
        - usda_api_key: bool (True if set)
        - unsplash_access_key: bool (True if set)
    """
    return {
        "usda_api_key": UsdaConfig.get_api_key() is not None,
        "unsplash_access_key": UnsplashConfig.get_access_key() is not None,
    }
