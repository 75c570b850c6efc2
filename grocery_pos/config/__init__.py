"""Central configuration for the GroceryCo register."""

import logging
import os
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent

PRODUCT_CATALOG_FILENAME = "ProductCatalog.json"
PROMOTION_CATALOG_FILENAME = "PromotionCatalog.json"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def get_app_name() -> str:
    """Get application name."""
    return "GroceryCo Checkout"


def get_app_version() -> str:
    """Get application version from pyproject.toml."""
    try:
        import tomli
        pyproject_path = PROJECT_ROOT / "pyproject.toml"
        with open(pyproject_path, "rb") as f:
            pyproject = tomli.load(f)
            return pyproject.get("project", {}).get("version", "0.1.0")
    except Exception:
        # Fallback version if pyproject.toml cannot be read
        return "0.1.0"


def get_data_dir() -> Path:
    """Get directory holding the catalog files.

    Returns:
        Path from POS_DATA_DIR environment variable, or <project root>/data
    """
    env_path = os.getenv("POS_DATA_DIR")
    if env_path:
        return Path(env_path)
    return PROJECT_ROOT / "data"


def get_product_catalog_path(profile_value: Optional[str] = None) -> Path:
    """Get path to the product catalog.

    Resolution order: POS_PRODUCT_CATALOG, the profile's value, then
    ProductCatalog.json in the data directory. Relative profile values are
    resolved against the data directory.
    """
    return _catalog_path("POS_PRODUCT_CATALOG", profile_value, PRODUCT_CATALOG_FILENAME)


def get_promotion_catalog_path(profile_value: Optional[str] = None) -> Path:
    """Get path to the promotion catalog (see get_product_catalog_path)."""
    return _catalog_path("POS_PROMOTION_CATALOG", profile_value, PROMOTION_CATALOG_FILENAME)


def _catalog_path(env_name: str, profile_value: Optional[str], default_name: str) -> Path:
    env_path = os.getenv(env_name)
    if env_path:
        return Path(env_path)
    if profile_value:
        path = Path(profile_value)
        return path if path.is_absolute() else get_data_dir() / path
    return get_data_dir() / default_name


def get_log_level() -> str:
    """Get logging level name.

    Returns:
        POS_LOG_LEVEL upper-cased if it is a known level, default "WARNING"
    """
    level = os.getenv("POS_LOG_LEVEL", "WARNING").upper()
    if level not in _LOG_LEVELS:
        logger.warning(f"Invalid POS_LOG_LEVEL: {level}, using 'WARNING'")
        return "WARNING"
    return level
