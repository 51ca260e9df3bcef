"""
Configuration loader for the shop (catalog source, storage, checkout, gates).
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).parent.parent.parent
DEFAULT_CONFIG_PATH = PROJECT_ROOT / "config" / "shop_config.yml"


class CatalogConfig(BaseModel):
    backend: Literal["swapi", "local"] = "swapi"
    base_url: str = "https://swapi.dev/api"
    timeout_seconds: float = Field(default=20.0, gt=0.0, le=300.0)


class StorageConfig(BaseModel):
    backend: Literal["memory", "file", "redis"] = "file"
    path: str = "data/credits.json"
    redis_url: str = "redis://localhost:6379/0"
    credits_key: str = "@starship_shop_credits"

    def resolved_path(self) -> Path:
        """Relative paths are anchored at the project root, not the working directory."""
        path = Path(self.path).expanduser()
        return path if path.is_absolute() else PROJECT_ROOT / path


class CheckoutConfig(BaseModel):
    tax_rate: float = Field(default=0.05, ge=0.0, le=1.0)
    delay_seconds: float = Field(default=0.8, ge=0.0, le=30.0)
    clear_cart_on_storage_failure: bool = True


class GateConfig(BaseModel):
    """Minimum intervals between accepted UI intents."""

    cart_action_interval_ms: int = Field(default=300, ge=0, le=10_000)
    search_interval_ms: int = Field(default=600, ge=0, le=10_000)
    search_min_length: int = Field(default=2, ge=1, le=50)


class ShopConfig(BaseModel):
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    checkout: CheckoutConfig = Field(default_factory=CheckoutConfig)
    gates: GateConfig = Field(default_factory=GateConfig)


def load_shop_config(config_path: Optional[Path] = None) -> ShopConfig:
    """
    Load and validate the shop configuration from YAML.

    Args:
        config_path: Path to config file. Defaults to $SHOP_CONFIG_PATH, then
            config/shop_config.yml. When the default file is absent the
            built-in defaults are used.

    Returns:
        Validated ShopConfig object with environment overrides applied

    Raises:
        FileNotFoundError: If an explicitly given config file doesn't exist
        ValidationError: If config doesn't match schema
    """
    if config_path is None and os.getenv("SHOP_CONFIG_PATH"):
        config_path = Path(os.environ["SHOP_CONFIG_PATH"])

    if config_path is None:
        if DEFAULT_CONFIG_PATH.exists():
            config_path = DEFAULT_CONFIG_PATH
        else:
            logger.info("No shop config found at %s; using defaults", DEFAULT_CONFIG_PATH)
            return apply_env_overrides(ShopConfig())

    if not config_path.exists():
        raise FileNotFoundError(f"Shop config file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    try:
        cfg = ShopConfig(**data)
        logger.info("Successfully loaded shop config from %s", config_path)
    except ValidationError as e:
        logger.error("Shop config validation failed: %s", e)
        raise

    return apply_env_overrides(cfg)


def apply_env_overrides(cfg: ShopConfig) -> ShopConfig:
    """Environment variables win over the YAML file."""
    backend = os.getenv("SHOP_CATALOG_BACKEND", "").strip().lower()
    if backend in ("swapi", "local"):
        cfg.catalog.backend = backend
    if os.getenv("SWAPI_BASE_URL"):
        cfg.catalog.base_url = os.environ["SWAPI_BASE_URL"].strip()

    if os.getenv("REDIS_URL"):
        cfg.storage.backend = "redis"
        cfg.storage.redis_url = os.environ["REDIS_URL"].strip()
    elif os.getenv("SHOP_STORAGE_PATH"):
        cfg.storage.backend = "file"
        cfg.storage.path = os.environ["SHOP_STORAGE_PATH"].strip()

    return cfg
