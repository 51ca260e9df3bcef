"""
Composition root: picks the catalog client and storage backend from config.

This is the ONLY place where mock vs real clients and the storage backend
are selected.
"""
import logging
from typing import Optional

from dotenv import load_dotenv

from starship_shop.error_handler import ErrorHandler
from starship_shop.integrations.contracts.interfaces import CatalogClient
from starship_shop.shop.cart import CartStore
from starship_shop.shop.catalog import CatalogStore
from starship_shop.shop.checkout import CheckoutService
from starship_shop.shop.credits import RewardCreditsStore
from starship_shop.shop.state_manager import ShopStateManager
from starship_shop.utils.config_loader import ShopConfig, load_shop_config

load_dotenv()

logger = logging.getLogger(__name__)


def build_catalog_client(cfg: ShopConfig) -> CatalogClient:
    if cfg.catalog.backend == "local":
        from starship_shop.integrations.clients.mocks.local_catalog import LocalCatalogClient

        logger.info("Using local catalog snapshot")
        return LocalCatalogClient()

    from starship_shop.integrations.clients.real_http.swapi_catalog import SwapiCatalogClient

    logger.info("Using SWAPI catalog at %s", cfg.catalog.base_url)
    return SwapiCatalogClient(base_url=cfg.catalog.base_url, timeout_seconds=cfg.catalog.timeout_seconds)


def build_storage(cfg: ShopConfig):
    backend = cfg.storage.backend
    if backend == "redis":
        from starship_shop.database.redis_real import RedisStorage

        logger.info("Persisting reward credits in Redis")
        return RedisStorage(url=cfg.storage.redis_url)
    if backend == "file":
        from starship_shop.database.file_storage import FileStorage

        path = cfg.storage.resolved_path()
        logger.info("Persisting reward credits in %s", path)
        return FileStorage(path)

    from starship_shop.database.storage import InMemoryStorage

    logger.info("Reward credits kept in memory only")
    return InMemoryStorage()


def build_state_manager(
    cfg: Optional[ShopConfig] = None,
    catalog_client: Optional[CatalogClient] = None,
    storage=None,
) -> ShopStateManager:
    cfg = cfg or load_shop_config()
    error_handler = ErrorHandler()

    cart = CartStore()
    credits = RewardCreditsStore(
        storage if storage is not None else build_storage(cfg),
        key=cfg.storage.credits_key,
        error_handler=error_handler,
    )
    catalog = CatalogStore(catalog_client or build_catalog_client(cfg), error_handler=error_handler)
    checkout = CheckoutService(
        cart,
        credits,
        tax_rate=cfg.checkout.tax_rate,
        delay_seconds=cfg.checkout.delay_seconds,
        clear_cart_on_storage_failure=cfg.checkout.clear_cart_on_storage_failure,
    )
    return ShopStateManager(catalog, cart, credits, checkout, gates=cfg.gates, error_handler=error_handler)
