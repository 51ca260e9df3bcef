"""Pytest fixtures for shop store, checkout and API tests."""

import pytest

from starship_shop.database.storage import InMemoryStorage
from starship_shop.integrations.clients.mocks.local_catalog import LocalCatalogClient
from starship_shop.integrations.contracts.interfaces import CatalogItem
from starship_shop.shop.cart import CartStore
from starship_shop.shop.catalog import CatalogStore
from starship_shop.shop.checkout import CheckoutService
from starship_shop.shop.credits import RewardCreditsStore
from starship_shop.shop.state_manager import ShopStateManager
from starship_shop.utils.config_loader import GateConfig


def make_item(item_id="1", cost_units="100000", name=None, **kwargs):
    return CatalogItem(item_id=item_id, name=name or f"Ship {item_id}", cost_units=cost_units, **kwargs)


@pytest.fixture
def item_factory():
    return make_item


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def cart():
    return CartStore()


@pytest.fixture
def credits(storage):
    return RewardCreditsStore(storage)


@pytest.fixture
def checkout(cart, credits):
    return CheckoutService(cart, credits, delay_seconds=0)


@pytest.fixture
def shop(cart, credits, checkout):
    """State manager over the bundled catalog with gates disabled."""
    catalog = CatalogStore(LocalCatalogClient())
    gates = GateConfig(cart_action_interval_ms=0, search_interval_ms=0)
    return ShopStateManager(catalog, cart, credits, checkout, gates=gates)
