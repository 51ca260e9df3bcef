"""
Client-side shop state: cart, reward credits, catalog and checkout.
"""
from .cart import MAX_QUANTITY, CartLine, CartStore
from .catalog import CatalogStore
from .checkout import CheckoutService, OrderReceipt, OrderSummary
from .credits import CREDITS_STORAGE_KEY, RewardCreditsStore
from .state_manager import ShopStateManager

__all__ = [
    "MAX_QUANTITY",
    "CartLine",
    "CartStore",
    "CatalogStore",
    "CheckoutService",
    "OrderReceipt",
    "OrderSummary",
    "CREDITS_STORAGE_KEY",
    "RewardCreditsStore",
    "ShopStateManager",
]
