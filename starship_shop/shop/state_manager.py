"""
Intent dispatch and state snapshots for the shop UI layers.
"""

from __future__ import annotations

import logging
import time
from dataclasses import asdict
from typing import Any, Callable, Dict, List, Optional

from starship_shop.currency import format_cost_units, format_price
from starship_shop.error_handler import ErrorHandler, ValidationError
from starship_shop.integrations.contracts.interfaces import CatalogItem, PaymentMethod
from starship_shop.shop.cart import CartStore
from starship_shop.shop.catalog import CatalogStore
from starship_shop.shop.checkout import CheckoutService, OrderReceipt, OrderSummary
from starship_shop.shop.credits import RewardCreditsStore
from starship_shop.utils.config_loader import GateConfig
from starship_shop.utils.rate_limiter import MinIntervalGate

logger = logging.getLogger(__name__)


class ShopStateManager:
    """Owns the stores and decides which UI intents are accepted.

    Cart actions and searches are gated by a minimum interval; a checkout is
    refused while another one is in flight. Ignored intents return False or
    None and leave the stores untouched. ``cart_error`` only ever describes the
    most recent cart intent.
    """

    def __init__(
        self,
        catalog: CatalogStore,
        cart: CartStore,
        credits: RewardCreditsStore,
        checkout: CheckoutService,
        gates: Optional[GateConfig] = None,
        clock: Callable[[], float] = time.monotonic,
        error_handler: Optional[ErrorHandler] = None,
    ):
        self.catalog = catalog
        self.cart = cart
        self.credits = credits
        self.checkout = checkout
        self.error_handler = error_handler or ErrorHandler()

        gates = gates or GateConfig()
        self.search_min_length = gates.search_min_length
        self.cart_gate = MinIntervalGate("cart", gates.cart_action_interval_ms, clock=clock)
        self.search_gate = MinIntervalGate("search", gates.search_interval_ms, clock=clock)
        self.checkout_gate = MinIntervalGate("checkout", 0, clock=clock)

        self.cart_error: Optional[Dict[str, Any]] = None
        self.checkout_error: Optional[Dict[str, Any]] = None
        self.last_receipt: Optional[OrderReceipt] = None
        self.last_query = ""

    # --- Startup -------------------------------------------------------------

    async def start(self) -> None:
        """Load the persisted balance before anything is displayed, then page 1."""
        await self.credits.load()
        await self.catalog.fetch_page(1)

    # --- Catalog intents -----------------------------------------------------

    async def fetch_page(self, page: int = 1) -> bool:
        return await self.catalog.fetch_page(page)

    async def search(self, query: str) -> bool:
        """Return whether the query was issued; a failed fetch lands in ``catalog.search_error``."""
        trimmed = (query or "").strip()
        if not trimmed:
            self.clear_search()
            return True
        if len(trimmed) < self.search_min_length:
            logger.debug("Search %r ignored: shorter than %s", trimmed, self.search_min_length)
            return False
        if not self.search_gate.begin():
            return False
        try:
            self.last_query = trimmed
            await self.catalog.search(trimmed)
            return True
        finally:
            self.search_gate.complete()

    def clear_search(self) -> None:
        self.last_query = ""
        self.catalog.clear_search_results()

    # --- Cart intents --------------------------------------------------------

    def find_item(self, item_id: str) -> Optional[CatalogItem]:
        item = self.catalog.get_item(item_id)
        if item is None:
            line = self.cart.get_line(item_id)
            item = line.item if line else None
        return item

    def add_to_cart(self, item_id: str) -> bool:
        item = self.find_item(item_id)
        if item is None:
            raise KeyError(item_id)
        self.cart_error = None
        if not self.cart_gate.begin():
            return False
        try:
            if self.cart.quantity_of(item_id) == 0 and not item.has_price:
                raise ValidationError(f"{item.name} has no price and cannot be added to the cart.")
            self.cart.add(item)
            return True
        except ValidationError as exc:
            self.cart_error = self.error_handler.handle_exception(exc, context={"op": "add", "item_id": item_id})
            return False
        finally:
            self.cart_gate.complete()

    def remove_from_cart(self, item_id: str) -> bool:
        self.cart_error = None
        if not self.cart_gate.begin():
            return False
        try:
            self.cart.remove(item_id)
            return True
        finally:
            self.cart_gate.complete()

    def set_quantity(self, item_id: str, quantity: int) -> bool:
        self.cart_error = None
        if not self.cart_gate.begin():
            return False
        try:
            self.cart.set_quantity(item_id, quantity)
            return True
        finally:
            self.cart_gate.complete()

    def clear_cart(self) -> None:
        self.cart_error = None
        self.cart.clear()

    # --- Checkout intents ----------------------------------------------------

    def order_summary(self) -> OrderSummary:
        return self.checkout.summarize()

    @property
    def placing_order(self) -> bool:
        return self.checkout_gate.in_flight

    async def place_order(self, payment_method: PaymentMethod = PaymentMethod.CREDIT_CARD) -> Optional[OrderReceipt]:
        if not self.checkout_gate.begin():
            logger.info("Order already in progress; ignoring duplicate request")
            return None
        try:
            self.checkout_error = None
            receipt = await self.checkout.place_order(payment_method=payment_method)
        except ValidationError as exc:
            self.checkout_error = self.error_handler.handle_exception(exc, context={"op": "place_order"})
            return None
        finally:
            self.checkout_gate.complete()

        self.last_receipt = receipt
        return receipt

    # --- Snapshots -----------------------------------------------------------

    def item_view(self, item: CatalogItem) -> Dict[str, Any]:
        quantity = self.cart.quantity_of(item.item_id)
        return {
            "id": item.item_id,
            "name": item.name,
            "model": item.model,
            "manufacturer": item.manufacturer,
            "starship_class": item.starship_class,
            "cost_units": item.cost_units,
            "cost_label": format_cost_units(item.cost_units),
            "price": item.price,
            "price_label": format_price(item.price),
            "quantity": quantity,
            "can_add": item.has_price and quantity < self.cart.max_quantity,
        }

    def cart_snapshot(self) -> Dict[str, Any]:
        lines: List[Dict[str, Any]] = []
        for line in self.cart.lines():
            lines.append(
                {
                    "item": self.item_view(line.item),
                    "quantity": line.quantity,
                    "subtotal": line.subtotal,
                    "subtotal_label": format_price(line.subtotal),
                }
            )
        total_price = self.cart.total_price()
        return {
            "lines": lines,
            "total_quantity": self.cart.total_quantity(),
            "total_price": total_price,
            "total_price_label": format_price(total_price),
            "error": self.cart_error,
        }

    def credits_snapshot(self) -> Dict[str, Any]:
        return {
            "balance": self.credits.balance,
            "balance_label": f"{self.credits.balance:,} credits",
            "loading": self.credits.loading,
            "error": self.credits.error,
        }

    def summary_snapshot(self) -> Dict[str, Any]:
        summary = self.order_summary()
        return {
            "subtotal": summary.subtotal,
            "subtotal_label": format_price(summary.subtotal),
            "tax_rate": summary.tax_rate,
            "tax": summary.tax,
            "tax_label": format_price(summary.tax),
            "total": summary.total,
            "total_label": format_price(summary.total),
            "credits_earned": summary.credits_earned,
        }

    def receipt_view(self, receipt: OrderReceipt) -> Dict[str, Any]:
        data = asdict(receipt)
        data["payment_method"] = receipt.payment_method.value
        data["placed_at"] = receipt.placed_at.isoformat()
        data["total_label"] = format_price(receipt.total)
        return data

    def snapshot(self) -> Dict[str, Any]:
        catalog = self.catalog
        return {
            "catalog": {
                "items": [self.item_view(item) for item in catalog.items],
                "current_page": catalog.current_page,
                "has_more": catalog.has_more,
                "has_previous": catalog.has_previous,
                "count": catalog.count,
                "loading": catalog.loading,
                "error": catalog.error,
            },
            "search": {
                "query": self.last_query,
                "results": [self.item_view(item) for item in catalog.search_results],
                "loading": catalog.search_loading,
                "error": catalog.search_error,
            },
            "cart": self.cart_snapshot(),
            "credits": self.credits_snapshot(),
            "checkout": {
                "placing_order": self.placing_order,
                "error": self.checkout_error,
                "last_receipt": self.receipt_view(self.last_receipt) if self.last_receipt else None,
            },
        }
