"""
Checkout: turns the cart total into reward credits.

Order of operations in ``place_order``:

1. reject an empty cart (nothing is mutated)
2. subtotal, tax, total from the cart
3. credits earned = total x CREDIT_CONVERSION, rounded half-up
4. simulated network latency (no network call is made)
5. credit the balance in memory, then persist it
6. clear the cart

If persisting fails the in-memory balance has already moved; the cart is
still cleared unless ``clear_cart_on_storage_failure`` is False.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from starship_shop.currency import credits_for_amount
from starship_shop.error_handler import ValidationError
from starship_shop.integrations.contracts.interfaces import PaymentMethod
from starship_shop.shop.cart import CartStore
from starship_shop.shop.credits import RewardCreditsStore

logger = logging.getLogger(__name__)

DEFAULT_TAX_RATE = 0.05
EMPTY_CART_MESSAGE = "Please add items to your cart before placing an order."


@dataclass
class OrderSummary:
    subtotal: float
    tax: float
    total: float
    credits_earned: int
    tax_rate: float = DEFAULT_TAX_RATE


@dataclass
class OrderReceipt:
    total: float
    credits_earned: int
    subtotal: float
    tax: float
    payment_method: PaymentMethod
    balance: int
    persisted: bool
    order_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    placed_at: datetime = field(default_factory=datetime.utcnow)


class CheckoutService:
    def __init__(
        self,
        cart: CartStore,
        credits: RewardCreditsStore,
        tax_rate: float = DEFAULT_TAX_RATE,
        delay_seconds: float = 0.8,
        clear_cart_on_storage_failure: bool = True,
    ):
        self.cart = cart
        self.credits = credits
        self.tax_rate = tax_rate
        self.delay_seconds = delay_seconds
        self.clear_cart_on_storage_failure = clear_cart_on_storage_failure

    def summarize(self, tax_rate: Optional[float] = None) -> OrderSummary:
        rate = self.tax_rate if tax_rate is None else tax_rate
        subtotal = self.cart.total_price()
        tax = subtotal * rate
        total = subtotal + tax
        return OrderSummary(
            subtotal=subtotal,
            tax=tax,
            total=total,
            credits_earned=credits_for_amount(total),
            tax_rate=rate,
        )

    async def place_order(
        self,
        payment_method: PaymentMethod = PaymentMethod.CREDIT_CARD,
        tax_rate: Optional[float] = None,
    ) -> OrderReceipt:
        if self.cart.is_empty:
            raise ValidationError(EMPTY_CART_MESSAGE)

        summary = self.summarize(tax_rate)

        if self.delay_seconds:
            await asyncio.sleep(self.delay_seconds)

        new_balance = self.credits.add_credits(summary.credits_earned)
        saved = await self.credits.save(new_balance)
        persisted = saved is not None
        if not persisted:
            logger.warning("Order credited %s but the balance was not persisted", summary.credits_earned)

        if persisted or self.clear_cart_on_storage_failure:
            self.cart.clear()

        receipt = OrderReceipt(
            total=summary.total,
            credits_earned=summary.credits_earned,
            subtotal=summary.subtotal,
            tax=summary.tax,
            payment_method=PaymentMethod(payment_method),
            balance=self.credits.balance,
            persisted=persisted,
        )
        logger.info(
            "Order %s placed via %s: total=%.2f credits_earned=%s",
            receipt.order_id,
            receipt.payment_method.value,
            receipt.total,
            receipt.credits_earned,
        )
        return receipt
