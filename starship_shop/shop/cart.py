"""
Session cart: item id -> (item snapshot, quantity).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from starship_shop.integrations.contracts.interfaces import CatalogItem

logger = logging.getLogger(__name__)

MAX_QUANTITY = 5


@dataclass
class CartLine:
    item: CatalogItem
    quantity: int

    @property
    def subtotal(self) -> Optional[float]:
        """Line price in AED, or None when the item has no price."""
        if self.item.price is None:
            return None
        return self.item.price * self.quantity


class CartStore:
    """In-memory cart.

    Every line holds 1..MAX_QUANTITY units; a line that would drop to zero is
    removed. Operations never raise for out-of-range requests, they are
    silently ignored.
    """

    def __init__(self, max_quantity: int = MAX_QUANTITY) -> None:
        self.max_quantity = max_quantity
        self._lines: Dict[str, CartLine] = {}

    # --- Intents -------------------------------------------------------------

    def add(self, item: CatalogItem) -> None:
        line = self._lines.get(item.item_id)
        if line is None:
            self._lines[item.item_id] = CartLine(item=item, quantity=1)
            logger.debug("Cart: added %s", item.item_id)
        elif line.quantity < self.max_quantity:
            line.quantity += 1
            logger.debug("Cart: %s -> %s", item.item_id, line.quantity)

    def remove(self, item_id: str) -> None:
        line = self._lines.get(item_id)
        if line is None:
            return
        if line.quantity > 1:
            line.quantity -= 1
            logger.debug("Cart: %s -> %s", item_id, line.quantity)
        else:
            del self._lines[item_id]
            logger.debug("Cart: removed %s", item_id)

    def set_quantity(self, item_id: str, quantity: int) -> None:
        if quantity <= 0:
            if self._lines.pop(item_id, None) is not None:
                logger.debug("Cart: removed %s", item_id)
            return
        if quantity > self.max_quantity:
            return
        line = self._lines.get(item_id)
        if line is not None:
            line.quantity = quantity
            logger.debug("Cart: %s set to %s", item_id, quantity)

    def clear(self) -> None:
        self._lines.clear()
        logger.debug("Cart cleared")

    # --- Selectors -----------------------------------------------------------

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def lines(self) -> List[CartLine]:
        return list(self._lines.values())

    def get_line(self, item_id: str) -> Optional[CartLine]:
        return self._lines.get(item_id)

    def quantity_of(self, item_id: str) -> int:
        line = self._lines.get(item_id)
        return line.quantity if line else 0

    def total_quantity(self) -> int:
        return sum(line.quantity for line in self._lines.values())

    def total_price(self) -> float:
        """Sum of line prices in AED; lines without a price are skipped."""
        total = 0.0
        for line in self._lines.values():
            subtotal = line.subtotal
            if subtotal is not None:
                total += subtotal
        return total

    def __len__(self) -> int:
        return len(self._lines)
