"""
Reward credits balance with explicit load/save against key-value storage.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from starship_shop.error_handler import ErrorHandler, StorageError, ValidationError

logger = logging.getLogger(__name__)

CREDITS_STORAGE_KEY = "@starship_shop_credits"


class RewardCreditsStore:
    """Process-wide reward balance.

    ``load()`` must run once at startup. ``add_credits()`` only changes the
    in-memory balance; callers pair it with ``save()``. Storage failures are
    captured in ``error`` and never raised.
    """

    def __init__(self, storage, key: str = CREDITS_STORAGE_KEY, error_handler: Optional[ErrorHandler] = None):
        self.storage = storage
        self.key = key
        self.error_handler = error_handler or ErrorHandler()
        self.balance = 0
        self.loading = False
        self.loaded = False
        self.error: Optional[Dict[str, Any]] = None

    async def load(self) -> int:
        self.loading = True
        self.error = None
        try:
            raw = self.storage.get_item(self.key)
            self.balance = self._parse(raw)
            logger.info("Loaded reward balance: %s", self.balance)
        except StorageError as exc:
            self.error = self.error_handler.handle_exception(exc, context={"op": "load", "key": self.key})
        finally:
            self.loading = False
            self.loaded = True
        return self.balance

    async def save(self, balance: int) -> Optional[int]:
        if balance < 0:
            raise ValidationError("Reward balance cannot be negative.")
        self.loading = True
        self.error = None
        try:
            self.storage.set_item(self.key, str(int(balance)))
            self.balance = int(balance)
            logger.info("Saved reward balance: %s", self.balance)
            return self.balance
        except StorageError as exc:
            self.error = self.error_handler.handle_exception(exc, context={"op": "save", "key": self.key})
            return None
        finally:
            self.loading = False

    def add_credits(self, amount: int) -> int:
        if amount < 0:
            raise ValidationError("Reward credits can only be added, never subtracted.")
        self.balance += int(amount)
        return self.balance

    def _parse(self, raw: Optional[str]) -> int:
        if raw is None:
            return 0
        text = str(raw).strip()
        if not (text.isascii() and text.isdigit()):
            raise StorageError(f"Stored reward balance is not a non-negative integer: {raw!r}")
        return int(text)
