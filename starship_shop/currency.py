"""Currency conversion utilities for the shop.

Catalog unit: cost units (the catalog's ``cost_in_credits`` field).
Display unit: AED (float, e.g. 12.0 = 12.00 AED).
Reward unit: reward credits (int).

Conversion chain
----------------
cost units ÷ 10,000 → AED
AED × 10,000 → reward credits (rounded half-up)

The catalog cost field is untyped: it arrives as a number, a numeric string
(possibly with ``,`` grouping) or a sentinel such as ``"unknown"``. Prices are
therefore ``Optional[float]`` everywhere; ``None`` means "no price available".
"""

from __future__ import annotations

import math
from typing import Any, Optional

# ─── constants ───────────────────────────────────────────────────────────────

EXCHANGE_RATE: int = 10_000
CREDIT_CONVERSION: int = 10_000
CURRENCY_CODE: str = "AED"
UNAVAILABLE: str = "—"

UNAVAILABLE_SENTINELS = frozenset({"unknown", "n/a"})


# ─── conversion helpers ───────────────────────────────────────────────────────


def _parse_cost_units(cost_units: Any) -> Optional[float]:
    if not cost_units or isinstance(cost_units, bool):
        return None

    if isinstance(cost_units, str):
        cleaned = cost_units.strip()
        if cleaned.lower() in UNAVAILABLE_SENTINELS:
            return None
        try:
            value = float(cleaned.replace(",", ""))
        except ValueError:
            return None
    elif isinstance(cost_units, (int, float)):
        try:
            value = float(cost_units)
        except OverflowError:
            return None
    else:
        return None

    if not math.isfinite(value) or value < 0:
        return None
    return value


def convert(cost_units: Any) -> Optional[float]:
    """Convert raw catalog cost units to AED. Returns None when unavailable."""
    value = _parse_cost_units(cost_units)
    if value is None:
        return None
    price = value / EXCHANGE_RATE
    return price if math.isfinite(price) else None


def is_price(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def format_price(price: Any) -> str:
    """Render an AED amount as ``"1,234.50 AED"``; anything else as ``"—"``."""
    if not is_price(price):
        return UNAVAILABLE
    return f"{price:,.2f} {CURRENCY_CODE}"


def format_cost_units(cost_units: Any) -> str:
    """Raw catalog cost shown next to the AED price, e.g. ``"120,000 credits"``."""
    value = _parse_cost_units(cost_units)
    if value is None:
        return ""
    if isinstance(cost_units, str):
        return f"{cost_units.strip()} credits"
    if value.is_integer():
        return f"{int(value):,} credits"
    return f"{value:,} credits"


def credits_for_amount(amount: float) -> int:
    """Reward credits earned for an AED amount, rounded half-up."""
    if not is_price(amount) or amount <= 0:
        return 0
    return int(math.floor(amount * CREDIT_CONVERSION + 0.5))
