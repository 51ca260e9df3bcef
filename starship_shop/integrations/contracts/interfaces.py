from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from starship_shop.currency import convert


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class PaymentMethod(str, Enum):
    """Display label only; no payment is processed."""
    CREDIT_CARD = "Credit Card"
    PAYPAL = "PayPal"


# ---------------------------------------------------------------------------
# Shared data models
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CatalogItem:
    item_id: str
    name: str
    cost_units: Any = None                 # number, numeric string, "unknown", "n/a" or None
    model: str = ""
    manufacturer: str = ""
    starship_class: str = ""
    url: str = ""
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)
    price: Optional[float] = field(init=False, compare=False)   # AED, None when unavailable

    def __post_init__(self) -> None:
        object.__setattr__(self, "price", convert(self.cost_units))

    @property
    def has_price(self) -> bool:
        return self.price is not None


@dataclass
class CatalogPage:
    results: List[CatalogItem]
    page: int = 1
    count: int = 0
    next: Optional[str] = None
    previous: Optional[str] = None

    @property
    def has_more(self) -> bool:
        return self.next is not None

    @property
    def has_previous(self) -> bool:
        return self.previous is not None


# ---------------------------------------------------------------------------
# Abstract catalog interface
# ---------------------------------------------------------------------------

class CatalogClient(ABC):
    """Every catalog source (real HTTP or local) must implement this interface."""

    @abstractmethod
    async def get_page(self, page: int = 1) -> CatalogPage:
        """Fetch one page of the catalog listing."""

    @abstractmethod
    async def search(self, query: str) -> List[CatalogItem]:
        """Return catalog items matching a free-text query."""
