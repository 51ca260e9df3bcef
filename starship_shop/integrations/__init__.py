"""
Integrations layer.
This package contains all code used to communicate with the catalog:
- the public SWAPI starship catalog (real HTTP)
- a bundled local snapshot (mock)

Key rule:
- Stores MUST NOT call external APIs directly.
- Stores call integration clients through the CatalogClient interface.

Switching implementations:
- The selection of mock vs real clients happens in ONE place (starship_shop/dependencies.py).
"""

from .contracts.interfaces import CatalogClient, CatalogItem, CatalogPage, PaymentMethod
from .contracts.catalog import derive_item_id, filter_items, item_from_raw, matches_query

__all__ = [
    # interfaces
    "CatalogClient", "CatalogItem", "CatalogPage", "PaymentMethod",
    # catalog helpers
    "derive_item_id", "filter_items", "item_from_raw", "matches_query",
]
