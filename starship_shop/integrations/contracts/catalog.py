
import hashlib
import re
from typing import Any, Dict, List, Optional

from .interfaces import CatalogItem

"""
Catalog contracts.

Defines how raw catalog entries become CatalogItem instances:
- identifier derivation from the canonical resource URL
- field mapping from the SWAPI starship payload

These contracts must be used by both:
- clients/mocks/local_catalog.py (bundled data for development/tests)
- clients/real_http/swapi_catalog.py (the public SWAPI catalog)
"""


# ---------------------------------------------------------------------------
# Identifiers
# ---------------------------------------------------------------------------

_TRAILING_ID = re.compile(r"/(\d+)/?$")
FALLBACK_ID_PREFIX = "x-"


def derive_item_id(url: Optional[str], name: str = "") -> str:
    """
    Item id = trailing numeric path segment of the resource URL
    (``https://swapi.dev/api/starships/9/`` -> ``"9"``).

    Entries without one get a stable hash of their URL (or name when the URL
    is missing) so the id is the same on every fetch.
    """
    url = (url or "").strip()
    match = _TRAILING_ID.search(url)
    if match:
        return match.group(1)
    seed = url or name.strip()
    digest = hashlib.sha1(seed.encode("utf-8")).hexdigest()[:12]
    return f"{FALLBACK_ID_PREFIX}{digest}"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def item_from_raw(raw: Dict[str, Any]) -> CatalogItem:
    """Map a raw SWAPI starship dict onto the CatalogItem contract."""
    name = str(raw.get("name") or "").strip()
    url = str(raw.get("url") or "").strip()
    return CatalogItem(
        item_id=derive_item_id(url, name),
        name=name,
        cost_units=raw.get("cost_in_credits"),
        model=str(raw.get("model") or ""),
        manufacturer=str(raw.get("manufacturer") or ""),
        starship_class=str(raw.get("starship_class") or ""),
        url=url,
        raw=dict(raw),
    )


def matches_query(item: CatalogItem, query: str) -> bool:
    """Case-insensitive match on name or model, as the SWAPI search does."""
    needle = query.strip().lower()
    if not needle:
        return False
    return needle in item.name.lower() or needle in item.model.lower()


def filter_items(items: List[CatalogItem], query: str) -> List[CatalogItem]:
    return [item for item in items if matches_query(item, query)]
