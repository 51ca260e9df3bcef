"""
Local Catalog Client (Mock/Local).

Purpose:
- Acts as a development-time catalog source when SWAPI is unreachable.
- Serves a bundled snapshot of SWAPI starships with the same paging and
  search behaviour (10 per page, case-insensitive name/model match).
- Does NOT make any network calls.

Swap:
Selected in starship_shop/dependencies.py when the catalog backend is "local".
"""

from __future__ import annotations

import math
from typing import Any, Dict, List, Optional

from starship_shop.error_handler import NetworkError
from starship_shop.integrations.contracts.catalog import filter_items, item_from_raw
from starship_shop.integrations.contracts.interfaces import CatalogClient, CatalogItem, CatalogPage

LOCAL_BASE_URL = "local://catalog"
PAGE_SIZE = 10


def _ship(number: int, name: str, model: str, manufacturer: str, cost: str, starship_class: str) -> Dict[str, Any]:
    return {
        "name": name,
        "model": model,
        "manufacturer": manufacturer,
        "cost_in_credits": cost,
        "starship_class": starship_class,
        "url": f"https://swapi.dev/api/starships/{number}/",
    }


DEFAULT_STARSHIPS: List[Dict[str, Any]] = [
    _ship(2, "CR90 corvette", "CR90 corvette", "Corellian Engineering Corporation", "3500000", "corvette"),
    _ship(3, "Star Destroyer", "Imperial I-class Star Destroyer", "Kuat Drive Yards", "150000000", "Star Destroyer"),
    _ship(5, "Sentinel-class landing craft", "Sentinel-class landing craft", "Sienar Fleet Systems, Cyngus Spaceworks", "240000", "landing craft"),
    _ship(9, "Death Star", "DS-1 Orbital Battle Station", "Imperial Department of Military Research, Sienar Fleet Systems", "1000000000000", "Deep Space Mobile Battlestation"),
    _ship(10, "Millennium Falcon", "YT-1300 light freighter", "Corellian Engineering Corporation", "100000", "Light freighter"),
    _ship(11, "Y-wing", "BTL Y-wing", "Koensayr Manufacturing", "134999", "assault starfighter"),
    _ship(12, "X-wing", "T-65 X-wing", "Incom Corporation", "149999", "Starfighter"),
    _ship(13, "TIE Advanced x1", "Twin Ion Engine Advanced x1", "Sienar Fleet Systems", "unknown", "Starfighter"),
    _ship(15, "Executor", "Executor-class star dreadnought", "Kuat Drive Yards, Fondor Shipyards", "1143350000", "Star dreadnought"),
    _ship(17, "Rebel transport", "GR-75 medium transport", "Gallofree Yards, Inc.", "unknown", "Medium transport"),
    _ship(21, "Slave 1", "Firespray-31-class patrol and attack", "Kuat Systems Engineering", "unknown", "Patrol craft"),
    _ship(22, "Imperial shuttle", "Lambda-class T-4a shuttle", "Sienar Fleet Systems", "240000", "Armed government transport"),
    _ship(23, "EF76 Nebulon-B escort frigate", "EF76 Nebulon-B escort frigate", "Kuat Drive Yards", "8500000", "Escort ship"),
    _ship(27, "Calamari Cruiser", "MC80 Liberty type Star Cruiser", "Mon Calamari shipyards", "104000000", "Star Cruiser"),
    _ship(28, "A-wing", "RZ-1 A-wing Interceptor", "Alliance Underground Engineering, Incom Corporation", "175000", "Starfighter"),
    _ship(29, "B-wing", "A/SF-01 B-wing starfighter", "Slayn & Korpil", "220000", "Assault Starfighter"),
]


class LocalCatalogClient(CatalogClient):
    def __init__(self, starships: Optional[List[Dict[str, Any]]] = None, page_size: int = PAGE_SIZE) -> None:
        self._items: List[CatalogItem] = [item_from_raw(raw) for raw in (starships or DEFAULT_STARSHIPS)]
        self.page_size = page_size

    @property
    def total_pages(self) -> int:
        return max(1, math.ceil(len(self._items) / self.page_size))

    async def get_page(self, page: int = 1) -> CatalogPage:
        if page < 1 or page > self.total_pages:
            raise NetworkError("Failed to fetch starships", payload={"status_code": 404, "page": page})

        start = (page - 1) * self.page_size
        results = self._items[start:start + self.page_size]
        return CatalogPage(
            results=results,
            page=page,
            count=len(self._items),
            next=f"{LOCAL_BASE_URL}/starships/?page={page + 1}" if page < self.total_pages else None,
            previous=f"{LOCAL_BASE_URL}/starships/?page={page - 1}" if page > 1 else None,
        )

    async def search(self, query: str) -> List[CatalogItem]:
        if not query or not query.strip():
            return []
        return filter_items(self._items, query)
