"""
SWAPI Catalog HTTP Client.

Purpose:
- Fetches the starship catalog from the public read-only SWAPI
- Normalizes entries into our CatalogItem / CatalogPage contract shape

Usage:
- Selected in starship_shop/dependencies.py when the catalog backend is "swapi"
- Called by CatalogStore through the CatalogClient interface

Important:
- This client should be the ONLY place that talks to SWAPI.
- No retries: a failed call surfaces as NetworkError and the caller shows it.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Optional

import httpx

from starship_shop.error_handler import NetworkError
from starship_shop.integrations.contracts.interfaces import CatalogClient, CatalogItem, CatalogPage
from starship_shop.integrations.policy.response_wrappers import (
    normalize_catalog_page,
    normalize_search_response,
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://swapi.dev/api"


class SwapiCatalogClient(CatalogClient):
    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout_seconds: float = 20.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = (base_url or os.getenv("SWAPI_BASE_URL", DEFAULT_BASE_URL)).rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    async def get_page(self, page: int = 1) -> CatalogPage:
        data = await self._get_json({"page": page}, failure="Failed to fetch starships")
        catalog_page = normalize_catalog_page(data, page=page)
        logger.info("Fetched catalog page %s (%s items)", page, len(catalog_page.results))
        return catalog_page

    async def search(self, query: str) -> List[CatalogItem]:
        if not query or not query.strip():
            return []
        data = await self._get_json({"search": query.strip()}, failure="Failed to search starships")
        items = normalize_search_response(data)
        logger.info("Catalog search %r returned %s items", query, len(items))
        return items

    async def _get_json(self, params: Dict[str, Any], *, failure: str) -> Any:
        url = f"{self.base_url}/starships/"
        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds, transport=self._transport) as client:
                response = await client.get(url, params=params, headers={"Accept": "application/json"})
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as exc:
            logger.warning("%s: HTTP %s from %s", failure, exc.response.status_code, url)
            raise NetworkError(failure, payload={"status_code": exc.response.status_code}) from exc
        except httpx.HTTPError as exc:
            logger.warning("%s: %s", failure, exc)
            raise NetworkError(failure, payload={"error": str(exc)}) from exc
        except ValueError as exc:
            # Body was not JSON
            raise NetworkError(failure, payload={"error": str(exc)}) from exc
