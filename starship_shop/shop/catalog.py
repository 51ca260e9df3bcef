"""
Catalog listing and search state.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from starship_shop.error_handler import ErrorHandler, NetworkError
from starship_shop.integrations.contracts.interfaces import CatalogClient, CatalogItem

logger = logging.getLogger(__name__)


class CatalogStore:
    def __init__(self, client: CatalogClient, error_handler: Optional[ErrorHandler] = None):
        self.client = client
        self.error_handler = error_handler or ErrorHandler()

        self.items: List[CatalogItem] = []
        self.search_results: List[CatalogItem] = []
        self.loading = False
        self.search_loading = False
        self.error: Optional[Dict[str, Any]] = None
        self.search_error: Optional[Dict[str, Any]] = None
        self.has_more = False
        self.has_previous = False
        self.current_page = 1
        self.count = 0

        # Every item seen on a page or in a search, so intents can use ids
        self._known: Dict[str, CatalogItem] = {}

    async def fetch_page(self, page: int = 1) -> bool:
        """Load one listing page. Returns False when the fetch failed."""
        self.loading = True
        self.error = None
        try:
            result = await self.client.get_page(page)
        except NetworkError as exc:
            self.error = self.error_handler.handle_exception(exc, context={"op": "fetch_page", "page": page})
            return False
        finally:
            self.loading = False

        self.items = result.results
        self.has_more = result.has_more
        self.has_previous = result.has_previous
        self.current_page = page
        self.count = result.count
        self._remember(result.results)
        return True

    async def search(self, query: str) -> bool:
        """Run a catalog search. A blank query clears results without a request."""
        if not query or not query.strip():
            self.clear_search_results()
            return True

        self.search_loading = True
        self.search_error = None
        try:
            results = await self.client.search(query.strip())
        except NetworkError as exc:
            self.search_error = self.error_handler.handle_exception(exc, context={"op": "search", "query": query})
            return False
        finally:
            self.search_loading = False

        self.search_results = results
        self._remember(results)
        return True

    def clear_search_results(self) -> None:
        self.search_results = []
        self.search_error = None

    def get_item(self, item_id: str) -> Optional[CatalogItem]:
        return self._known.get(item_id)

    def _remember(self, items: List[CatalogItem]) -> None:
        for item in items:
            self._known[item.item_id] = item
