"""
Mock integration clients.

These clients return realistic catalog data without calling any external API.
They are used when:
- SWAPI is unreachable or rate limited
- We want to test flows end-to-end without external dependencies

Important:
- Mock clients must follow the SAME interface as real HTTP clients.
"""

from .local_catalog import LocalCatalogClient

__all__ = ["LocalCatalogClient"]
