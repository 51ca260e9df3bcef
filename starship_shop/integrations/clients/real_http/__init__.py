"""
Real HTTP integration clients.

These clients talk to the public SWAPI catalog over HTTP.

Important:
- Must implement the same interface as the mock clients
- Must return data shaped according to starship_shop/integrations/contracts/*

Switching:
The selection of mock vs real clients happens in starship_shop/dependencies.py only.
"""

from .swapi_catalog import SwapiCatalogClient

__all__ = ["SwapiCatalogClient"]
