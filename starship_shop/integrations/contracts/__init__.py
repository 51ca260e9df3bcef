"""
Contracts (data models).

This folder defines the shapes exchanged with the catalog:
- CatalogItem / CatalogPage
- identifier derivation for raw catalog entries
- the CatalogClient interface both clients implement

Both mock and real HTTP clients should use these contracts.
"""
