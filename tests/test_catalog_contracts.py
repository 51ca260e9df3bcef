import pytest

from starship_shop.integrations.clients.mocks.local_catalog import LocalCatalogClient
from starship_shop.integrations.contracts.catalog import FALLBACK_ID_PREFIX, derive_item_id, item_from_raw
from starship_shop.integrations.policy.response_wrappers import (
    IntegrationResponseError,
    normalize_catalog_page,
    normalize_search_response,
)
from starship_shop.error_handler import NetworkError


@pytest.mark.parametrize(
    "url, expected",
    [
        ("https://swapi.dev/api/starships/9/", "9"),
        ("https://swapi.dev/api/starships/12", "12"),
        ("http://localhost/starships/75/", "75"),
    ],
)
def test_derive_item_id_from_url(url, expected):
    assert derive_item_id(url) == expected


def test_fallback_id_is_deterministic():
    first = derive_item_id("https://swapi.dev/api/starships/custom/", "Custom")
    second = derive_item_id("https://swapi.dev/api/starships/custom/", "Custom")
    assert first == second
    assert first.startswith(FALLBACK_ID_PREFIX)
    assert derive_item_id("https://swapi.dev/api/starships/other/") != first


def test_fallback_id_without_url_uses_name():
    assert derive_item_id(None, "Ghost") == derive_item_id("", "Ghost")
    assert derive_item_id(None, "Ghost") != derive_item_id(None, "Razor Crest")


def test_item_from_raw_keeps_raw_cost_and_converts_price():
    item = item_from_raw({"name": "X-wing", "cost_in_credits": "149999", "url": "https://swapi.dev/api/starships/12/"})
    assert item.item_id == "12"
    assert item.cost_units == "149999"
    assert item.price == pytest.approx(14.9999)
    assert item.has_price


def test_normalize_page_without_next():
    page = normalize_catalog_page({"count": 1, "next": None, "previous": "p1", "results": [{"name": "A"}]}, page=2)
    assert page.page == 2
    assert page.has_more is False
    assert page.has_previous is True
    assert page.results[0].item_id.startswith(FALLBACK_ID_PREFIX)


def test_normalize_rejects_non_object():
    with pytest.raises(IntegrationResponseError):
        normalize_search_response(["not", "a", "dict"])


def test_normalize_rejects_nameless_entry():
    with pytest.raises(IntegrationResponseError):
        normalize_search_response({"results": [{"cost_in_credits": "10"}]})


@pytest.mark.asyncio
async def test_local_client_pages_and_searches():
    client = LocalCatalogClient()
    first = await client.get_page(1)
    assert len(first.results) == 10
    assert first.has_more is True
    assert first.has_previous is False

    last = await client.get_page(client.total_pages)
    assert last.has_more is False
    assert last.count == first.count

    results = await client.search("WING")
    assert {item.name for item in results} >= {"X-wing", "Y-wing", "A-wing", "B-wing"}
    assert await client.search("") == []


@pytest.mark.asyncio
async def test_local_client_out_of_range_page():
    with pytest.raises(NetworkError):
        await LocalCatalogClient().get_page(99)
