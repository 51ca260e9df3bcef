import httpx
import pytest

from starship_shop.error_handler import NetworkError
from starship_shop.integrations.clients.real_http.swapi_catalog import SwapiCatalogClient
from starship_shop.integrations.policy.response_wrappers import IntegrationResponseError

PAGE_ONE = {
    "count": 36,
    "next": "https://swapi.dev/api/starships/?page=2",
    "previous": None,
    "results": [
        {
            "name": "CR90 corvette",
            "model": "CR90 corvette",
            "manufacturer": "Corellian Engineering Corporation",
            "cost_in_credits": "3500000",
            "starship_class": "corvette",
            "url": "https://swapi.dev/api/starships/2/",
        },
        {
            "name": "Slave 1",
            "model": "Firespray-31-class patrol and attack",
            "cost_in_credits": "unknown",
            "url": "https://swapi.dev/api/starships/21/",
        },
    ],
}


def make_client(handler):
    return SwapiCatalogClient(base_url="https://swapi.test/api", transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_get_page_requests_page_and_normalizes_items():
    seen = []

    def handler(request):
        seen.append(request.url)
        return httpx.Response(200, json=PAGE_ONE)

    page = await make_client(handler).get_page(1)

    assert seen[0].path == "/api/starships/"
    assert seen[0].params["page"] == "1"
    assert page.count == 36
    assert page.has_more is True
    assert page.has_previous is False
    assert [item.item_id for item in page.results] == ["2", "21"]
    assert page.results[0].price == pytest.approx(350.0)
    assert page.results[1].price is None


@pytest.mark.asyncio
async def test_search_sends_query_and_returns_items():
    def handler(request):
        assert request.url.params["search"] == "wing"
        return httpx.Response(200, json={"results": [{"name": "X-wing", "url": "https://swapi.dev/api/starships/12/"}]})

    items = await make_client(handler).search("  wing ")
    assert [item.name for item in items] == ["X-wing"]


@pytest.mark.asyncio
async def test_blank_search_makes_no_request():
    def handler(request):
        raise AssertionError("no request expected")

    assert await make_client(handler).search("   ") == []


@pytest.mark.asyncio
async def test_non_2xx_raises_network_error():
    client = make_client(lambda request: httpx.Response(500, json={"detail": "boom"}))
    with pytest.raises(NetworkError) as exc_info:
        await client.get_page(1)
    assert exc_info.value.message == "Failed to fetch starships"
    assert exc_info.value.payload["status_code"] == 500


@pytest.mark.asyncio
async def test_transport_failure_raises_network_error():
    def handler(request):
        raise httpx.ConnectError("unreachable", request=request)

    with pytest.raises(NetworkError) as exc_info:
        await make_client(handler).search("falcon")
    assert exc_info.value.message == "Failed to search starships"


@pytest.mark.asyncio
async def test_malformed_payload_raises_integration_error():
    client = make_client(lambda request: httpx.Response(200, json={"results": "nope"}))
    with pytest.raises(IntegrationResponseError):
        await client.get_page(1)


@pytest.mark.asyncio
async def test_non_json_body_raises_network_error():
    client = make_client(lambda request: httpx.Response(200, text="<html>down</html>"))
    with pytest.raises(NetworkError):
        await client.get_page(1)


def test_base_url_from_environment(monkeypatch):
    monkeypatch.setenv("SWAPI_BASE_URL", "https://mirror.example/api/")
    assert SwapiCatalogClient().base_url == "https://mirror.example/api"
