"""Integration tests for cached external lookups, with upstream APIs mocked."""

import uuid
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from backend.app.api.deps import get_external_service
from backend.app.cache import TTLCache
from backend.app.config import Settings
from backend.app.main import app
from backend.app.services.external import ExternalLookupService

pytestmark = pytest.mark.integration

FORECAST = {
    "daily": {
        "time": ["2026-06-01", "2026-06-02"],
        "temperature_2m_max": [24.0, 26.5],
        "temperature_2m_min": [15.0, 16.2],
        "precipitation_probability_max": [10, 45],
        "wind_speed_10m_max": [9.0, 14.0],
    }
}

COUNTRY = [
    {
        "name": {"common": "France", "official": "French Republic"},
        "capital": ["Paris"],
        "region": "Europe",
        "currencies": {"EUR": {"name": "Euro"}},
        "languages": {"fra": "French"},
        "timezones": ["UTC+01:00"],
        "flags": {"png": "https://flagcdn.com/w320/fr.png"},
    }
]


def use_upstream(handler: Callable[[httpx.Request], httpx.Response]) -> list[httpx.Request]:
    """Route external lookups through a mock transport with a fresh cache."""
    seen: list[httpx.Request] = []

    def recording(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return handler(request)

    service = ExternalLookupService(
        TTLCache(),
        Settings(),
        client=httpx.AsyncClient(transport=httpx.MockTransport(recording)),
    )
    app.dependency_overrides[get_external_service] = lambda: service
    return seen


def upstream(request: httpx.Request) -> httpx.Response:
    if request.url.host == "api.open-meteo.com":
        return httpx.Response(200, json=FORECAST)
    if request.url.host == "restcountries.com":
        if request.url.path.endswith("/France"):
            return httpx.Response(200, json=COUNTRY)
        return httpx.Response(404, json={"status": 404})
    return httpx.Response(200, json=[])


@pytest.mark.asyncio
async def test_country_lookup_is_cached(api_client: httpx.AsyncClient) -> None:
    seen = use_upstream(upstream)

    first = await api_client.get("/external/countries/France")
    second = await api_client.get("/external/countries/france")

    assert first.status_code == 200
    assert first.json()["cache_hit"] is False
    assert first.json()["country"]["currencies"] == {"EUR": "Euro"}
    assert second.json()["cache_hit"] is True
    assert second.json()["country"] == first.json()["country"]
    assert len(seen) == 1


@pytest.mark.asyncio
async def test_unknown_country_returns_404(api_client: httpx.AsyncClient) -> None:
    use_upstream(upstream)

    response = await api_client.get("/external/countries/Atlantis")

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_city_weather_uses_catalog_coordinates(
    api_client: httpx.AsyncClient, catalog: Any
) -> None:
    seen = use_upstream(upstream)
    url = f"/external/cities/{catalog.city.city_id}/weather"

    first = await api_client.get(url, params={"days": 2})
    second = await api_client.get(url, params={"days": 2})

    assert first.status_code == 200
    body = first.json()
    assert body["city_id"] == str(catalog.city.city_id)
    assert [day["date"] for day in body["forecast"]] == ["2026-06-01", "2026-06-02"]
    assert body["forecast"][1]["precip_prob"] == pytest.approx(0.45)
    assert second.json()["cache_hit"] is True
    assert len(seen) == 1
    assert seen[0].url.params["latitude"] == "48.8566"


@pytest.mark.asyncio
async def test_weather_for_unknown_city_returns_404(api_client: httpx.AsyncClient) -> None:
    use_upstream(upstream)

    response = await api_client.get(f"/external/cities/{uuid.uuid4()}/weather")

    assert response.status_code == 404
    assert response.json()["detail"] == "City not found."


@pytest.mark.asyncio
async def test_geocode_without_match_returns_404(api_client: httpx.AsyncClient) -> None:
    use_upstream(upstream)

    response = await api_client.get("/external/geocode", params={"city": "Nowhere"})

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_upstream_failure_returns_502(
    api_client: httpx.AsyncClient, catalog: Any
) -> None:
    seen = use_upstream(lambda request: httpx.Response(503))

    response = await api_client.get(f"/external/cities/{catalog.city.city_id}/weather")
    retry = await api_client.get(f"/external/cities/{catalog.city.city_id}/weather")

    assert response.status_code == 502
    assert retry.status_code == 502
    assert len(seen) == 2
