"""Geocoding adapter using OpenStreetMap Nominatim."""

import httpx

from backend.app.models.external import GeocodeResult


async def geocode_city(
    city: str,
    country: str | None = None,
    base_url: str = "https://nominatim.openstreetmap.org",
    user_agent: str = "GlobeTrotter/1.0",
    client: httpx.AsyncClient | None = None,
    timeout: float = 4.0,
) -> GeocodeResult | None:
    """Resolve a city name to coordinates.

    Nominatim's usage policy requires an identifying User-Agent.

    Args:
        city: City name
        country: Optional country to disambiguate
        base_url: Nominatim base URL
        user_agent: User-Agent header sent with the request
        client: Optional httpx client (for testing with mocks)
        timeout: Request timeout in seconds when no client is given

    Returns:
        Best match, or None if nothing matched

    Raises:
        httpx.HTTPError: On network or HTTP errors
    """
    query = f"{city}, {country}" if country else city
    params: dict[str, str | int] = {
        "q": query,
        "format": "json",
        "limit": 1,
        "addressdetails": 1,
    }

    close_client = False
    if client is None:
        client = httpx.AsyncClient(timeout=timeout)
        close_client = True

    try:
        response = await client.get(
            f"{base_url}/search", params=params, headers={"User-Agent": user_agent}
        )
        response.raise_for_status()
        results = response.json()
        if not results:
            return None

        best = results[0]
        address = best.get("address") or {}
        return GeocodeResult(
            lat=float(best["lat"]),
            lon=float(best["lon"]),
            display_name=best.get("display_name", query),
            city=address.get("city") or address.get("town") or address.get("village"),
            country=address.get("country"),
        )
    finally:
        if close_client:
            await client.aclose()
