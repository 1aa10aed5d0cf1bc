"""Country facts adapter using the REST Countries API (keyless)."""

from typing import Any

import httpx

from backend.app.models.external import CountryInfo


def _parse_country(item: dict[str, Any]) -> CountryInfo:
    name = item.get("name", {})
    currencies = {
        code: currency.get("name", code)
        for code, currency in (item.get("currencies") or {}).items()
    }
    return CountryInfo(
        name=name.get("common", ""),
        official_name=name.get("official", name.get("common", "")),
        capital=item.get("capital") or [],
        region=item.get("region"),
        population=item.get("population"),
        currencies=currencies,
        languages=sorted((item.get("languages") or {}).values()),
        timezones=item.get("timezones") or [],
        flag_url=(item.get("flags") or {}).get("png"),
    )


async def fetch_country(
    country_name: str,
    base_url: str = "https://restcountries.com/v3.1",
    client: httpx.AsyncClient | None = None,
    timeout: float = 4.0,
) -> CountryInfo | None:
    """Look up a country by its full name.

    Args:
        country_name: Common or official country name
        base_url: REST Countries API base URL
        client: Optional httpx client (for testing with mocks)
        timeout: Request timeout in seconds when no client is given

    Returns:
        CountryInfo, or None if no country has that name

    Raises:
        httpx.HTTPError: On network errors or non-404 HTTP errors
    """
    close_client = False
    if client is None:
        client = httpx.AsyncClient(timeout=timeout)
        close_client = True

    try:
        response = await client.get(
            f"{base_url}/name/{country_name}", params={"fullText": "true"}
        )
        if response.status_code == 404:
            return None
        response.raise_for_status()

        data = response.json()
        if not data:
            return None
        return _parse_country(data[0])
    finally:
        if close_client:
            await client.aclose()
