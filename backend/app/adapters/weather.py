"""Daily forecast adapter using the Open-Meteo API (keyless)."""

from datetime import date
from typing import Any

import httpx

from backend.app.models.external import WeatherDay

DAILY_FIELDS = (
    "temperature_2m_max",
    "temperature_2m_min",
    "precipitation_probability_max",
    "wind_speed_10m_max",
)

# Substituted when Open-Meteo has no value for a day
DEFAULT_HIGH_C = 20.0
DEFAULT_LOW_C = 10.0


def _or_default(value: float | None, default: float) -> float:
    return default if value is None else value


def _parse_daily(daily: dict[str, Any]) -> list[WeatherDay]:
    rows = zip(daily["time"], *(daily[field] for field in DAILY_FIELDS), strict=True)
    return [
        WeatherDay(
            date=date.fromisoformat(day),
            # Open-Meteo reports precipitation probability as a percentage
            precip_prob=_or_default(precip, 0.0) / 100.0,
            wind_kmh=_or_default(wind, 0.0),
            temp_c_high=_or_default(high, DEFAULT_HIGH_C),
            temp_c_low=_or_default(low, DEFAULT_LOW_C),
        )
        for day, high, low, precip, wind in rows
    ]


async def fetch_weather(
    lat: float,
    lon: float,
    days: int = 7,
    base_url: str = "https://api.open-meteo.com/v1/forecast",
    client: httpx.AsyncClient | None = None,
    timeout: float = 4.0,
) -> list[WeatherDay]:
    """Fetch the daily forecast for a city's coordinates, starting today.

    Args:
        lat: Latitude
        lon: Longitude
        days: Number of forecast days
        base_url: Open-Meteo forecast endpoint
        client: Optional httpx client (for testing with mocks)
        timeout: Request timeout in seconds when no client is given

    Returns:
        One WeatherDay per forecast day

    Raises:
        httpx.HTTPError: On network or HTTP errors
    """
    params: dict[str, str | float | int] = {
        "latitude": lat,
        "longitude": lon,
        "forecast_days": days,
        "daily": ",".join(DAILY_FIELDS),
        "timezone": "UTC",
    }

    close_client = False
    if client is None:
        client = httpx.AsyncClient(timeout=timeout)
        close_client = True

    try:
        response = await client.get(base_url, params=params)
        response.raise_for_status()
        return _parse_daily(response.json()["daily"])
    finally:
        if close_client:
            await client.aclose()
