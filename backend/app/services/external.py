"""Cached external lookups - country facts, weather and geocoding."""

import httpx
from pydantic import TypeAdapter

from backend.app.adapters.countries import fetch_country
from backend.app.adapters.geocode import geocode_city
from backend.app.adapters.weather import fetch_weather
from backend.app.cache import ExternalCache, cached_fetch, make_key
from backend.app.config import Settings
from backend.app.db.models import City
from backend.app.models.external import CountryInfo, GeocodeResult, WeatherDay

_weather_days = TypeAdapter(list[WeatherDay])


class ExternalLookupService:
    """External data lookups behind a shared TTL cache.

    Args:
        cache: Cache handle
        settings: Application settings (base URLs, TTLs, timeout)
        client: Optional httpx client shared across lookups
    """

    def __init__(
        self,
        cache: ExternalCache,
        settings: Settings,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.cache = cache
        self.settings = settings
        self.client = client

    async def country(self, name: str) -> tuple[CountryInfo | None, bool]:
        """Look up country facts by name.

        Returns:
            (country or None if unknown, cache_hit)
        """

        async def fetch() -> dict | None:
            info = await fetch_country(
                name,
                base_url=self.settings.rest_countries_base_url,
                client=self.client,
                timeout=self.settings.http_timeout_seconds,
            )
            return info.model_dump(mode="json") if info else None

        value, hit = await cached_fetch(
            self.cache,
            source="countries.rest_countries",
            key=make_key("country", name=name.strip().lower()),
            ttl_seconds=self.settings.country_ttl_seconds,
            fetch=fetch,
        )
        return (CountryInfo.model_validate(value) if value else None), hit

    async def city_weather(self, city: City, days: int = 7) -> tuple[list[WeatherDay], bool]:
        """Fetch the forecast for a catalog city's coordinates.

        Raises:
            ValueError: If the city has no coordinates
        """
        if city.latitude is None or city.longitude is None:
            raise ValueError(f"City {city.name} has no coordinates")

        async def fetch() -> list:
            weather = await fetch_weather(
                city.latitude,
                city.longitude,
                days=days,
                base_url=self.settings.open_meteo_base_url,
                client=self.client,
                timeout=self.settings.http_timeout_seconds,
            )
            return _weather_days.dump_python(weather, mode="json")

        value, hit = await cached_fetch(
            self.cache,
            source="weather.open_meteo",
            key=make_key("weather", city_id=str(city.city_id), days=days),
            ttl_seconds=self.settings.weather_ttl_seconds,
            fetch=fetch,
        )
        return _weather_days.validate_python(value), hit

    async def geocode(
        self, city: str, country: str | None = None
    ) -> tuple[GeocodeResult | None, bool]:
        """Resolve a place name to coordinates.

        Returns:
            (best match or None, cache_hit)
        """

        async def fetch() -> dict | None:
            result = await geocode_city(
                city,
                country,
                base_url=self.settings.nominatim_base_url,
                user_agent=self.settings.nominatim_user_agent,
                client=self.client,
                timeout=self.settings.http_timeout_seconds,
            )
            return result.model_dump(mode="json") if result else None

        value, hit = await cached_fetch(
            self.cache,
            source="geocode.nominatim",
            key=make_key("geocode", city=city.strip().lower(), country=(country or "").lower()),
            ttl_seconds=self.settings.geocode_ttl_seconds,
            fetch=fetch,
        )
        return (GeocodeResult.model_validate(value) if value else None), hit
