"""External lookup models - country facts, weather and geocoding."""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, Field


class WeatherDay(BaseModel):
    """Daily weather forecast."""

    date: date
    precip_prob: float = Field(..., ge=0, le=1)
    wind_kmh: float = Field(..., ge=0)
    temp_c_high: float
    temp_c_low: float


class CountryInfo(BaseModel):
    """Country facts useful when planning a trip."""

    name: str
    official_name: str
    capital: list[str] = Field(default_factory=list)
    region: str | None = None
    population: int | None = None
    currencies: dict[str, str] = Field(default_factory=dict)
    languages: list[str] = Field(default_factory=list)
    timezones: list[str] = Field(default_factory=list)
    flag_url: str | None = None


class GeocodeResult(BaseModel):
    """Coordinates for a place name."""

    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)
    display_name: str
    city: str | None = None
    country: str | None = None


class ExternalLookup(BaseModel):
    """Envelope for a cached external lookup."""

    source: str
    cache_hit: bool


class CountryLookup(ExternalLookup):
    country: CountryInfo


class WeatherLookup(ExternalLookup):
    city_id: UUID
    forecast: list[WeatherDay]


class GeocodeLookup(ExternalLookup):
    result: GeocodeResult
