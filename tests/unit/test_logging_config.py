"""Tests for structured mutation logging and settings."""

import logging
import uuid

import pytest
from pydantic import ValidationError

from backend.app.config import Settings
from backend.app.db.context import RequestContext
from backend.app.models.common import RangeErrorKind
from backend.app.utils.logging import StructuredMutationLogger


def test_committed_mutation_logged_at_info(caplog: pytest.LogCaptureFixture) -> None:
    ctx = RequestContext(user_id=uuid.uuid4())
    trip_id = uuid.uuid4()
    caplog.set_level(logging.INFO, logger="backend.app.utils.logging")

    StructuredMutationLogger().log_mutation(
        ctx, "create_section", trip_id, "committed", section_count=3, overlapping_count=2
    )

    (record,) = caplog.records
    assert record.levelno == logging.INFO
    assert record.structured == {
        "user_id": str(ctx.user_id),
        "operation": "create_section",
        "trip_id": str(trip_id),
        "outcome": "committed",
        "section_count": 3,
        "overlapping_count": 2,
    }


def test_rejected_mutation_logged_as_warning(caplog: pytest.LogCaptureFixture) -> None:
    ctx = RequestContext(user_id=uuid.uuid4())
    caplog.set_level(logging.INFO, logger="backend.app.utils.logging")

    StructuredMutationLogger().log_mutation(
        ctx, "create_trip", None, "rejected", error_kind=RangeErrorKind.RANGE_ORDER_INVALID
    )

    (record,) = caplog.records
    assert record.levelno == logging.WARNING
    assert record.structured["trip_id"] is None
    assert record.structured["error_kind"] == "RANGE_ORDER_INVALID"


def test_settings_defaults() -> None:
    settings = Settings(_env_file=None)

    assert settings.redis_url is None
    assert settings.weather_ttl_minutes == 30
    assert settings.copy_name_suffix == " (Copy)"


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WEATHER_TTL_MINUTES", "5")
    monkeypatch.setenv("PUBLIC_TRIPS_DEFAULT_LIMIT", "7")
    monkeypatch.setenv("REDIS_URL", "redis://cache:6379/1")

    settings = Settings(_env_file=None)

    assert settings.weather_ttl_minutes == 5
    assert settings.public_trips_default_limit == 7
    assert settings.redis_url == "redis://cache:6379/1"


def test_settings_expose_ttls_in_seconds() -> None:
    settings = Settings(_env_file=None, country_ttl_hours=2, weather_ttl_minutes=5)

    assert settings.country_ttl_seconds == 7200
    assert settings.weather_ttl_seconds == 300
    assert settings.geocode_ttl_seconds == 7 * 86400


def test_settings_reject_non_positive_limits(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CITY_SEARCH_LIMIT", "0")

    with pytest.raises(ValidationError):
        Settings(_env_file=None)
