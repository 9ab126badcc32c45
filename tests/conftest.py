"""Shared fixtures for the dashboard tests."""

from pathlib import Path
from collections.abc import Callable
from typing import Any

import pytest

from marketing_dashboard.models import Campaign, MarketingData
from marketing_dashboard.settings import Coordinates, DashboardSettings, DataSourceSettings

SAMPLE_DATA = Path(__file__).parent.parent / "data" / "sample_marketing_data.json"


def _make_campaign(**fields: Any) -> Campaign:
    base: dict[str, Any] = {
        "id": 1,
        "name": "Test Campaign - Instagram",
        "objective": "Conversions",
        "medium": "Instagram",
        "status": "Active",
    }
    base.update(fields)
    return Campaign.model_validate(base)


@pytest.fixture
def make_campaign() -> Callable[..., Campaign]:
    """Factory for campaigns with sensible defaults; breakdowns as plain dicts."""
    return _make_campaign


@pytest.fixture
def sample_path() -> Path:
    return SAMPLE_DATA


@pytest.fixture
def settings() -> DashboardSettings:
    """Settings pointing at the bundled sample dataset."""
    return DashboardSettings(
        data_source=DataSourceSettings(path=SAMPLE_DATA),
        region_coordinates={
            "Dubai": Coordinates(lat=25.2048, lng=55.2708),
            "Riyadh": Coordinates(lat=24.7136, lng=46.6753),
            "Doha": Coordinates(lat=25.2854, lng=51.531),
        },
    )


@pytest.fixture
def sample_data() -> MarketingData:
    return MarketingData.model_validate_json(SAMPLE_DATA.read_text(encoding="utf-8"))
