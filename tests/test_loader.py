"""Tests for the marketing dataset loader."""

import json
from pathlib import Path

import httpx
import pytest

from marketing_dashboard.exceptions import DashboardError, DataLoadError
from marketing_dashboard.ingestion import MarketingDataLoader
from marketing_dashboard.settings import DataSourceSettings

URL = "http://dashboard.test/api/marketing-data"


def _loader(handler) -> MarketingDataLoader:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return MarketingDataLoader(DataSourceSettings(url=URL), client=client)


@pytest.fixture
def payload(sample_path: Path) -> dict:
    return json.loads(sample_path.read_text(encoding="utf-8"))


class TestHttpLoad:
    """Tests for loading over HTTP."""

    def test_success(self, payload: dict) -> None:
        loader = _loader(lambda request: httpx.Response(200, json=payload))
        data = loader.load()
        assert len(data.campaigns) == 3
        assert data.company_info.name == "Desert Bloom Retail"

    def test_missing_collection_validates_empty(self, payload: dict) -> None:
        """Campaign 2 has no device_performance key."""
        data = _loader(lambda request: httpx.Response(200, json=payload)).load()
        assert data.campaigns[1].device_performance == ()

    def test_http_error_uses_error_body(self) -> None:
        loader = _loader(
            lambda request: httpx.Response(500, json={"error": "Database unavailable"})
        )
        with pytest.raises(DataLoadError, match="Database unavailable") as exc_info:
            loader.load()
        assert exc_info.value.status_code == 500
        assert exc_info.value.source == URL

    def test_http_error_without_body(self) -> None:
        loader = _loader(lambda request: httpx.Response(404, text="not found"))
        with pytest.raises(DataLoadError, match="HTTP error! status: 404"):
            loader.load()

    def test_connection_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(DataLoadError) as exc_info:
            _loader(handler).load()
        assert exc_info.value.status_code is None

    def test_invalid_json(self) -> None:
        loader = _loader(lambda request: httpx.Response(200, text="<html>oops</html>"))
        with pytest.raises(DataLoadError, match="invalid JSON"):
            loader.load()

    def test_error_payload(self) -> None:
        loader = _loader(lambda request: httpx.Response(200, json={"error": "stale cache"}))
        with pytest.raises(DataLoadError, match="stale cache"):
            loader.load()

    def test_validation_error(self, payload: dict) -> None:
        """Negative counters are rejected as a load failure, not partial data."""
        payload["campaigns"][0]["impressions"] = -5
        loader = _loader(lambda request: httpx.Response(200, json=payload))
        with pytest.raises(DataLoadError, match="Validation failed"):
            loader.load()

    def test_load_error_is_dashboard_error(self) -> None:
        loader = _loader(lambda request: httpx.Response(503))
        with pytest.raises(DashboardError):
            loader.load()


class TestFileLoad:
    """Tests for loading from a local JSON file."""

    def test_reads_sample(self, sample_path: Path) -> None:
        data = MarketingDataLoader(DataSourceSettings(path=sample_path)).load()
        assert [c.id for c in data.campaigns] == [1, 2, 3]

    def test_missing_file(self, tmp_path: Path) -> None:
        loader = MarketingDataLoader(DataSourceSettings(path=tmp_path / "missing.json"))
        with pytest.raises(DataLoadError):
            loader.load()

    def test_bad_json_file(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(DataLoadError, match="invalid JSON"):
            MarketingDataLoader(DataSourceSettings(path=path)).load()

    def test_requires_a_source(self) -> None:
        with pytest.raises(ValueError):
            MarketingDataLoader(DataSourceSettings())
