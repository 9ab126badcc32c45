"""Marketing dataset loader.

Fetches the dataset once over HTTP (or reads it from a local JSON file) and
validates it into frozen pydantic models. Any failure is terminal for the
load cycle: no retries, no partial data.
"""

import json
from pathlib import Path
from time import perf_counter
from typing import Any

import httpx
from pydantic import ValidationError

from ..core.logging import get_logger
from ..exceptions import DataLoadError
from ..models import MarketingData
from ..settings import DataSourceSettings

logger = get_logger("ingestion.loader")


class MarketingDataLoader:
    """Loads the marketing dataset from a URL or a JSON file.

    Usage:
        loader = MarketingDataLoader(settings.data_source)
        data = loader.load()

    A `client` can be injected (tests pass one built on httpx.MockTransport).
    """

    def __init__(
        self,
        source: DataSourceSettings,
        client: httpx.Client | None = None,
    ):
        if source.path is None and not source.url:
            raise ValueError("data source needs either a path or a url")
        self.source = source
        self._client = client

    @property
    def source_label(self) -> str:
        return str(self.source.path) if self.source.path else str(self.source.url)

    def load(self) -> MarketingData:
        """Fetch and validate the full dataset.

        Raises:
            DataLoadError: On transport, HTTP, JSON, or validation failure.
        """
        start = perf_counter()
        if self.source.path is not None:
            payload = self._read_file(self.source.path)
        else:
            payload = self._fetch(self.source.url)

        data = self._validate(payload)
        logger.info(
            f"Loaded {len(data.campaigns)} campaigns",
            extra={
                "source": self.source_label,
                "row_count": len(data.campaigns),
                "duration_ms": round((perf_counter() - start) * 1000, 1),
            },
        )
        return data

    def _read_file(self, path: Path) -> Any:
        try:
            with open(path, encoding="utf-8") as f:
                return json.load(f)
        except OSError as e:
            raise DataLoadError(str(e), source=str(path)) from e
        except json.JSONDecodeError as e:
            raise DataLoadError(f"invalid JSON: {e}", source=str(path)) from e

    def _fetch(self, url: str) -> Any:
        client = self._client or httpx.Client(timeout=self.source.timeout_seconds)
        try:
            resp = client.get(url, headers={"Content-Type": "application/json"})
            resp.raise_for_status()
            return resp.json()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.error(
                f"HTTP error {status} fetching marketing data",
                extra={"source": url, "status_code": status},
            )
            raise DataLoadError(
                _error_message(e.response) or f"HTTP error! status: {status}",
                source=url,
                status_code=status,
            ) from e
        except httpx.RequestError as e:
            logger.error(f"Request failed: {e}", extra={"source": url})
            raise DataLoadError(str(e), source=url) from e
        except ValueError as e:
            raise DataLoadError(f"invalid JSON: {e}", source=url) from e
        finally:
            if self._client is None:
                client.close()

    def _validate(self, payload: Any) -> MarketingData:
        if isinstance(payload, dict) and payload.get("error"):
            raise DataLoadError(str(payload["error"]), source=self.source_label)
        try:
            return MarketingData.model_validate(payload)
        except ValidationError as e:
            raise DataLoadError(
                f"Validation failed with {e.error_count()} errors. "
                f"First error: {e.errors()[0] if e.errors() else 'N/A'}",
                source=self.source_label,
            ) from e


def _error_message(response: httpx.Response) -> str | None:
    """Pull the `error` field out of a JSON error body, if there is one."""
    if not response.headers.get("content-type", "").startswith("application/json"):
        return None
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return None
