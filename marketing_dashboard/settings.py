"""Dashboard settings loaded from YAML."""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .exceptions import ConfigLoadError

DEFAULT_CONFIG_PATH = Path(__file__).parent / "config" / "dashboard.yaml"
CONFIG_ENV_VAR = "MARKETING_DASHBOARD_CONFIG"


class Coordinates(BaseModel):
    """Map position for a region."""

    model_config = ConfigDict(frozen=True)

    lat: float
    lng: float


class DataSourceSettings(BaseModel):
    """Where the marketing dataset comes from."""

    model_config = ConfigDict(frozen=True)

    url: str | None = None
    path: Path | None = None
    timeout_seconds: float = Field(default=30.0, gt=0)


class DashboardSettings(BaseModel):
    """Validated dashboard configuration."""

    model_config = ConfigDict(frozen=True)

    data_source: DataSourceSettings = DataSourceSettings()
    region_coordinates: dict[str, Coordinates] = Field(default_factory=dict)
    genders: tuple[str, ...] = ("Male", "Female")
    log_level: str = "INFO"


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        with open(path) as f:
            return yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigLoadError(f"Failed to load config from {path}: {e}") from e


def load_settings(path: Path | None = None) -> DashboardSettings:
    """Load settings from YAML.

    Resolution order: explicit path, then $MARKETING_DASHBOARD_CONFIG,
    then the bundled config/dashboard.yaml.

    Raises:
        ConfigLoadError: If the file is unreadable or fails validation.
    """
    if path is None:
        env_path = os.environ.get(CONFIG_ENV_VAR)
        path = Path(env_path) if env_path else DEFAULT_CONFIG_PATH

    raw = _read_yaml(path)
    try:
        return DashboardSettings.model_validate(raw)
    except ValidationError as e:
        raise ConfigLoadError(f"Invalid config in {path}: {e}") from e
